"""JSON file sink for exporting fund records to files."""

import json
import logging
from pathlib import Path
from typing import Any

from chit_fund.exceptions import SinkError
from chit_fund.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Output records to JSON files, one file per entity type.

    Batches for the same entity type accumulate in memory and the file is
    rewritten on every batch, so event topics fed one record at a time
    still end up as a single JSON array.
    """

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._records: dict[str, list[dict]] = {}

    def file_path(self, entity_type: str) -> Path:
        """File an entity type is written to (dots become underscores)."""
        return self.output_dir / f"{entity_type.replace('.', '_')}.json"

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Append a batch of records and rewrite the entity's JSON file."""
        data = self._records.setdefault(entity_type, [])
        data.extend(to_dict(record) for record in records)

        try:
            with open(self.file_path(entity_type), "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as e:
            raise SinkError(f"Could not write {entity_type} records: {e}") from e

    def close(self) -> None:
        """Log summary."""
        logger.info("JSON files written to: %s", self.output_dir)
        for entity_type, records in self._records.items():
            logger.info("  %s: %d records", entity_type, len(records))
