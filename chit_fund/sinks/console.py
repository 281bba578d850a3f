"""Console sink for watching a fund while it is seeded or replayed."""

import json
from typing import Any

from chit_fund.models.base import Event
from chit_fund.models.fund import Loan
from chit_fund.sinks.serialization import format_currency, to_dict


class ConsoleSink:
    """Print loans and loan events to stdout.

    Loans and events get a one-line summary; anything else is printed as
    JSON.

    Parameters
    ----------
    currency : str
        Currency label used for loan amounts.
    max_records : int | None
        Maximum records to print per batch (None for all).
    pretty : bool
        Indent JSON output.
    """

    def __init__(
        self,
        currency: str = "Rs.",
        max_records: int | None = None,
        pretty: bool = False,
    ) -> None:
        self.currency = currency
        self.max_records = max_records
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def render(self, record: Any) -> str:
        """Single printable line (or JSON block) for one record."""
        if isinstance(record, Loan):
            return (
                f"[{record.status.value:<9}] {record.loan_id} {record.member_name}: "
                f"{format_currency(record.total_amount, self.currency)} "
                f"(recover {format_currency(record.recoverable_amount, self.currency)}, "
                f"paid {record.paid_count}/{record.term_months})"
            )
        if isinstance(record, Event):
            return f"{record.event_time.isoformat()} {record.event_type} {record.subject}"
        return json.dumps(to_dict(record), indent=2 if self.pretty else None, ensure_ascii=False, default=str)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Print a batch under an entity header."""
        shown = records if self.max_records is None else records[: self.max_records]

        print(f"-- {entity_type}: {len(records)} record(s)")
        for record in shown:
            print(self.render(record))
        if len(shown) < len(records):
            print(f"   ({len(records) - len(shown)} not shown)")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print per-entity totals."""
        print("-- totals")
        for entity_type, count in sorted(self._counts.items()):
            print(f"   {entity_type}: {count}")
