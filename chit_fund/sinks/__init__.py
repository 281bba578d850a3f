"""Output sinks for exporting fund records and loan events."""

from chit_fund.sinks.console import ConsoleSink
from chit_fund.sinks.json_file import JsonFileSink
from chit_fund.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
