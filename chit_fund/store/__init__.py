"""In-memory data stores for maintaining entity relationships."""

from chit_fund.store.fund import FundDataStore

__all__ = ["FundDataStore"]
