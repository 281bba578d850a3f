"""Fund services built on the engine and store."""

from chit_fund.services.loans import LoanService
from chit_fund.services.reporting import FundSummary, summarize_fund

__all__ = ["FundSummary", "LoanService", "summarize_fund"]
