"""Loan issuance and amortization engine."""

from chit_fund.engine.loan import LoanEngine
from chit_fund.engine.schedule import (
    RECOVERABLE_SHARE,
    WAIVER_SHARE,
    add_months,
    due_dates,
    installment_amounts,
    round_half_up,
    split_principal,
)

__all__ = [
    "LoanEngine",
    "RECOVERABLE_SHARE",
    "WAIVER_SHARE",
    "add_months",
    "due_dates",
    "installment_amounts",
    "round_half_up",
    "split_principal",
]
