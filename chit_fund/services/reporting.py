"""Fund-wide totals for the dashboard."""

from dataclasses import dataclass
from decimal import Decimal

from chit_fund.models.fund import LoanStatus
from chit_fund.store import FundDataStore


@dataclass(frozen=True)
class FundSummary:
    """Portfolio totals across all deposits and loans."""

    total_deposits: Decimal
    total_loans_issued: Decimal
    total_recoveries: Decimal
    total_waivers: Decimal
    total_members: int
    active_loans: int
    completed_loans: int

    @property
    def current_balance(self) -> Decimal:
        """Cash in the fund: deposits minus loans issued plus recoveries."""
        return self.total_deposits - self.total_loans_issued + self.total_recoveries

    @property
    def pending_recovery(self) -> Decimal:
        """Issued money neither recovered nor waived yet."""
        return self.total_loans_issued - self.total_recoveries - self.total_waivers


def summarize_fund(store: FundDataStore) -> FundSummary:
    """Compute dashboard totals from the store.

    Recoveries count the amounts of paid installments, not the recoverable
    share, so a loan contributes only what has actually been paid back.
    """
    loans = list(store.loans.values())
    zero = Decimal("0")

    return FundSummary(
        total_deposits=sum((d.amount for d in store.deposits), zero),
        total_loans_issued=sum((loan.total_amount for loan in loans), zero),
        total_recoveries=sum((loan.recovered_amount for loan in loans), zero),
        total_waivers=sum((loan.waiver_amount for loan in loans), zero),
        total_members=len(store.approved_members()),
        active_loans=sum(1 for loan in loans if loan.status == LoanStatus.ACTIVE),
        completed_loans=sum(1 for loan in loans if loan.status == LoanStatus.COMPLETED),
    )
