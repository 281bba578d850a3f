"""Loan models for the fund."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from chit_fund.models.fund.enums import LoanStatus


@dataclass(frozen=True)
class Installment:
    """One scheduled repayment of a loan's recoverable share."""

    installment_id: str
    installment_number: int  # 1, 2, 3, ...
    due_date: date
    amount: Decimal
    paid: bool = False
    payment_date: datetime | None = None  # Set only once paid


@dataclass(frozen=True)
class Loan:
    """Emergency loan with its installment schedule.

    Loans are values: recording a payment produces a new ``Loan`` with a
    bumped ``version`` instead of changing this one. ``status`` is derived
    from the installments and cannot be assigned.
    """

    loan_id: str
    member_id: str
    total_amount: Decimal  # Principal issued
    recoverable_amount: Decimal  # 70% of principal
    waiver_amount: Decimal  # 30% of principal, never collected
    issue_date: date
    term_months: int
    installments: tuple[Installment, ...]
    member_name: str = "Unknown"
    version: int = 0

    @property
    def status(self) -> LoanStatus:
        if all(ins.paid for ins in self.installments):
            return LoanStatus.COMPLETED
        return LoanStatus.ACTIVE

    @property
    def paid_count(self) -> int:
        return sum(1 for ins in self.installments if ins.paid)

    @property
    def scheduled_amount(self) -> Decimal:
        """Sum of all installment amounts."""
        return sum((ins.amount for ins in self.installments), Decimal("0"))

    @property
    def recovered_amount(self) -> Decimal:
        """Sum of paid installment amounts."""
        return sum((ins.amount for ins in self.installments if ins.paid), Decimal("0"))

    @property
    def outstanding_amount(self) -> Decimal:
        return self.scheduled_amount - self.recovered_amount

    @property
    def next_due_installment(self) -> Installment | None:
        """Earliest unpaid installment, or None once the loan is completed."""
        for ins in self.installments:
            if not ins.paid:
                return ins
        return None

    def get_installment(self, installment_id: str) -> Installment | None:
        for ins in self.installments:
            if ins.installment_id == installment_id:
                return ins
        return None


@dataclass(frozen=True)
class LoanPreview:
    """Split and installment amount shown before a loan is issued."""

    total_amount: Decimal
    recoverable_amount: Decimal
    waiver_amount: Decimal
    term_months: int
    installment_amount: Decimal
    scheduled_amount: Decimal

    @property
    def residual(self) -> Decimal:
        """Scheduled minus recoverable; non-zero when rounding does not divide evenly."""
        return self.scheduled_amount - self.recoverable_amount


@dataclass(frozen=True)
class LoanRequest:
    """Raw loan request as collected from a manager."""

    member_id: str
    total_amount: object
    term_months: object
    issue_date: object
