"""Loan issuance and installment payment engine."""

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable

from chit_fund.engine.schedule import build_schedule, installment_amounts, split_principal
from chit_fund.engine.validation import parse_amount, parse_issue_date, parse_member_id, parse_term
from chit_fund.exceptions import AlreadyPaidError, InstallmentNotFoundError, InvalidMemberError
from chit_fund.logging import loan_context
from chit_fund.models.fund import Loan, LoanPreview, LoanStatus
from chit_fund.models.fund.enums import ResidualPolicy

logger = logging.getLogger(__name__)


def _uuid_hex() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LoanEngine:
    """Issue loans and record installment payments.

    The engine holds no loans. Every operation takes and returns ``Loan``
    values; persistence and the manager capability check belong to the
    caller (see ``LoanService``).

    Parameters
    ----------
    rounding_unit : Decimal
        Granularity installment amounts are rounded to (default whole units).
    residual_policy : ResidualPolicy
        Whether the final installment absorbs the rounding residual.
    id_factory : Callable[[], str] | None
        Source of loan and installment ids (default: random UUID hex).
    clock : Callable[[], datetime] | None
        Source of payment timestamps (default: current UTC time).
    """

    def __init__(
        self,
        rounding_unit: Decimal = Decimal("1"),
        residual_policy: ResidualPolicy = ResidualPolicy.NONE,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.rounding_unit = rounding_unit
        self.residual_policy = residual_policy
        self._id_factory = id_factory or _uuid_hex
        self._clock = clock or _utc_now

    def preview(self, total_amount: object, term_months: object) -> LoanPreview:
        """Compute the split and installment amount without issuing anything."""
        amount = parse_amount(total_amount)
        term = parse_term(term_months)
        recoverable, waiver = split_principal(amount)
        amounts = installment_amounts(recoverable, term, self.rounding_unit, self.residual_policy)

        return LoanPreview(
            total_amount=amount,
            recoverable_amount=recoverable,
            waiver_amount=waiver,
            term_months=term,
            installment_amount=amounts[0],
            scheduled_amount=sum(amounts, Decimal("0")),
        )

    def issue_loan(
        self,
        member_id: str,
        total_amount: object,
        term_months: object,
        issue_date: date | str,
        member_name: str | None = None,
        resolve_member: Callable[[str], str | None] | None = None,
    ) -> Loan:
        """Issue a loan with its full installment schedule.

        Parameters
        ----------
        member_id : str
            Borrowing member.
        total_amount : object
            Principal; anything ``parse_amount`` accepts.
        term_months : object
            Number of monthly installments; anything ``parse_term`` accepts.
        issue_date : date | str
            Issue date; due dates fall 1..term months after it.
        member_name : str | None
            Display name stored on the loan.
        resolve_member : Callable[[str], str | None] | None
            Looks up the member's display name; returning None rejects the
            member. Takes precedence over ``member_name``.

        Returns
        -------
        Loan
            A new ACTIVE loan.

        Raises
        ------
        InvalidMemberError, InvalidAmountError, InvalidTermError, InvalidDateError
            On invalid input. Nothing is created in that case.
        """
        member_id = parse_member_id(member_id)
        if resolve_member is not None:
            member_name = resolve_member(member_id)
            if member_name is None:
                raise InvalidMemberError(f"Member {member_id} not found")

        amount = parse_amount(total_amount)
        term = parse_term(term_months)
        issued_on = parse_issue_date(issue_date)

        recoverable, waiver = split_principal(amount)
        amounts = installment_amounts(recoverable, term, self.rounding_unit, self.residual_policy)

        loan = Loan(
            loan_id=self._id_factory(),
            member_id=member_id,
            member_name=member_name or "Unknown",
            total_amount=amount,
            recoverable_amount=recoverable,
            waiver_amount=waiver,
            issue_date=issued_on,
            term_months=term,
            installments=build_schedule(issued_on, amounts, self._id_factory),
        )

        logger.debug(
            "Issued loan %s: total=%s recoverable=%s waiver=%s term=%d installment=%s",
            loan.loan_id,
            amount,
            recoverable,
            waiver,
            term,
            amounts[0],
            extra=loan_context(loan.loan_id, member_id),
        )
        return loan

    def record_payment(
        self,
        loan: Loan,
        installment_id: str,
        paid_at: datetime | None = None,
    ) -> Loan:
        """Mark one installment paid and return the updated loan.

        The given loan is left untouched. Paying the last open installment
        turns the loan COMPLETED; nothing turns it back.

        Raises
        ------
        InstallmentNotFoundError
            If the installment does not belong to the loan.
        AlreadyPaidError
            If the installment was already paid.
        """
        target = loan.get_installment(installment_id)
        if target is None:
            raise InstallmentNotFoundError(
                f"Installment {installment_id} not found on loan {loan.loan_id}"
            )
        if target.paid:
            raise AlreadyPaidError(
                f"Installment {installment_id} of loan {loan.loan_id} was already paid "
                f"on {target.payment_date.isoformat() if target.payment_date else 'an unknown date'}"
            )

        settled = replace(target, paid=True, payment_date=paid_at or self._clock())
        updated = replace(
            loan,
            installments=tuple(
                settled if ins.installment_id == installment_id else ins
                for ins in loan.installments
            ),
            version=loan.version + 1,
        )

        context = loan_context(loan.loan_id, loan.member_id, installment_id)
        logger.debug(
            "Installment %d/%d of loan %s paid",
            settled.installment_number,
            loan.term_months,
            loan.loan_id,
            extra=context,
        )
        if updated.status == LoanStatus.COMPLETED:
            logger.debug("Loan %s completed", loan.loan_id, extra=context)

        return updated
