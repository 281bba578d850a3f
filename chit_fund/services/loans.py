"""Manager-facing loan operations around the pure engine."""

import logging
import threading
import uuid
from datetime import date, datetime, timezone
from typing import Any, Protocol

from chit_fund.config import FundConfig
from chit_fund.engine import LoanEngine
from chit_fund.engine.validation import parse_term
from chit_fund.exceptions import (
    AuthorizationError,
    EntityNotFoundError,
    InvalidMemberError,
    InvalidTermError,
    SinkError,
)
from chit_fund.logging import loan_context
from chit_fund.models.base import Event
from chit_fund.models.fund import Installment, Loan, LoanEventType, LoanStatus, Member
from chit_fund.sinks.serialization import installment_to_record, loan_to_record
from chit_fund.store import FundDataStore

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def write_batch(self, entity_type: str, records: list[Any]) -> None: ...


class LoanService:
    """Issue loans and record payments on behalf of a manager.

    Owns what the engine leaves to its caller: the manager check, the
    manager term range, member eligibility, persistence and event
    publication. Payments on the same loan are serialized through a
    per-loan lock and written with the loan's version as a guard, so an
    installment is paid at most once even with concurrent managers.

    Events are published after the write is committed. A sink failure is
    logged and does not undo or fail the operation.

    Parameters
    ----------
    store : FundDataStore
        Where members and loans live.
    engine : LoanEngine | None
        Engine to use (default: built from ``config.policy``).
    config : FundConfig | None
        Fund configuration (default: ``FundConfig()``).
    sink : Sink | None
        Receives loan lifecycle events on ``config.events_topic``.
    """

    def __init__(
        self,
        store: FundDataStore,
        engine: LoanEngine | None = None,
        config: FundConfig | None = None,
        sink: Sink | None = None,
    ) -> None:
        self.store = store
        self.config = config or FundConfig()
        self.engine = engine or LoanEngine(
            rounding_unit=self.config.policy.rounding_unit,
            residual_policy=self.config.policy.residual_policy,
        )
        self.sink = sink
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def issue_loan(
        self,
        actor: Member,
        member_id: str,
        total_amount: object,
        term_months: object,
        issue_date: date | str | None = None,
    ) -> Loan:
        """Issue and store a loan for an approved member.

        Raises
        ------
        AuthorizationError
            If ``actor`` is not a manager.
        InvalidTermError
            If the term is outside the manager range.
        InvalidMemberError
            If the member is unknown or not approved.
        """
        self._require_manager(actor)

        term = parse_term(term_months)
        policy = self.config.policy
        if not policy.min_term_months <= term <= policy.max_term_months:
            raise InvalidTermError(
                f"Loan term must be between {policy.min_term_months} and "
                f"{policy.max_term_months} months, got {term}"
            )

        loan = self.engine.issue_loan(
            member_id,
            total_amount,
            term,
            issue_date if issue_date is not None else date.today(),
            resolve_member=self._approved_member_name,
        )
        self.store.add_loan(loan)

        logger.info(
            "Loan %s issued to %s: %s over %d months",
            loan.loan_id,
            loan.member_name,
            loan.total_amount,
            loan.term_months,
            extra=loan_context(loan.loan_id, loan.member_id, actor_id=actor.member_id),
        )
        self._publish(LoanEventType.ISSUED, loan, loan_to_record(loan), actor)
        return loan

    def record_payment(
        self,
        actor: Member,
        loan_id: str,
        installment_id: str,
        paid_at: datetime | None = None,
    ) -> Loan:
        """Mark an installment paid and store the updated loan.

        ``paid_at`` backdates the payment; it defaults to now.

        Raises
        ------
        AuthorizationError
            If ``actor`` is not a manager.
        EntityNotFoundError
            If the loan does not exist.
        InstallmentNotFoundError, AlreadyPaidError
            From the engine.
        ConcurrentModificationError
            If the loan was written outside this service meanwhile.
        """
        self._require_manager(actor)

        with self._lock_for(loan_id):
            loan = self.store.get_loan(loan_id)
            updated = self.engine.record_payment(loan, installment_id, paid_at)
            self.store.save_loan(updated, expected_version=loan.version)
            if updated.status == LoanStatus.COMPLETED:
                # completed loans accept no further payments
                with self._locks_guard:
                    self._locks.pop(loan_id, None)

        installment = updated.get_installment(installment_id)
        logger.info(
            "Installment %s of loan %s paid (%d/%d)",
            installment_id,
            loan_id,
            updated.paid_count,
            updated.term_months,
            extra=loan_context(loan_id, updated.member_id, installment_id, actor_id=actor.member_id),
        )
        self._publish(
            LoanEventType.INSTALLMENT_PAID,
            updated,
            self._payment_data(updated, installment),
            actor,
        )
        if loan.status == LoanStatus.ACTIVE and updated.status == LoanStatus.COMPLETED:
            logger.info("Loan %s completed", loan_id, extra=loan_context(loan_id, updated.member_id))
            self._publish(LoanEventType.COMPLETED, updated, loan_to_record(updated), actor)

        return updated

    def visible_loans(self, actor: Member) -> list[Loan]:
        """Loans the actor may see: all of them for managers, own loans otherwise."""
        if actor.is_manager:
            return list(self.store.loans.values())
        return self.store.get_member_loans(actor.member_id)

    def _approved_member_name(self, member_id: str) -> str | None:
        try:
            member = self.store.get_member(member_id)
        except EntityNotFoundError:
            return None
        if not member.is_approved:
            raise InvalidMemberError(
                f"Member {member_id} is {member.status.value.lower()}, only approved members may borrow"
            )
        return member.name

    @staticmethod
    def _require_manager(actor: Member) -> None:
        if not actor.is_manager:
            raise AuthorizationError(f"Member {actor.member_id} is not a manager")

    def _lock_for(self, loan_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(loan_id, threading.Lock())

    @staticmethod
    def _payment_data(loan: Loan, installment: Installment | None) -> dict[str, Any]:
        data: dict[str, Any] = {
            "loanId": loan.loan_id,
            "memberId": loan.member_id,
            "status": loan.status.value,
            "paidCount": loan.paid_count,
            "termMonths": loan.term_months,
        }
        if installment is not None:
            data["installment"] = installment_to_record(installment)
        return data

    def _publish(
        self,
        event_type: LoanEventType,
        loan: Loan,
        data: dict[str, Any],
        actor: Member,
    ) -> None:
        if self.sink is None:
            return
        event = Event(
            event_id=uuid.uuid4().hex,
            event_type=event_type.value,
            event_time=datetime.now(timezone.utc),
            source=self.config.source,
            subject=loan.loan_id,
            data=data,
            metadata={"actor_id": actor.member_id, "version": loan.version},
        )
        try:
            self.sink.write_batch(self.config.events_topic, [event])
        except SinkError:
            logger.exception(
                "Could not publish %s for loan %s",
                event.event_type,
                loan.loan_id,
                extra=loan_context(loan.loan_id, loan.member_id, event_type=event.event_type),
            )
