"""Loan request and repayment generators."""

from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from chit_fund.generators.base import BaseGenerator
from chit_fund.models.fund import Loan, LoanRequest


class LoanRequestGenerator(BaseGenerator):
    """Generate emergency loan requests as a manager would enter them."""

    # Requested principal range (thousands of rupees)
    AMOUNT_RANGE = (5, 100)
    TERM_OPTIONS = [6, 7, 8, 9, 10, 11, 12]

    def generate(self, member_id: str, issue_date: date | None = None) -> LoanRequest:
        """Generate a loan request for a member.

        Amounts are whole thousands and the issue date falls within the
        last year unless given.
        """
        if issue_date is None:
            issue_date = date.today() - timedelta(days=random.randint(0, 365))

        return LoanRequest(
            member_id=member_id,
            total_amount=Decimal(random.randint(*self.AMOUNT_RANGE) * 1000),
            term_months=random.choice(self.TERM_OPTIONS),
            issue_date=issue_date,
        )

    def payable_installments(
        self,
        loan: Loan,
        as_of: date,
        on_time_rate: float = 0.85,
    ) -> list[tuple[str, datetime]]:
        """Pick installments a member would have paid by ``as_of``.

        Each due installment is paid with probability ``on_time_rate``;
        the first missed one stops the run, as members repay in order.

        Returns
        -------
        list[tuple[str, datetime]]
            ``(installment_id, paid_at)`` pairs, oldest first.
        """
        payments = []
        for ins in loan.installments:
            if ins.paid:
                continue
            if ins.due_date > as_of or random.random() > on_time_rate:
                break
            paid_on = ins.due_date - timedelta(days=random.randint(0, 5))
            paid_at = datetime.combine(paid_on, time(hour=random.randint(9, 20)), tzinfo=timezone.utc)
            payments.append((ins.installment_id, paid_at))
        return payments
