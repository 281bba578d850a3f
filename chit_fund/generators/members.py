"""Member and deposit generators."""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterator

from chit_fund.engine import add_months
from chit_fund.generators.base import BaseGenerator
from chit_fund.models.fund import Deposit, Member, MemberRole, MemberStatus


class MemberGenerator(BaseGenerator):
    """Generate synthetic fund members."""

    STATUSES = list(MemberStatus)
    STATUS_WEIGHTS = [0.10, 0.85, 0.05]

    def generate(
        self,
        role: MemberRole = MemberRole.MEMBER,
        status: MemberStatus | None = None,
    ) -> Member:
        """Generate a single member.

        Parameters
        ----------
        role : MemberRole
            Member role.
        status : MemberStatus | None
            Fixed status; drawn from ``STATUS_WEIGHTS`` when None.
            Managers are always approved.

        Returns
        -------
        Member
            Generated member.
        """
        if role == MemberRole.ADMIN:
            status = MemberStatus.APPROVED
        elif status is None:
            status = random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]

        return Member(
            member_id=self.fake.uuid4(),
            name=self.fake.name(),
            email=self.fake.email(),
            role=role,
            status=status,
            created_at=datetime.now() - timedelta(days=random.randint(30, 3 * 365)),
        )

    def generate_batch(self, count: int, status: MemberStatus | None = None) -> Iterator[Member]:
        """Generate ``count`` ordinary members."""
        for _ in range(count):
            yield self.generate(status=status)


class DepositGenerator(BaseGenerator):
    """Generate monthly member contributions."""

    # Typical monthly contribution range (whole rupees)
    AMOUNT_RANGE = (500, 5000)

    def generate_for_member(
        self,
        member_id: str,
        start: date,
        months: int,
        skip_rate: float = 0.1,
    ) -> Iterator[Deposit]:
        """Generate one deposit per month, occasionally skipping a month.

        Parameters
        ----------
        member_id : str
            Contributing member.
        start : date
            Date of the first contribution.
        months : int
            Number of months covered.
        skip_rate : float
            Probability that a month has no deposit.

        Yields
        ------
        Deposit
            Generated deposits, oldest first.
        """
        amount = Decimal(random.randint(*self.AMOUNT_RANGE) // 100 * 100)
        for i in range(months):
            if random.random() < skip_rate:
                continue
            payment_date = add_months(start, i)
            yield Deposit(
                deposit_id=self.fake.uuid4(),
                member_id=member_id,
                amount=amount,
                payment_date=payment_date,
                entry_date=datetime.combine(payment_date, datetime.min.time())
                + timedelta(hours=random.randint(9, 20)),
                notes=random.choice(["", "", "Cash", "Bank transfer", "Paid late"]),
            )
