"""Member and deposit models for the fund."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from chit_fund.models.fund.enums import MemberRole, MemberStatus


@dataclass
class Member:
    """Fund member profile."""

    member_id: str
    name: str
    email: str
    role: MemberRole = MemberRole.MEMBER
    status: MemberStatus = MemberStatus.PENDING
    created_at: datetime | None = None

    @property
    def is_manager(self) -> bool:
        """Managers may issue loans and record payments."""
        return self.role == MemberRole.ADMIN

    @property
    def is_approved(self) -> bool:
        return self.status == MemberStatus.APPROVED


@dataclass
class Deposit:
    """Member contribution to the fund."""

    deposit_id: str
    member_id: str
    amount: Decimal
    payment_date: date
    entry_date: datetime = field(default_factory=datetime.now)
    notes: str = ""
