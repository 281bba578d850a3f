"""Enumeration types for chit fund entities."""

from enum import Enum


class MemberRole(str, Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class MemberStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LoanStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class ResidualPolicy(str, Enum):
    """How the rounding residual of an installment schedule is handled.

    NONE keeps every installment at the rounded amount, so the schedule
    may sum to slightly more or less than the recoverable amount.
    FINAL_INSTALLMENT lets the last installment absorb the difference.
    """

    NONE = "NONE"
    FINAL_INSTALLMENT = "FINAL_INSTALLMENT"


class LoanEventType(str, Enum):
    ISSUED = "loan.issued"
    INSTALLMENT_PAID = "installment.paid"
    COMPLETED = "loan.completed"
