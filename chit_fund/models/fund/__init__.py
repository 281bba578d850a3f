"""Chit fund domain models."""

from chit_fund.models.fund.enums import (
    LoanEventType,
    LoanStatus,
    MemberRole,
    MemberStatus,
    ResidualPolicy,
)
from chit_fund.models.fund.loan import Installment, Loan, LoanPreview, LoanRequest
from chit_fund.models.fund.member import Deposit, Member

__all__ = [
    "Deposit",
    "Installment",
    "Loan",
    "LoanEventType",
    "LoanPreview",
    "LoanRequest",
    "LoanStatus",
    "Member",
    "MemberRole",
    "MemberStatus",
    "ResidualPolicy",
]
