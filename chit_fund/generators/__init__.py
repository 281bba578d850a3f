"""Synthetic fund data generators."""

from chit_fund.generators.loans import LoanRequestGenerator
from chit_fund.generators.members import DepositGenerator, MemberGenerator

__all__ = ["DepositGenerator", "LoanRequestGenerator", "MemberGenerator"]
