"""Pytest configuration and fixtures."""

import itertools
from datetime import date, datetime, timezone

import pytest

from chit_fund.engine import LoanEngine
from chit_fund.models.fund import Loan, Member, MemberRole, MemberStatus
from chit_fund.store import FundDataStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fixed_now() -> datetime:
    """Payment timestamp used by the engine clock."""
    return datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def engine(fixed_now: datetime) -> LoanEngine:
    """Engine with sequential ids and a frozen clock."""
    counter = itertools.count(1)
    return LoanEngine(id_factory=lambda: f"id-{next(counter):03d}", clock=lambda: fixed_now)


@pytest.fixture
def sample_loan(engine: LoanEngine) -> Loan:
    """Six-month loan of 100 (recoverable 70, installments of 12)."""
    return engine.issue_loan("m1", 100, 6, date(2024, 1, 15), member_name="Ayesha Khan")


@pytest.fixture
def manager() -> Member:
    """Approved manager."""
    return Member(
        member_id="mgr-001",
        name="Fund Manager",
        email="manager@fund.test",
        role=MemberRole.ADMIN,
        status=MemberStatus.APPROVED,
    )


@pytest.fixture
def member() -> Member:
    """Approved ordinary member."""
    return Member(
        member_id="m1",
        name="Ayesha Khan",
        email="ayesha@fund.test",
        status=MemberStatus.APPROVED,
    )


@pytest.fixture
def store(manager: Member, member: Member) -> FundDataStore:
    """Store holding the manager and one approved member."""
    store = FundDataStore()
    store.add_member(manager)
    store.add_member(member)
    return store
