"""Fund data store with referential integrity."""

import threading
from dataclasses import dataclass, field
from datetime import datetime

from chit_fund.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from chit_fund.models.fund import Deposit, Loan, Member, MemberStatus


@dataclass
class FundDataStore:
    """In-memory store for members, deposits and loans.

    Stands in for the backend tables. Loans are replaced wholesale on every
    write and guarded by their ``version``: ``save_loan`` only succeeds when
    the caller read the version currently stored.
    """

    # Primary entities
    members: dict[str, Member] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)

    # Ledger
    deposits: list[Deposit] = field(default_factory=list)

    # Relationship indexes
    _member_loans: dict[str, list[str]] = field(default_factory=dict)
    _member_deposits: dict[str, list[int]] = field(default_factory=dict)

    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def add_member(self, member: Member) -> None:
        """Add a member to the store."""
        if member.created_at is None:
            member.created_at = datetime.now()
        with self._lock:
            self.members[member.member_id] = member
            self._member_loans.setdefault(member.member_id, [])
            self._member_deposits.setdefault(member.member_id, [])

    def set_member_status(self, member_id: str, status: MemberStatus) -> Member:
        """Approve or reject a member."""
        member = self.get_member(member_id)
        member.status = status
        return member

    def add_deposit(self, deposit: Deposit) -> None:
        """Add a deposit to the ledger."""
        with self._lock:
            if deposit.member_id not in self.members:
                raise ReferentialIntegrityError(f"Member {deposit.member_id} not found")

            idx = len(self.deposits)
            self.deposits.append(deposit)
            self._member_deposits[deposit.member_id].append(idx)

    def add_loan(self, loan: Loan) -> None:
        """Add a newly issued loan to the store."""
        with self._lock:
            if loan.member_id not in self.members:
                raise ReferentialIntegrityError(f"Member {loan.member_id} not found")
            if loan.loan_id in self.loans:
                raise InvalidEntityStateError(f"Loan {loan.loan_id} already exists")

            self.loans[loan.loan_id] = loan
            self._member_loans[loan.member_id].append(loan.loan_id)

    def save_loan(self, loan: Loan, expected_version: int) -> None:
        """Replace a stored loan if nobody else changed it first.

        Parameters
        ----------
        loan : Loan
            Updated loan.
        expected_version : int
            Version the caller based its update on.

        Raises
        ------
        EntityNotFoundError
            If the loan was never added.
        ConcurrentModificationError
            If the stored version is no longer ``expected_version``.
        """
        with self._lock:
            current = self.get_loan(loan.loan_id)
            if current.version != expected_version:
                raise ConcurrentModificationError(
                    f"Loan {loan.loan_id} is at version {current.version}, "
                    f"expected {expected_version}"
                )
            self.loans[loan.loan_id] = loan

    # Query methods
    def get_member(self, member_id: str) -> Member:
        """Get a member by id."""
        try:
            return self.members[member_id]
        except KeyError:
            raise EntityNotFoundError(f"Member {member_id} not found") from None

    def get_loan(self, loan_id: str) -> Loan:
        """Get a loan by id."""
        try:
            return self.loans[loan_id]
        except KeyError:
            raise EntityNotFoundError(f"Loan {loan_id} not found") from None

    def get_member_loans(self, member_id: str) -> list[Loan]:
        """Get all loans for a member."""
        loan_ids = self._member_loans.get(member_id, [])
        return [self.loans[lid] for lid in loan_ids]

    def get_member_deposits(self, member_id: str) -> list[Deposit]:
        """Get all deposits for a member."""
        indices = self._member_deposits.get(member_id, [])
        return [self.deposits[i] for i in indices]

    def approved_members(self) -> list[Member]:
        """Members eligible to receive loans."""
        return [m for m in self.members.values() if m.is_approved]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "members": len(self.members),
            "approved_members": len(self.approved_members()),
            "deposits": len(self.deposits),
            "loans": len(self.loans),
            "installments": sum(len(loan.installments) for loan in self.loans.values()),
        }
