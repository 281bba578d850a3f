"""Tests for data generators."""

from datetime import date, timedelta
from decimal import Decimal

from chit_fund.engine import LoanEngine
from chit_fund.generators import DepositGenerator, LoanRequestGenerator, MemberGenerator
from chit_fund.models.fund import Loan, MemberRole, MemberStatus


class TestMemberGenerator:
    """Tests for MemberGenerator."""

    def test_generate_member(self, seed: int) -> None:
        member = MemberGenerator(seed=seed).generate()

        assert member.member_id
        assert member.name
        assert "@" in member.email
        assert member.role == MemberRole.MEMBER
        assert member.status in list(MemberStatus)
        assert member.created_at is not None

    def test_manager_always_approved(self, seed: int) -> None:
        gen = MemberGenerator(seed=seed)
        managers = [gen.generate(role=MemberRole.ADMIN, status=MemberStatus.PENDING) for _ in range(5)]

        assert all(m.is_manager and m.is_approved for m in managers)

    def test_generate_batch(self, seed: int) -> None:
        members = list(MemberGenerator(seed=seed).generate_batch(20, status=MemberStatus.APPROVED))

        assert len(members) == 20
        assert len({m.member_id for m in members}) == 20
        assert all(m.status == MemberStatus.APPROVED for m in members)

    def test_seed_reproducible(self, seed: int) -> None:
        first = MemberGenerator(seed=seed).generate()
        second = MemberGenerator(seed=seed).generate()

        assert first.name == second.name
        assert first.member_id == second.member_id


class TestDepositGenerator:
    """Tests for DepositGenerator."""

    def test_one_deposit_per_month(self, seed: int) -> None:
        deposits = list(
            DepositGenerator(seed=seed).generate_for_member("m1", date(2024, 1, 31), 12, skip_rate=0.0)
        )

        assert len(deposits) == 12
        assert deposits[1].payment_date == date(2024, 2, 29)
        assert all(d.member_id == "m1" for d in deposits)
        assert all(d.amount > 0 and d.amount % 100 == 0 for d in deposits)

    def test_skipped_months(self, seed: int) -> None:
        deposits = list(
            DepositGenerator(seed=seed).generate_for_member("m1", date(2024, 1, 1), 12, skip_rate=1.0)
        )
        assert deposits == []


class TestLoanRequestGenerator:
    """Tests for LoanRequestGenerator."""

    def test_generate_request(self, seed: int) -> None:
        request = LoanRequestGenerator(seed=seed).generate("m1")

        assert request.member_id == "m1"
        assert request.total_amount % 1000 == 0
        assert Decimal("5000") <= request.total_amount <= Decimal("100000")
        assert request.term_months in LoanRequestGenerator.TERM_OPTIONS
        assert date.today() - timedelta(days=365) <= request.issue_date <= date.today()

    def test_fixed_issue_date(self, seed: int) -> None:
        request = LoanRequestGenerator(seed=seed).generate("m1", issue_date=date(2024, 1, 15))
        assert request.issue_date == date(2024, 1, 15)

    def test_request_issues_cleanly(self, seed: int, engine: LoanEngine) -> None:
        request = LoanRequestGenerator(seed=seed).generate("m1")
        loan = engine.issue_loan(
            request.member_id, request.total_amount, request.term_months, request.issue_date
        )
        assert len(loan.installments) == request.term_months

    def test_payable_installments_all_on_time(self, seed: int, sample_loan: Loan) -> None:
        payments = LoanRequestGenerator(seed=seed).payable_installments(
            sample_loan, date(2024, 4, 20), on_time_rate=1.0
        )

        assert [ins_id for ins_id, _ in payments] == [
            ins.installment_id for ins in sample_loan.installments[:3]
        ]
        for (_, paid_at), ins in zip(payments, sample_loan.installments):
            assert ins.due_date - timedelta(days=5) <= paid_at.date() <= ins.due_date

    def test_payable_installments_none_due(self, seed: int, sample_loan: Loan) -> None:
        payments = LoanRequestGenerator(seed=seed).payable_installments(sample_loan, date(2024, 1, 20))
        assert payments == []

    def test_payable_installments_skip_paid(
        self, seed: int, engine: LoanEngine, sample_loan: Loan
    ) -> None:
        loan = engine.record_payment(sample_loan, sample_loan.installments[0].installment_id)
        payments = LoanRequestGenerator(seed=seed).payable_installments(
            loan, date(2024, 12, 31), on_time_rate=1.0
        )
        assert len(payments) == 5
