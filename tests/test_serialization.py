"""Tests for serialization utilities and the backend loan record."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

import pytest

from chit_fund.engine import LoanEngine
from chit_fund.exceptions import SinkError
from chit_fund.models.fund import Loan, LoanStatus
from chit_fund.sinks.serialization import (
    format_currency,
    loan_from_record,
    loan_to_record,
    serialize_value,
    to_dict,
    to_number,
)


class _SampleEnum(str, Enum):
    VALUE_A = "VALUE_A"


@dataclass
class _SampleData:
    name: str
    amount: Decimal
    created_at: datetime


class TestToDict:
    """Tests for to_dict."""

    def test_dataclass(self) -> None:
        obj = _SampleData(name="test", amount=Decimal("100.50"), created_at=datetime(2024, 1, 1))
        result = to_dict(obj)
        assert result == {"name": "test", "amount": 100.5, "created_at": "2024-01-01T00:00:00"}

    def test_loan_uses_record_shape(self, sample_loan: Loan) -> None:
        assert to_dict(sample_loan) == loan_to_record(sample_loan)

    def test_dict_values_serialized(self) -> None:
        assert to_dict({"due": date(2024, 2, 1)}) == {"due": "2024-02-01"}

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}


class TestSerializeValue:
    """Tests for serialize_value."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("700"), 700),
            (Decimal("7000.0"), 7000),
            (Decimal("11.67"), 11.67),
            (_SampleEnum.VALUE_A, "VALUE_A"),
            (date(2024, 6, 15), "2024-06-15"),
            (datetime(2024, 6, 15, 10, 30), "2024-06-15T10:30:00"),
            ((Decimal("1"), Decimal("2")), [1, 2]),
            ("hello", "hello"),
            (None, None),
        ],
    )
    def test_values(self, value: object, expected: object) -> None:
        assert serialize_value(value) == expected

    def test_integral_decimal_becomes_int(self) -> None:
        assert isinstance(to_number(Decimal("7000.0")), int)


class TestLoanRecord:
    """Tests for loan_to_record / loan_from_record."""

    def test_record_shape(self, engine: LoanEngine) -> None:
        loan = engine.issue_loan("m1", 10000, 10, "2024-01-15", member_name="Ayesha Khan")
        record = loan_to_record(loan)

        assert record["id"] == loan.loan_id
        assert record["memberId"] == "m1"
        assert record["memberName"] == "Ayesha Khan"
        assert record["totalAmount"] == 10000
        assert record["recoverableAmount"] == 7000
        assert record["waiverAmount"] == 3000
        assert record["issueDate"] == "2024-01-15"
        assert record["termMonths"] == 10
        assert record["status"] == "ACTIVE"
        assert len(record["installments"]) == 10
        assert record["installments"][0] == {
            "id": loan.installments[0].installment_id,
            "dueDate": "2024-02-15",
            "amount": 700,
            "paid": False,
        }

    def test_payment_date_included_once_paid(self, engine: LoanEngine, sample_loan: Loan) -> None:
        paid = engine.record_payment(sample_loan, sample_loan.installments[0].installment_id)
        record = loan_to_record(paid)

        assert record["installments"][0]["paid"] is True
        assert record["installments"][0]["paymentDate"] == "2024-03-01T10:30:00+00:00"
        assert "paymentDate" not in record["installments"][1]

    def test_completed_status(self, engine: LoanEngine) -> None:
        loan = engine.issue_loan("m1", 1000, 1, "2024-01-31")
        loan = engine.record_payment(loan, loan.installments[0].installment_id)
        assert loan_to_record(loan)["status"] == "COMPLETED"

    def test_from_record_rebuilds_loan(self, engine: LoanEngine, sample_loan: Loan) -> None:
        paid = engine.record_payment(sample_loan, sample_loan.installments[0].installment_id)
        rebuilt = loan_from_record(loan_to_record(paid))

        assert rebuilt.loan_id == paid.loan_id
        assert rebuilt.total_amount == paid.total_amount
        assert rebuilt.recoverable_amount == paid.recoverable_amount
        assert [ins.due_date for ins in rebuilt.installments] == [
            ins.due_date for ins in paid.installments
        ]
        assert rebuilt.installments[0].payment_date == datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)
        assert rebuilt.paid_count == 1

    def test_from_record_derives_status(self, sample_loan: Loan) -> None:
        record = loan_to_record(sample_loan)
        record["status"] = "COMPLETED"

        assert loan_from_record(record).status == LoanStatus.ACTIVE

    def test_from_record_missing_field(self, sample_loan: Loan) -> None:
        record = loan_to_record(sample_loan)
        del record["issueDate"]

        with pytest.raises(SinkError):
            loan_from_record(record)

    def test_from_record_bad_amount(self, sample_loan: Loan) -> None:
        record = loan_to_record(sample_loan)
        record["totalAmount"] = "lots"

        with pytest.raises(SinkError):
            loan_from_record(record)

    @pytest.mark.parametrize("paid", ["false", "true", 1, None])
    def test_from_record_paid_must_be_boolean(self, sample_loan: Loan, paid: object) -> None:
        record = loan_to_record(sample_loan)
        record["installments"][0]["paid"] = paid

        with pytest.raises(SinkError):
            loan_from_record(record)

    def test_from_record_paid_defaults_to_unpaid(self, sample_loan: Loan) -> None:
        record = loan_to_record(sample_loan)
        del record["installments"][0]["paid"]

        assert loan_from_record(record).installments[0].paid is False


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_whole_amount(self) -> None:
        assert format_currency(Decimal("7000")) == "Rs. 7,000"

    def test_fractional_amount(self) -> None:
        assert format_currency(1234.5) == "Rs. 1,234.50"

    def test_custom_currency(self) -> None:
        assert format_currency(12, currency="PKR") == "PKR 12"
