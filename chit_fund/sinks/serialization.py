"""Shared serialization utilities for sinks and the backend record shape."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from chit_fund.exceptions import SinkError
from chit_fund.models.fund import Installment, Loan


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary.

    Loans use the backend record shape; other dataclasses are flattened
    field by field.
    """
    if isinstance(obj, Loan):
        return loan_to_record(obj)
    elif is_dataclass(obj):
        return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return to_number(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, Loan):
        return loan_to_record(value)
    elif is_dataclass(value):
        return to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def to_number(value: Decimal) -> int | float:
    """JSON number for a Decimal: int when integral, float otherwise."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def installment_to_record(installment: Installment) -> dict[str, Any]:
    """Convert an installment to its backend record."""
    record: dict[str, Any] = {
        "id": installment.installment_id,
        "dueDate": installment.due_date.isoformat(),
        "amount": to_number(installment.amount),
        "paid": installment.paid,
    }
    if installment.payment_date is not None:
        record["paymentDate"] = installment.payment_date.isoformat()
    return record


def loan_to_record(loan: Loan) -> dict[str, Any]:
    """Convert a loan to the flat record stored by the backend.

    Parameters
    ----------
    loan : Loan
        Loan to convert.

    Returns
    -------
    dict[str, Any]
        Record with camelCase keys and a nested ``installments`` list.
    """
    return {
        "id": loan.loan_id,
        "memberId": loan.member_id,
        "memberName": loan.member_name,
        "totalAmount": to_number(loan.total_amount),
        "recoverableAmount": to_number(loan.recoverable_amount),
        "waiverAmount": to_number(loan.waiver_amount),
        "issueDate": loan.issue_date.isoformat(),
        "termMonths": loan.term_months,
        "status": loan.status.value,
        "installments": [installment_to_record(ins) for ins in loan.installments],
    }


def _parse_paid(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"paid must be a boolean, got {value!r}")
    return value


def loan_from_record(record: dict[str, Any]) -> Loan:
    """Rebuild a loan from a backend record.

    ``status`` in the record is ignored; it is derived from the
    installments. ``version`` defaults to 0 when the row carries none.

    Raises
    ------
    SinkError
        If the record is missing fields or holds malformed values.
    """
    try:
        installments = tuple(
            Installment(
                installment_id=row["id"],
                installment_number=number,
                due_date=date.fromisoformat(row["dueDate"]),
                amount=Decimal(str(row["amount"])),
                paid=_parse_paid(row.get("paid", False)),
                payment_date=(
                    datetime.fromisoformat(row["paymentDate"]) if row.get("paymentDate") else None
                ),
            )
            for number, row in enumerate(record["installments"], start=1)
        )
        return Loan(
            loan_id=record["id"],
            member_id=record["memberId"],
            member_name=record.get("memberName") or "Unknown",
            total_amount=Decimal(str(record["totalAmount"])),
            recoverable_amount=Decimal(str(record["recoverableAmount"])),
            waiver_amount=Decimal(str(record["waiverAmount"])),
            issue_date=date.fromisoformat(record["issueDate"]),
            term_months=int(record["termMonths"]),
            installments=installments,
            version=int(record.get("version", 0)),
        )
    except (KeyError, TypeError, ValueError, ArithmeticError) as e:
        raise SinkError(f"Malformed loan record {record.get('id', '?')!r}: {e}") from e


def format_currency(amount: Decimal | int | float, currency: str = "Rs.") -> str:
    """Format an amount for display, e.g. ``Rs. 7,000``."""
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return f"{currency} {int(value):,}"
    return f"{currency} {value:,.2f}"
