"""Parsing and validation of raw loan request fields.

Form input arrives as strings or loosely typed numbers, so every parser
accepts the shapes a caller is likely to hand over and raises the matching
``LoanValidationError`` subclass for anything else.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from chit_fund.exceptions import (
    InvalidAmountError,
    InvalidDateError,
    InvalidMemberError,
    InvalidTermError,
)

# Keeps the 70/30 split and every schedule sum exact in the default
# 28-digit decimal context.
MAX_AMOUNT = Decimal("1e15")
MAX_DECIMAL_PLACES = 6


def parse_amount(value: object) -> Decimal:
    """Parse a principal into a positive finite Decimal.

    Parameters
    ----------
    value : object
        int, Decimal, float or numeric string.

    Returns
    -------
    Decimal
        The parsed amount.

    Raises
    ------
    InvalidAmountError
        If the value is missing, boolean, unparsable, non-finite, <= 0,
        above ``MAX_AMOUNT`` or finer than ``MAX_DECIMAL_PLACES``.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(f"Loan amount is required, got {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            # via str() so a float 0.1 parses as Decimal("0.1")
            amount = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidAmountError(f"Loan amount {value!r} is not a number") from e
    else:
        raise InvalidAmountError(f"Loan amount must be numeric, got {type(value).__name__}")

    if not amount.is_finite():
        raise InvalidAmountError(f"Loan amount must be finite, got {value!r}")
    if amount <= 0:
        raise InvalidAmountError(f"Loan amount must be positive, got {value!r}")
    if amount > MAX_AMOUNT:
        raise InvalidAmountError(f"Loan amount must not exceed {MAX_AMOUNT:,f}, got {value!r}")
    if amount.normalize().as_tuple().exponent < -MAX_DECIMAL_PLACES:
        raise InvalidAmountError(
            f"Loan amount may have at most {MAX_DECIMAL_PLACES} decimal places, got {value!r}"
        )
    return amount


def parse_term(value: object) -> int:
    """Parse a term into a positive whole number of months.

    Raises
    ------
    InvalidTermError
        If the value is boolean, fractional, unparsable or < 1.
    """
    if value is None or isinstance(value, bool):
        raise InvalidTermError(f"Loan term is required, got {value!r}")

    if isinstance(value, int):
        term = value
    elif isinstance(value, (float, Decimal, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidTermError(f"Loan term {value!r} is not a number") from e
        if not number.is_finite() or number != number.to_integral_value():
            raise InvalidTermError(f"Loan term must be a whole number of months, got {value!r}")
        term = int(number)
    else:
        raise InvalidTermError(f"Loan term must be an integer, got {type(value).__name__}")

    if term < 1:
        raise InvalidTermError(f"Loan term must be at least 1 month, got {value!r}")
    return term


def parse_issue_date(value: object) -> date:
    """Parse an issue date.

    Accepts a ``date``, the date part of a ``datetime``, or an ISO 8601
    string (``YYYY-MM-DD`` or a full timestamp).

    Raises
    ------
    InvalidDateError
        If the value is not a calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Issue date must be a date or ISO string, got {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise InvalidDateError(f"Issue date {value!r} is not a valid calendar date") from e


def parse_member_id(value: object) -> str:
    """Check a member reference is a non-empty id string."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidMemberError(f"Member reference {value!r} is not a valid id")
    return value.strip()
