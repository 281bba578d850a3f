"""Split and installment schedule calculations."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable

from dateutil.relativedelta import relativedelta

from chit_fund.exceptions import InvalidAmountError, InvalidDateError
from chit_fund.models.fund import Installment
from chit_fund.models.fund.enums import ResidualPolicy

# Fixed fund policy: 70% of every loan is recovered, 30% is waived.
RECOVERABLE_SHARE = Decimal("0.7")
WAIVER_SHARE = Decimal("0.3")


def split_principal(total_amount: Decimal) -> tuple[Decimal, Decimal]:
    """Split a principal into its recoverable and waived shares.

    For any amount ``parse_amount`` accepts both shares are exact Decimal
    products, so they always sum to the principal.

    Parameters
    ----------
    total_amount : Decimal
        Principal issued.

    Returns
    -------
    tuple[Decimal, Decimal]
        ``(recoverable_amount, waiver_amount)``.
    """
    return total_amount * RECOVERABLE_SHARE, total_amount * WAIVER_SHARE


def round_half_up(amount: Decimal, unit: Decimal = Decimal("1")) -> Decimal:
    """Round to the nearest multiple of ``unit``, halves away from zero.

    Raises
    ------
    InvalidAmountError
        If the quotient has more digits than the decimal context holds.
    """
    try:
        return (amount / unit).quantize(Decimal("1"), rounding=ROUND_HALF_UP) * unit
    except InvalidOperation as e:
        raise InvalidAmountError(f"Cannot round {amount} to a multiple of {unit}") from e


def installment_amounts(
    recoverable_amount: Decimal,
    term_months: int,
    unit: Decimal = Decimal("1"),
    policy: ResidualPolicy = ResidualPolicy.NONE,
) -> list[Decimal]:
    """Distribute the recoverable amount over ``term_months`` installments.

    Every installment is ``round_half_up(recoverable / term)``. Under
    ``ResidualPolicy.FINAL_INSTALLMENT`` the last one is adjusted so the
    schedule sums to exactly ``recoverable_amount``.

    Raises
    ------
    InvalidAmountError
        If the final installment would have to be negative.
    """
    base = round_half_up(recoverable_amount / term_months, unit)
    amounts = [base] * term_months

    if policy == ResidualPolicy.FINAL_INSTALLMENT:
        final = recoverable_amount - base * (term_months - 1)
        if final < 0:
            raise InvalidAmountError(
                f"Recoverable amount {recoverable_amount} is too small to spread "
                f"over {term_months} installments"
            )
        amounts[-1] = final

    return amounts


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length.

    >>> add_months(date(2024, 1, 31), 1)
    datetime.date(2024, 2, 29)
    """
    return start + relativedelta(months=months)


def due_dates(issue_date: date, term_months: int) -> list[date]:
    """Due dates one, two, ... ``term_months`` months after issue.

    Raises
    ------
    InvalidDateError
        If the schedule would run past the last representable date.
    """
    try:
        return [add_months(issue_date, i) for i in range(1, term_months + 1)]
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(
            f"A {term_months}-month schedule from {issue_date.isoformat()} ends past year 9999"
        ) from e


def build_schedule(
    issue_date: date,
    amounts: list[Decimal],
    id_factory: Callable[[], str],
) -> tuple[Installment, ...]:
    """Create unpaid installments for the given amounts, monthly from issue."""
    return tuple(
        Installment(
            installment_id=id_factory(),
            installment_number=i,
            due_date=due_date,
            amount=amount,
        )
        for i, (due_date, amount) in enumerate(
            zip(due_dates(issue_date, len(amounts)), amounts), start=1
        )
    )
