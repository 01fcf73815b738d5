"""Money parsing and arithmetic.

Amounts are ``Decimal`` with two decimal places, matching the
``Numeric(10, 2)`` columns they are stored in.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from outletbase.domain.exceptions import InvalidInputError

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")


def parse_price(value: Any, label: str = "Price") -> Decimal:
    """Validate a non-negative amount and round it to cents.

    Args:
        value: Decimal, number or numeric string.
        label: Field name used in error messages.

    Raises:
        InvalidInputError: If the value is missing, not a finite number,
            negative or too large to store.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{label} is required")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidInputError(f"{label} must be a number") from None
    if not amount.is_finite():
        raise InvalidInputError(f"{label} must be a number")
    if amount < 0:
        raise InvalidInputError(f"{label} cannot be negative")
    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount > MAX_AMOUNT:
        raise InvalidInputError(f"{label} is too large")
    return amount


def line_total(unit_price: Decimal, quantity: int) -> Decimal:
    return (unit_price * quantity).quantize(CENT, rounding=ROUND_HALF_UP)
