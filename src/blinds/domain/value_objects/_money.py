"""Fixed-point money helpers.

Monetary amounts are ``Decimal`` throughout the core. Floats are converted
through their shortest ``repr`` so that ``0.1`` becomes exactly one tenth.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

MoneyLike = Union[Decimal, int, float, str]

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: MoneyLike) -> Decimal:
    """Convert a number to Decimal without binary float drift.

    Raises:
        ValueError: If the value cannot be interpreted as a number.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric amount: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a numeric amount: {value!r}") from e


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    """Format an amount for display, e.g. ``$1,215.00``."""
    rounded = round_money(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"
