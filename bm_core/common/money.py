# backend/bm_core/common/money.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from rest_framework.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MINOR_UNITS_PER_UNIT = 100


def to_decimal(value, field_name: str = "value") -> Decimal:
    """
    Accepts Decimal / str / int and converts to a 2-place Decimal.
    Floats go through str() so 19.9 becomes Decimal("19.90"), not its binary expansion.
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError({field_name: "Invalid decimal value."})

    if not amount.is_finite():
        raise ValidationError({field_name: "Invalid decimal value."})
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(value) -> int:
    """
    "19.90" -> 1990
    """
    return int(to_decimal(value) * MINOR_UNITS_PER_UNIT)


def from_minor_units(units: int) -> Decimal:
    """
    1990 -> Decimal("19.90")
    """
    return (Decimal(int(units)) / MINOR_UNITS_PER_UNIT).quantize(CENT)


def sum_amounts(amounts: Iterable) -> Decimal:
    """
    Exact sum of money amounts: every amount is converted to integer cents,
    summed as integers and rendered back as a 2-place Decimal.
    """
    return from_minor_units(sum((to_minor_units(a) for a in amounts), 0))


def format_amount(amount) -> str:
    return f"{to_decimal(amount):.2f}"
