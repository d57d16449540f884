"""Decimal conversion and rounding helpers.

Rounding (applied uniformly):
- Money to 2 decimals (euro cents)
- Hours to 2 decimals
- ROUND_HALF_UP on Decimal, i.e. half away from zero for negative values
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal
from typing import Iterable, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
OUTPUT_PRECISION = Decimal("0.01")


def to_decimal(value: Number | None) -> Decimal:
    """Convert a number to Decimal, going through str() for floats."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places (cents)."""
    return amount.quantize(OUTPUT_PRECISION, rounding=ROUND_HALF_UP)


def round_hours(hours: Decimal) -> Decimal:
    """Round an hour count to 2 decimal places."""
    return hours.quantize(OUTPUT_PRECISION, rounding=ROUND_HALF_UP)


def floor_hours(hours: Decimal) -> Decimal:
    """Floor an hour count to whole hours."""
    return hours.to_integral_value(rounding=ROUND_FLOOR)


def sum_decimal(values: Iterable[Decimal]) -> Decimal:
    """Sum Decimals, starting from an exact zero."""
    total = ZERO
    for value in values:
        total += value
    return total
