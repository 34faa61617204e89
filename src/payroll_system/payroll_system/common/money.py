from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
_CENTS = Decimal("0.01")


def to_decimal(value: Number | None) -> Decimal:
    """Coerce a numeric value to Decimal; ``None`` becomes zero.

    Floats go through ``str`` so 0.1 stays 0.1.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Number) -> Decimal:
    return to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


def safe_divide(numerator: Number, denominator: Number) -> Decimal:
    """Divide, resolving a zero or missing divisor to 0 instead of raising."""
    d = to_decimal(denominator)
    if d == 0:
        return ZERO
    return to_decimal(numerator) / d


def percent_of(base: Number, percentage: Number) -> Decimal:
    return to_decimal(base) * to_decimal(percentage) / HUNDRED


def total(values: Iterable[Number]) -> Decimal:
    return sum((to_decimal(v) for v in values), ZERO)
