"""Round-half-up arithmetic shared by the run and final scorers."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

TWO_PLACES = Decimal("0.01")


def to_decimal(value: int | float | Decimal) -> Decimal:
    """Convert to Decimal via the shortest repr, so 0.1 becomes exactly 0.1."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(repr(value))


def round2(value: int | float | Decimal) -> float:
    """Round to 2 decimal places, halves away from zero (78.125 -> 78.13).

    float's built-in round() uses banker's rounding on the binary value,
    which disagrees at exact .005 boundaries.
    """
    return float(to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def mean2(values: Iterable[int]) -> float | None:
    """Arithmetic mean of integer values rounded to 2 dp; None when empty."""
    values = list(values)
    if not values:
        return None
    return round2(Decimal(sum(values)) / Decimal(len(values)))


def sum2(values: Iterable[float]) -> float:
    """Sum already-rounded values in Decimal and round the result to 2 dp."""
    return round2(sum((to_decimal(v) for v in values), Decimal(0)))
