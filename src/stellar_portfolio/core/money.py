"""Decimal helpers for USD amounts.

Every USD figure that leaves the service goes through ``round_usd`` so the
rounding rule lives in one place.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional, Union

USD_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal without binary float artifacts.

    Floats are routed through ``str`` so 0.1 becomes Decimal("0.1").
    Raises ValueError for anything that is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a decimal number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def round_usd(value: Decimal) -> Decimal:
    """Round a USD amount to cents (half up)."""
    return value.quantize(USD_QUANTUM, rounding=ROUND_HALF_UP)


def sum_usd(values: Iterable[Decimal]) -> Decimal:
    """Sum exact values, then round once."""
    return round_usd(sum(values, ZERO))


def percentage_change(absolute_pnl: Decimal, baseline: Decimal) -> Optional[Decimal]:
    """Return pnl / baseline * 100 rounded to cents, or None for a zero baseline."""
    if baseline == ZERO:
        return None
    return round_usd(absolute_pnl / baseline * 100)
