# backend/rentmaster/domain/money.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_CENTS = Decimal("0.01")


def clean_amount(value: Any) -> float:
    """
    Round a currency value to 2 decimals, half away from zero.

    Goes through the shortest repr so 1.005 cleans to 1.01 and
    0.1 + 0.2 cleans to 0.3. Non-numeric input cleans to 0.0.
    """
    try:
        d = Decimal(repr(float(value)))
    except (TypeError, ValueError, InvalidOperation):
        return 0.0
    if not d.is_finite():
        return 0.0
    return float(d.quantize(_CENTS, rounding=ROUND_HALF_UP))


def sum_amounts(values) -> float:
    total = 0.0
    for v in values:
        total += float(v or 0.0)
    return total
