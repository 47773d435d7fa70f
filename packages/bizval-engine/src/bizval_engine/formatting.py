"""
Rounding and display helpers shared by the engine stages.

Rounding is half-up (towards +inf) for numeric outputs and half-away-from-zero
for currency display; Python's built-in ``round`` (banker's rounding) is never
used on values that reach the output surface.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +inf (-2.5 -> -2, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def format_currency(value: float) -> str:
    """USD with thousands separators and no decimals, e.g. ``-$1,250,000``."""
    if not math.isfinite(value):
        return "$—"
    whole = int(math.floor(abs(value) + 0.5))
    sign = "-" if value < 0 and whole != 0 else ""
    return f"{sign}${whole:,}"


def format_number(value: float) -> str:
    """Render integral floats without a trailing ``.0`` (``45.0`` -> ``45``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_grouped(value: float) -> str:
    """Grouped number with up to three decimals, e.g. ``1,234,567.5``."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int):
        return f"{value:,}"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return text


def percent(fraction: float) -> int:
    """Whole-number percentage of a fraction (0.65 -> 65)."""
    return round_half_up(fraction * 100)


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text of the exact binary value, ties rounded up (``2.25`` -> ``2.3``)."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
