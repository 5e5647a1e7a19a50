"""Pure value helpers for loosely-typed record fields (no I/O)."""

from __future__ import annotations

import math
from typing import Any

# The upstream provider reports absent line items as the string "None".
_MISSING_MARKERS = frozenset({"", "None"})


def is_missing(value: Any) -> bool:
    """True for ``None``, empty strings and the provider's ``"None"`` marker."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in _MISSING_MARKERS
    if isinstance(value, float):
        return math.isnan(value)
    return False


def to_number(value: Any) -> float | None:
    """Coerce a record field to a finite float.

    Numbers pass through, numeric strings are parsed, anything else
    (booleans, text, objects, non-finite values) yields ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def format_grouped(number: float, decimals: int = 2) -> str:
    """Thousands-grouped number with a fixed count of fractional digits."""
    return f"{number:,.{decimals}f}"


def format_amount(value: Any) -> str | None:
    """Grouped rendering for statement amounts.

    Integral values are shown without decimals, fractional ones with two.
    Returns ``None`` when *value* is not numeric.
    """
    number = to_number(value)
    if number is None:
        return None
    if number.is_integer():
        return f"{int(number):,}"
    return format_grouped(number)
