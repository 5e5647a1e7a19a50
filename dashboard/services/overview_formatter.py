"""Company overview -> labelled, formatted rows.

Overview keys are camelCase identifiers with embedded acronyms
(``evToEBITDA``, ``priceToSalesRatioTTM``).  ``format_key`` splits them
into words while keeping acronym runs together.  Digits are not treated as
word boundaries, so ``weekHigh52`` becomes ``"Week High52"``.
"""

from __future__ import annotations

import json
import re
from datetime import date, datetime
from typing import Any, Mapping

from dashboard.config import settings
from dashboard.schemas.views import OverviewRow, OverviewTable
from dashboard.services.values import format_grouped, is_missing, to_number

HIDDEN_KEYS = frozenset({"description"})

_FIXED_POINT_MARKERS = ("Yield", "Ratio", "Beta")

# EBITDAMargin -> EBITDA Margin
_ACRONYM_BEFORE_WORD = re.compile(r"([A-Z])(?=[A-Z][a-z])")
# space after an acronym run that ends the key or precedes a word
_ACRONYM_RUN_END = re.compile(r"([A-Z]+)(?=[A-Z][a-z]|$)")
# evTo -> ev To, adjustedEBITDA -> adjusted EBITDA
_WORD_BEFORE_CAPS = re.compile(r"([a-z])([A-Z]+)")


def format_key(key: str) -> str:
    """``dividendPerShare`` -> ``"Dividend Per Share"``, ``evToEBITDA`` -> ``"Ev To EBITDA"``."""
    label = _ACRONYM_BEFORE_WORD.sub(r"\1 ", key)
    label = _ACRONYM_RUN_END.sub(r"\1 ", label)
    label = _WORD_BEFORE_CAPS.sub(r"\1 \2", label)
    label = " ".join(label.split())
    return label[:1].upper() + label[1:]


def format_value(key: str, value: Any, placeholder: str | None = None) -> str:
    filler = settings.placeholder if placeholder is None else placeholder

    if is_missing(value):
        return filler
    if "Date" in key:
        return _format_date(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = to_number(value)
        return format_grouped(number) if number is not None else filler
    if any(marker in key for marker in _FIXED_POINT_MARKERS):
        number = to_number(value)
        return format_grouped(number) if number is not None else str(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def format_overview(record: Mapping[str, Any], placeholder: str | None = None) -> OverviewTable:
    """Rows for every overview field except ``description``, in payload order."""
    rows = [
        OverviewRow(key=key, label=format_key(key), value=format_value(key, value, placeholder))
        for key, value in record.items()
        if key not in HIDDEN_KEYS
    ]
    return OverviewTable(rows=rows)


def _format_date(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%x")
    text = str(value)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return text
    return parsed.strftime("%x")
