"""Record sequences -> renderable table grids."""

from __future__ import annotations

from typing import Any, Sequence

from dashboard.config import settings
from dashboard.schemas.reports import MetricSchema, ReportRecord
from dashboard.schemas.views import Grid, GridColumn
from dashboard.services.values import format_amount, is_missing


def project_table(
    records: Sequence[ReportRecord],
    schema: MetricSchema,
    placeholder: str | None = None,
) -> Grid:
    """Build a grid with one header column per schema entry and one row per record.

    Rows keep the caller's record order and are always schema-complete:
    absent or empty fields render as *placeholder* instead of being
    dropped.  The period column is center-aligned and shown verbatim;
    every other column is a right-aligned amount.
    """
    filler = settings.placeholder if placeholder is None else placeholder
    period_key = schema.period_key

    columns = [
        GridColumn(
            key=column.key,
            label=column.label,
            align="center" if column.key == period_key else "right",
        )
        for column in schema.columns
    ]
    rows = [
        [
            format_cell(record.get(column.key), is_period=column.key == period_key, placeholder=filler)
            for column in schema.columns
        ]
        for record in records
    ]
    return Grid(columns=columns, rows=rows)


def format_cell(value: Any, *, is_period: bool = False, placeholder: str = "-") -> str:
    if is_missing(value):
        return placeholder
    if is_period:
        return str(value)
    amount = format_amount(value)
    if amount is not None:
        return amount
    return str(value)
