"""Renderable projections: table grids, chart series and overview rows."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class GridColumn(BaseModel):
    """Table column header with its cell alignment."""

    key: str
    label: str
    align: Literal["center", "right"] = "right"


class Grid(BaseModel):
    """Header plus one row of display strings per input record."""

    columns: list[GridColumn]
    rows: list[list[str]]

    @property
    def header(self) -> list[str]:
        return [column.label for column in self.columns]


class ChartKind(str, Enum):
    LINE = "line"
    BAR = "bar"


class ChartSeries(BaseModel):
    """Time-ordered label/value pairs for one metric, oldest first."""

    model_config = ConfigDict(frozen=True)

    labels: list[str]
    values: list[float | None]
    series_name: str


class OverviewRow(BaseModel):
    key: str
    label: str
    value: str


class OverviewTable(BaseModel):
    """Formatted company overview, in payload order."""

    rows: list[OverviewRow]
