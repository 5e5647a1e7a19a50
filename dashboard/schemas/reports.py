"""Report-type tags, metric schemas and raw report records."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

ReportRecord = dict[str, Any]
"""One period of a report as received: metric key -> number | string | None."""


class ReportType(str, Enum):
    """Resource tags understood by the data service."""

    STOCKS = "stocks"
    INCOME_STATEMENT = "incomeStatement"
    BALANCE_SHEET = "balanceSheet"
    CASH_FLOW_STATEMENT = "cashFlowStatement"
    OVERVIEW = "overview"


STATEMENT_TYPES: tuple[ReportType, ...] = (
    ReportType.INCOME_STATEMENT,
    ReportType.BALANCE_SHEET,
    ReportType.CASH_FLOW_STATEMENT,
)

# Loaded once per symbol without a user action.
AUTO_TYPES: tuple[ReportType, ...] = (ReportType.STOCKS, ReportType.OVERVIEW)


def report_tag(report_type: str) -> str:
    """Plain string tag for a ``ReportType`` member or a raw tag."""
    return report_type.value if isinstance(report_type, ReportType) else report_type


class MetricColumn(BaseModel):
    """A single line item: the record key and its display label."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str


class MetricSchema(BaseModel):
    """Ordered columns for one report type.

    The first column is the fiscal-period identifier. It labels table rows
    and chart points and is never offered as a chart metric.
    """

    model_config = ConfigDict(frozen=True)

    report_type: str
    columns: tuple[MetricColumn, ...] = ()

    @model_validator(mode="after")
    def _unique_keys(self) -> "MetricSchema":
        keys = [column.key for column in self.columns]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise ValueError(f"duplicate metric keys in {self.report_type}: {duplicates}")
        return self

    @property
    def keys(self) -> list[str]:
        return [column.key for column in self.columns]

    @property
    def period_key(self) -> str | None:
        return self.columns[0].key if self.columns else None

    @property
    def selectable_keys(self) -> list[str]:
        return [column.key for column in self.columns[1:]]

    @property
    def default_metric(self) -> str | None:
        selectable = self.selectable_keys
        return selectable[0] if selectable else None

    def has_key(self, key: str) -> bool:
        return any(column.key == key for column in self.columns)

    def label_for(self, key: str) -> str:
        """Display label for *key*, or the key itself when it is not registered."""
        for column in self.columns:
            if column.key == key:
                return column.label
        return key

    def __len__(self) -> int:
        return len(self.columns)
