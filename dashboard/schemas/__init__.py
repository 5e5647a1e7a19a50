"""Pydantic schemas."""

from dashboard.schemas.common import ErrorDetail, Meta, ViewResponse
from dashboard.schemas.dcf import DcfRequest, DcfResult, GrowthRateVector
from dashboard.schemas.load_state import LoadState, LoadStatus
from dashboard.schemas.reports import (
    AUTO_TYPES,
    STATEMENT_TYPES,
    MetricColumn,
    MetricSchema,
    ReportRecord,
    ReportType,
    report_tag,
)
from dashboard.schemas.views import (
    ChartKind,
    ChartSeries,
    Grid,
    GridColumn,
    OverviewRow,
    OverviewTable,
)

__all__ = [
    "ErrorDetail",
    "Meta",
    "ViewResponse",
    "DcfRequest",
    "DcfResult",
    "GrowthRateVector",
    "LoadState",
    "LoadStatus",
    "AUTO_TYPES",
    "STATEMENT_TYPES",
    "MetricColumn",
    "MetricSchema",
    "ReportRecord",
    "ReportType",
    "report_tag",
    "ChartKind",
    "ChartSeries",
    "Grid",
    "GridColumn",
    "OverviewRow",
    "OverviewTable",
]
