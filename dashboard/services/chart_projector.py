"""Record sequences -> chart series, and chart lifecycle on render surfaces.

A ``RenderSurface`` is a drawing target supplied by the hosting view.  It
holds at most one ``ChartHandle``; attaching a new handle releases the
previous one before binding, so two charts are never bound to the same
target.
"""

from __future__ import annotations

import logging
from typing import Sequence

import plotly.graph_objects as go

from dashboard.schemas.reports import MetricSchema, ReportRecord
from dashboard.schemas.views import ChartKind, ChartSeries
from dashboard.services.values import to_number

logger = logging.getLogger("dashboard.charts")

# ── Design tokens ─────────────────────────────────────────────────────────────
LINE_COLOR = "rgba(75, 192, 192, 1)"
FILL_COLOR = "rgba(75, 192, 192, 0.2)"


def project_series(
    records: Sequence[ReportRecord],
    schema: MetricSchema,
    selected_key: str,
    *,
    newest_first: bool = True,
) -> ChartSeries:
    """Project *records* onto ``(period label, metric value)`` pairs.

    Statements arrive newest-first and are reversed so the chart reads
    oldest-to-newest left to right.  Pass ``newest_first=False`` for
    sources that are already ascending (price history).

    An unknown or non-selectable *selected_key* falls back to the schema's
    first selectable metric.
    """
    period_key = schema.period_key
    if period_key is None or schema.default_metric is None:
        raise ValueError(f"schema '{schema.report_type}' has no selectable metrics")

    key = selected_key if selected_key in schema.selectable_keys else schema.default_metric

    labels = [str(record.get(period_key, "")) for record in records]
    values = [to_number(record.get(key)) for record in records]
    if newest_first:
        labels.reverse()
        values.reverse()

    return ChartSeries(labels=labels, values=values, series_name=schema.label_for(key))


def build_figure(series: ChartSeries, kind: ChartKind) -> go.Figure:
    """Plotly figure for one series: bars for statements, a filled line for prices."""
    if kind is ChartKind.BAR:
        trace = go.Bar(
            x=series.labels,
            y=series.values,
            name=series.series_name,
            marker=dict(color=FILL_COLOR, line=dict(color=LINE_COLOR, width=2)),
        )
    else:
        trace = go.Scatter(
            x=series.labels,
            y=series.values,
            name=series.series_name,
            mode="lines",
            fill="tozeroy",
            line=dict(color=LINE_COLOR, width=2),
            fillcolor=FILL_COLOR,
        )
    fig = go.Figure(data=[trace])
    fig.update_layout(
        showlegend=True,
        xaxis=dict(type="category"),
        yaxis=dict(rangemode="tozero", tickformat=","),
        margin=dict(l=60, r=20, t=35, b=40),
    )
    return fig


class ChartHandle:
    """One chart instance bound (or bindable) to a render target."""

    def __init__(self, target_id: str, series: ChartSeries, kind: ChartKind) -> None:
        self.target_id = target_id
        self.series = series
        self.kind = kind
        self._figure: go.Figure | None = build_figure(series, kind)

    @property
    def released(self) -> bool:
        return self._figure is None

    @property
    def figure(self) -> go.Figure:
        if self._figure is None:
            raise RuntimeError(f"chart on '{self.target_id}' has been released")
        return self._figure

    def release(self) -> None:
        self._figure = None

    def to_html(self) -> str:
        return self.figure.to_html(full_html=False, include_plotlyjs="cdn", div_id=self.target_id)

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"<ChartHandle target={self.target_id} series={self.series.series_name!r} {state}>"


class RenderSurface:
    """A stable drawing target owning at most one chart handle.

    Attributes:
        target_id: Identifier supplied by the hosting view.
        attach_count: Number of handles bound over the surface's lifetime.
    """

    def __init__(self, target_id: str) -> None:
        self.target_id = target_id
        self.attach_count = 0
        self._handle: ChartHandle | None = None

    @property
    def handle(self) -> ChartHandle | None:
        return self._handle

    def attach(self, handle: ChartHandle) -> None:
        """Bind *handle*, releasing whatever was bound before."""
        previous = self._handle
        if previous is not None and previous is not handle:
            previous.release()
            logger.debug("released chart on %s", self.target_id)
        self._handle = handle
        self.attach_count += 1

    def detach(self) -> None:
        if self._handle is not None:
            self._handle.release()
            self._handle = None


def render_chart(
    surface: RenderSurface,
    records: Sequence[ReportRecord] | None,
    schema: MetricSchema,
    selected_key: str,
    kind: ChartKind = ChartKind.BAR,
    *,
    newest_first: bool = True,
) -> ChartHandle | None:
    """Project *records* and attach the resulting chart to *surface*.

    Empty or absent records leave the surface untouched and return ``None``.
    """
    if not records:
        return None
    series = project_series(records, schema, selected_key, newest_first=newest_first)
    handle = ChartHandle(surface.target_id, series, kind)
    surface.attach(handle)
    return handle
