"""Dashboard session: one symbol's reports, charts, overview and DCF form.

The hosting view supplies the render surfaces, keyed by
``chart_target_id(report_type)``, and forwards user actions:

- ``open_symbol`` when the route symbol changes (price history and
  overview load automatically, once per symbol);
- ``request_report`` from a statement's load button, which is disabled
  while that statement is loading;
- ``select_metric`` from a statement's metric picker;
- ``growth_form`` edits and ``submit_growth_rates`` from the DCF form.

Charts re-render whenever a slot finishes loading or its selected metric
changes.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping

from dashboard.schemas.load_state import LoadState, LoadStatus
from dashboard.schemas.reports import AUTO_TYPES, STATEMENT_TYPES, ReportRecord, ReportType, report_tag
from dashboard.schemas.views import ChartKind, ChartSeries, Grid, OverviewTable
from dashboard.services.chart_projector import ChartHandle, RenderSurface, project_series, render_chart
from dashboard.services.data_client import DataServiceClient
from dashboard.services.fetch_coordinator import FetchCoordinator
from dashboard.services.growth_rates import GrowthRateForm
from dashboard.services.overview_formatter import format_overview
from dashboard.services.schema_registry import SchemaRegistry, schema_registry
from dashboard.services.table_projector import project_table

logger = logging.getLogger("dashboard.session")

CHARTED_TYPES: tuple[str, ...] = tuple(rt.value for rt in (ReportType.STOCKS, *STATEMENT_TYPES))
_STATEMENT_TAGS = frozenset(rt.value for rt in STATEMENT_TYPES)


def chart_target_id(report_type: str) -> str:
    return f"{report_tag(report_type)}Chart"


def normalize_symbol(symbol: str | None) -> str:
    normalized = (symbol or "").strip().upper()
    if not normalized:
        raise ValueError("Please enter a company symbol.")
    return normalized


class StockDashboard:
    """Composes the fetch coordinator, projectors and DCF form for one view."""

    def __init__(
        self,
        client: DataServiceClient,
        surfaces: Mapping[str, RenderSurface] | None = None,
        registry: SchemaRegistry = schema_registry,
    ) -> None:
        self._client = client
        self.registry = registry
        self.surfaces: dict[str, RenderSurface] = dict(surfaces or {})
        self.coordinator = FetchCoordinator(client)
        self.coordinator.subscribe(self._on_state)
        self.growth_form = GrowthRateForm()
        # one selected chart metric per report type
        self._selected: dict[str, str] = {}

    @property
    def symbol(self) -> str | None:
        return self.coordinator.symbol

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    async def open_symbol(self, symbol: str) -> None:
        """Switch to *symbol*, discarding all per-symbol state, then load the automatic reports."""
        normalized = normalize_symbol(symbol)
        if normalized == self.symbol:
            return

        for surface in self.surfaces.values():
            surface.detach()
        self._selected.clear()
        self.growth_form = GrowthRateForm()
        self.coordinator.reset(normalized)
        logger.info("opened symbol=%s", normalized)

        await asyncio.gather(*(self.coordinator.load(normalized, rt) for rt in AUTO_TYPES))

    def control_enabled(self, report_type: str) -> bool:
        """Whether the load button of *report_type* accepts a click."""
        return self.symbol is not None and not self.coordinator.state(report_type).is_loading

    async def request_report(self, report_type: str) -> LoadState:
        tag = report_tag(report_type)
        if tag not in _STATEMENT_TAGS:
            raise ValueError(f"'{tag}' is not a statement report type")
        if self.symbol is None:
            raise ValueError("Please enter a company symbol.")
        if not self.control_enabled(tag):
            logger.debug("ignoring %s request while it is loading", tag)
            return self.coordinator.state(tag)
        return await self.coordinator.load(self.symbol, tag)

    def select_metric(self, report_type: str, key: str) -> str:
        """Select the charted metric of one report type.  Returns the metric actually used."""
        tag = report_tag(report_type)
        schema = self.registry.get(tag)
        chosen = key if key in schema.selectable_keys else schema.default_metric
        if chosen is None:
            raise ValueError(f"'{tag}' has no selectable metrics")
        self._selected[tag] = chosen
        self._render(tag)
        return chosen

    async def submit_growth_rates(self) -> float | None:
        return await self.growth_form.submit(self._client)

    async def aclose(self) -> None:
        for surface in self.surfaces.values():
            surface.detach()
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def selected_metric(self, report_type: str) -> str | None:
        tag = report_tag(report_type)
        return self._selected.get(tag) or self.registry.get(tag).default_metric

    def records(self, report_type: str) -> list[ReportRecord] | None:
        state = self.coordinator.state(report_type)
        return state.data if state.is_loaded else None

    def table(self, report_type: str) -> Grid | None:
        records = self.records(report_type)
        if records is None:
            return None
        return project_table(records, self.registry.get(report_type))

    def chart_series(self, report_type: str) -> ChartSeries | None:
        tag = report_tag(report_type)
        records = self.records(tag)
        if not records:
            return None
        return project_series(
            records,
            self.registry.get(tag),
            self.selected_metric(tag),
            newest_first=tag != ReportType.STOCKS.value,
        )

    def chart(self, report_type: str) -> ChartHandle | None:
        surface = self.surfaces.get(chart_target_id(report_type))
        return surface.handle if surface is not None else None

    def overview(self) -> OverviewTable | None:
        state = self.coordinator.state(ReportType.OVERVIEW)
        if not state.is_loaded:
            return None
        return format_overview(state.data)

    # ------------------------------------------------------------------
    # Chart lifecycle
    # ------------------------------------------------------------------

    def _on_state(self, report_type: str, state: LoadState) -> None:
        if report_type not in CHARTED_TYPES:
            return
        if state.is_loaded:
            self._render(report_type)
        elif state.status is LoadStatus.FAILED:
            surface = self.surfaces.get(chart_target_id(report_type))
            if surface is not None:
                surface.detach()

    def _render(self, report_type: str) -> ChartHandle | None:
        surface = self.surfaces.get(chart_target_id(report_type))
        if surface is None:
            return None
        is_prices = report_type == ReportType.STOCKS.value
        return render_chart(
            surface,
            self.records(report_type),
            self.registry.get(report_type),
            self.selected_metric(report_type),
            ChartKind.LINE if is_prices else ChartKind.BAR,
            newest_first=not is_prices,
        )
