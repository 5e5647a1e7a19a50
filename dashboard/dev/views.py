"""View handlers – the bridge between HTTP requests and the dashboard session.

Every handler returns a ``ViewResponse`` dict, so invalid input surfaces as
``ok=False`` with an error code rather than an exception.
"""

from __future__ import annotations

import logging
import time

from dashboard.schemas.common import ErrorDetail, Meta, ViewResponse
from dashboard.schemas.reports import STATEMENT_TYPES
from dashboard.services.dashboard import CHARTED_TYPES, StockDashboard
from dashboard.services.schema_registry import report_title

logger = logging.getLogger("dashboard.dev.views")

_STATEMENT_TAGS = [rt.value for rt in STATEMENT_TYPES]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _elapsed(t0: float) -> float:
    return round((time.perf_counter() - t0) * 1000, 2)


def _error_response(
    view: str, code: str, message: str, elapsed: float, hint: str | None = None
) -> dict:
    return ViewResponse(
        view=view,
        ok=False,
        data=None,
        error=ErrorDetail(error_code=code, message=message, hint=hint),
        meta=Meta(execution_ms=elapsed, row_count=0),
    ).model_dump()


def _ok(view: str, data, elapsed: float, row_count: int | None = None) -> dict:
    return ViewResponse(
        view=view,
        ok=True,
        data=data,
        error=None,
        meta=Meta(execution_ms=elapsed, row_count=row_count),
    ).model_dump()


def _no_symbol(view: str, elapsed: float) -> dict:
    return _error_response(
        view,
        "NO_SYMBOL",
        "Please enter a company symbol.",
        elapsed,
        hint="Open a symbol with PUT /dashboard/symbol/{symbol} first.",
    )


def _unknown_report_type(view: str, report_type: str, allowed: list[str], elapsed: float) -> dict:
    return _error_response(
        view,
        "UNKNOWN_REPORT_TYPE",
        f"Unknown report type '{report_type}'",
        elapsed,
        hint=f"Use one of: {', '.join(allowed)}.",
    )


def _report_view(dashboard: StockDashboard, report_type: str) -> dict:
    state = dashboard.coordinator.state(report_type)
    grid = dashboard.table(report_type)
    series = dashboard.chart_series(report_type)
    return {
        "report_type": report_type,
        "title": report_title(report_type),
        "status": state.status.value,
        "error": state.error,
        "control_enabled": dashboard.control_enabled(report_type),
        "selected_metric": dashboard.selected_metric(report_type),
        "metrics": [
            {"key": column.key, "label": column.label, "selectable": index > 0}
            for index, column in enumerate(dashboard.registry.get(report_type).columns)
        ],
        "table": grid.model_dump() if grid is not None else None,
        "series": series.model_dump() if series is not None else None,
    }


def _form_view(dashboard: StockDashboard) -> dict:
    form = dashboard.growth_form
    return {
        "fields": [
            {"index": index, "label": form.field_label(index), "value": value}
            for index, value in enumerate(form.vector.rates)
        ],
        "focused": form.focused,
        "result": form.result,
        "notice": form.notice,
        "submitting": form.submitting,
    }


# ---------------------------------------------------------------------------
# View implementations
# ---------------------------------------------------------------------------


async def handle_open_symbol(dashboard: StockDashboard, arguments: dict) -> dict:
    """Switch the session to a symbol and load price history and overview.

    Args:
        arguments: {"symbol": str}
    """
    t0 = time.perf_counter()
    try:
        await dashboard.open_symbol(arguments.get("symbol", ""))
    except ValueError as exc:
        return _error_response("open_symbol", "INVALID_INPUT", str(exc), _elapsed(t0))

    elapsed = _elapsed(t0)
    logger.info("open_symbol symbol=%s ms=%.1f", dashboard.symbol, elapsed)
    states = {tag: state.status.value for tag, state in dashboard.coordinator.states().items()}
    return _ok("open_symbol", {"symbol": dashboard.symbol, "states": states}, elapsed)


async def handle_load_report(dashboard: StockDashboard, arguments: dict) -> dict:
    """Trigger a statement load, as the statement's button would.

    Args:
        arguments: {"report_type": str}
    """
    t0 = time.perf_counter()
    report_type = arguments.get("report_type", "")

    if report_type not in _STATEMENT_TAGS:
        return _unknown_report_type("load_report", report_type, _STATEMENT_TAGS, _elapsed(t0))
    if dashboard.symbol is None:
        return _no_symbol("load_report", _elapsed(t0))

    await dashboard.request_report(report_type)
    elapsed = _elapsed(t0)
    view = _report_view(dashboard, report_type)
    logger.info("load_report type=%s status=%s ms=%.1f", report_type, view["status"], elapsed)
    rows = len(view["table"]["rows"]) if view["table"] else 0
    return _ok("load_report", view, elapsed, row_count=rows)


async def handle_get_report(dashboard: StockDashboard, arguments: dict) -> dict:
    """Current state, table and chart series of one report.

    Args:
        arguments: {"report_type": str}
    """
    t0 = time.perf_counter()
    report_type = arguments.get("report_type", "")

    if report_type not in CHARTED_TYPES:
        return _unknown_report_type("get_report", report_type, list(CHARTED_TYPES), _elapsed(t0))

    view = _report_view(dashboard, report_type)
    rows = len(view["table"]["rows"]) if view["table"] else 0
    return _ok("get_report", view, _elapsed(t0), row_count=rows)


async def handle_select_metric(dashboard: StockDashboard, arguments: dict) -> dict:
    """Change the charted metric of one report.

    Args:
        arguments: {"report_type": str, "metric": str}
    """
    t0 = time.perf_counter()
    report_type = arguments.get("report_type", "")
    metric = arguments.get("metric", "")

    if report_type not in CHARTED_TYPES:
        return _unknown_report_type("select_metric", report_type, list(CHARTED_TYPES), _elapsed(t0))

    chosen = dashboard.select_metric(report_type, metric)
    series = dashboard.chart_series(report_type)
    return _ok(
        "select_metric",
        {
            "report_type": report_type,
            "selected_metric": chosen,
            "series": series.model_dump() if series is not None else None,
        },
        _elapsed(t0),
    )


async def handle_get_overview(dashboard: StockDashboard, arguments: dict) -> dict:
    t0 = time.perf_counter()
    if dashboard.symbol is None:
        return _no_symbol("get_overview", _elapsed(t0))

    state = dashboard.coordinator.state("overview")
    table = dashboard.overview()
    rows = [row.model_dump() for row in table.rows] if table is not None else None
    return _ok(
        "get_overview",
        {"status": state.status.value, "error": state.error, "rows": rows},
        _elapsed(t0),
        row_count=len(rows) if rows is not None else 0,
    )


async def handle_get_growth_form(dashboard: StockDashboard, arguments: dict) -> dict:
    t0 = time.perf_counter()
    return _ok("get_growth_form", _form_view(dashboard), _elapsed(t0))


async def handle_set_growth_rate(dashboard: StockDashboard, arguments: dict) -> dict:
    """Store one raw growth-rate input.

    Args:
        arguments: {"index": int, "value": str}
    """
    t0 = time.perf_counter()
    index = int(arguments.get("index", -1))
    try:
        dashboard.growth_form.set_value(index, arguments.get("value"))
    except IndexError as exc:
        return _error_response("set_growth_rate", "INVALID_INPUT", str(exc), _elapsed(t0))
    return _ok("set_growth_rate", _form_view(dashboard), _elapsed(t0))


async def handle_focus_growth_rate(dashboard: StockDashboard, arguments: dict) -> dict:
    """Apply an arrow key to the field at ``index``.

    Args:
        arguments: {"index": int, "key": "ArrowUp" | "ArrowDown"}
    """
    t0 = time.perf_counter()
    handled = dashboard.growth_form.handle_key(int(arguments.get("index", 0)), arguments.get("key", ""))
    data = _form_view(dashboard)
    data["handled"] = handled
    return _ok("focus_growth_rate", data, _elapsed(t0))


async def handle_submit_dcf(dashboard: StockDashboard, arguments: dict) -> dict:
    t0 = time.perf_counter()
    await dashboard.submit_growth_rates()
    elapsed = _elapsed(t0)
    form = dashboard.growth_form
    logger.info("submit_dcf result=%s notice=%s ms=%.1f", form.result, form.notice, elapsed)
    return _ok("submit_dcf", _form_view(dashboard), elapsed)
