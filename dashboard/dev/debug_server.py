"""FastAPI debug server – HTTP host for one dashboard session.

A developer convenience for driving the report pipeline without a
browser front end: every user action of the dashboard page has a route,
and chart surfaces are served as embeddable HTML fragments.

Run with:
    python -m dashboard.dev.debug_server
    # → http://localhost:8000/health
    # → http://localhost:8000/docs  (Swagger UI)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Body, Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from dashboard.config import parse_cors_origins, settings
from dashboard.dev.views import (
    handle_focus_growth_rate,
    handle_get_growth_form,
    handle_get_overview,
    handle_get_report,
    handle_load_report,
    handle_open_symbol,
    handle_select_metric,
    handle_set_growth_rate,
    handle_submit_dcf,
)
from dashboard.services.chart_projector import RenderSurface
from dashboard.services.dashboard import CHARTED_TYPES, StockDashboard, chart_target_id
from dashboard.services.data_client import DataServiceClient

logger = logging.getLogger("dashboard.dev.debug_server")

_session: StockDashboard | None = None


def get_dashboard() -> StockDashboard:
    """The single session this server hosts, created on first use."""
    global _session
    if _session is None:
        surfaces = {
            chart_target_id(report_type): RenderSurface(chart_target_id(report_type))
            for report_type in CHARTED_TYPES
        }
        _session = StockDashboard(DataServiceClient(), surfaces=surfaces)
    return _session


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Debug server starting (env=%s)", settings.app_env)
    yield
    if _session is not None:
        await _session.aclose()
    logger.info("Debug server shutting down")


app = FastAPI(
    title="Stock Dashboard – Debug HTTP",
    description="Developer-only HTTP host for the report-rendering pipeline.",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_cors_origins(settings.allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health ────────────────────────────────────────────────────────────────────


@app.get("/health")
async def health():
    return {"status": "ok", "version": settings.app_version}


# ── Reports ───────────────────────────────────────────────────────────────────


@app.put("/dashboard/symbol/{symbol}")
async def open_symbol(symbol: str, dashboard: StockDashboard = Depends(get_dashboard)):
    result = await handle_open_symbol(dashboard, {"symbol": symbol})
    return JSONResponse(content=result)


@app.post("/dashboard/reports/{report_type}/load")
async def load_report(report_type: str, dashboard: StockDashboard = Depends(get_dashboard)):
    result = await handle_load_report(dashboard, {"report_type": report_type})
    return JSONResponse(content=result)


@app.get("/dashboard/reports/{report_type}")
async def get_report(report_type: str, dashboard: StockDashboard = Depends(get_dashboard)):
    result = await handle_get_report(dashboard, {"report_type": report_type})
    return JSONResponse(content=result)


@app.put("/dashboard/reports/{report_type}/metric")
async def select_metric(
    report_type: str,
    metric: str = Query(...),
    dashboard: StockDashboard = Depends(get_dashboard),
):
    result = await handle_select_metric(dashboard, {"report_type": report_type, "metric": metric})
    return JSONResponse(content=result)


@app.get("/dashboard/charts/{report_type}", response_class=HTMLResponse)
async def get_chart(report_type: str, dashboard: StockDashboard = Depends(get_dashboard)):
    handle = dashboard.chart(report_type)
    if handle is None:
        return HTMLResponse("<p>No chart available.</p>", status_code=404)
    return HTMLResponse(handle.to_html())


@app.get("/dashboard/overview")
async def get_overview(dashboard: StockDashboard = Depends(get_dashboard)):
    result = await handle_get_overview(dashboard, {})
    return JSONResponse(content=result)


# ── DCF form ──────────────────────────────────────────────────────────────────


@app.get("/dashboard/growth-rates")
async def get_growth_form(dashboard: StockDashboard = Depends(get_dashboard)):
    result = await handle_get_growth_form(dashboard, {})
    return JSONResponse(content=result)


@app.put("/dashboard/growth-rates/{index}")
async def set_growth_rate(
    index: int,
    value: str = Body("", embed=True),
    dashboard: StockDashboard = Depends(get_dashboard),
):
    result = await handle_set_growth_rate(dashboard, {"index": index, "value": value})
    return JSONResponse(content=result)


@app.post("/dashboard/growth-rates/focus")
async def focus_growth_rate(
    index: int = Body(..., embed=True),
    key: str = Body(..., embed=True),
    dashboard: StockDashboard = Depends(get_dashboard),
):
    result = await handle_focus_growth_rate(dashboard, {"index": index, "key": key})
    return JSONResponse(content=result)


@app.post("/dashboard/dcf")
async def submit_dcf(dashboard: StockDashboard = Depends(get_dashboard)):
    result = await handle_submit_dcf(dashboard, {})
    return JSONResponse(content=result)


# ── Run via uvicorn ───────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "dashboard.dev.debug_server:app",
        host=settings.fastapi_host,
        port=settings.fastapi_port,
        reload=(settings.app_env == "development"),
    )
