"""Tests for the FastAPI debug host, driven through httpx.ASGITransport."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from dashboard.dev.debug_server import app, get_dashboard


@pytest_asyncio.fixture
async def api(dashboard):
    app.dependency_overrides[get_dashboard] = lambda: dashboard
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://debug") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health(api):
    resp = await api.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_open_symbol(api):
    resp = await api.put("/dashboard/symbol/aapl")
    body = resp.json()
    assert body["ok"] is True
    assert body["data"]["symbol"] == "AAPL"
    assert body["data"]["states"]["stocks"] == "loaded"
    assert body["data"]["states"]["incomeStatement"] == "idle"


@pytest.mark.asyncio
async def test_open_blank_symbol_is_invalid(api):
    body = (await api.put("/dashboard/symbol/%20")).json()
    assert body["ok"] is False
    assert body["error"]["error_code"] == "INVALID_INPUT"
    assert body["error"]["message"] == "Please enter a company symbol."


@pytest.mark.asyncio
async def test_load_report_before_symbol(api):
    body = (await api.post("/dashboard/reports/incomeStatement/load")).json()
    assert body["ok"] is False
    assert body["error"]["error_code"] == "NO_SYMBOL"


@pytest.mark.asyncio
async def test_load_report(api):
    await api.put("/dashboard/symbol/AAPL")
    body = (await api.post("/dashboard/reports/incomeStatement/load")).json()

    assert body["ok"] is True
    data = body["data"]
    assert data["title"] == "Annual Income Statement"
    assert data["status"] == "loaded"
    assert data["control_enabled"] is True
    assert data["selected_metric"] == "grossProfit"
    assert body["meta"]["row_count"] == 3
    assert data["table"]["columns"][0]["align"] == "center"
    assert data["series"]["labels"][0] == "2021-09-30"
    assert data["metrics"][0] == {
        "key": "fiscalDateEnding",
        "label": "Fiscal Year End Date",
        "selectable": False,
    }


@pytest.mark.asyncio
async def test_load_rejects_automatic_reports(api):
    await api.put("/dashboard/symbol/AAPL")
    body = (await api.post("/dashboard/reports/stocks/load")).json()
    assert body["error"]["error_code"] == "UNKNOWN_REPORT_TYPE"


@pytest.mark.asyncio
async def test_select_metric_and_chart_html(api):
    await api.put("/dashboard/symbol/AAPL")
    await api.post("/dashboard/reports/incomeStatement/load")

    body = (await api.put("/dashboard/reports/incomeStatement/metric", params={"metric": "netIncome"})).json()
    assert body["data"]["selected_metric"] == "netIncome"
    assert body["data"]["series"]["series_name"] == "Net Income"

    resp = await api.get("/dashboard/charts/incomeStatement")
    assert resp.status_code == 200
    assert 'id="incomeStatementChart"' in resp.text


@pytest.mark.asyncio
async def test_chart_missing_until_loaded(api):
    await api.put("/dashboard/symbol/AAPL")
    resp = await api.get("/dashboard/charts/balanceSheet")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_overview(api):
    await api.put("/dashboard/symbol/AAPL")
    body = (await api.get("/dashboard/overview")).json()
    assert body["data"]["status"] == "loaded"
    labels = {row["key"]: row["label"] for row in body["data"]["rows"]}
    assert labels["evToEBITDA"] == "Ev To EBITDA"
    assert "description" not in labels


@pytest.mark.asyncio
async def test_growth_rate_form_flow(api, services):
    services.dcf({"value": 187.42, "message": "DCF calculated"})

    form = (await api.get("/dashboard/growth-rates")).json()["data"]
    assert len(form["fields"]) == 11
    assert form["fields"][10]["label"] == "Terminal Value: "

    form = (await api.put("/dashboard/growth-rates/0", json={"value": "1,5"})).json()["data"]
    assert form["fields"][0]["value"] == 1.5

    focus = (await api.post("/dashboard/growth-rates/focus", json={"index": 0, "key": "ArrowDown"})).json()
    assert focus["data"]["focused"] == 1
    assert focus["data"]["handled"] is True

    result = (await api.post("/dashboard/dcf")).json()["data"]
    assert result["result"] == 187.42
    assert result["notice"] is None
    assert result["submitting"] is False


@pytest.mark.asyncio
async def test_growth_rate_index_out_of_range(api):
    body = (await api.put("/dashboard/growth-rates/11", json={"value": "3"})).json()
    assert body["ok"] is False
    assert body["error"]["error_code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_dcf_rejection_notice(api, services):
    services.dcf({"error": "Terminal value is required"}, status=400)
    body = (await api.post("/dashboard/dcf")).json()
    assert body["data"]["result"] is None
    assert body["data"]["notice"] == "Terminal value is required"
