"""Shared pytest fixtures – remote services faked with httpx.MockTransport."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest
import pytest_asyncio

from dashboard.services.chart_projector import RenderSurface
from dashboard.services.dashboard import CHARTED_TYPES, StockDashboard, chart_target_id
from dashboard.services.data_client import DataServiceClient
from samples import BALANCE_SHEET, CASH_FLOW, INCOME_STATEMENT, OVERVIEW, PRICES

DATA_URL = "http://data.test/api/stockDashboard"
DCF_URL = "http://data.test/api"


class FakeServices:
    """Route table standing in for the data service and the DCF service.

    Routes are keyed by (method, path).  A path can be gated with an
    ``asyncio.Event`` to hold its response in flight until the test
    releases it.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.requests: list[httpx.Request] = []

    def report(self, symbol: str, report_type: str, payload: Any, status: int = 200) -> None:
        self.routes[("GET", f"/api/stockDashboard/{symbol}/{report_type}")] = (status, payload)

    def dcf(self, payload: Any, status: int = 200) -> None:
        self.routes[("POST", "/api/dcfData")] = (status, payload)

    def gate(self, symbol: str, report_type: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[f"/api/stockDashboard/{symbol}/{report_type}"] = event
        return event

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        gate = self.gates.get(request.url.path)
        if gate is not None:
            await gate.wait()
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"detail": "not found"})
        status, payload = route
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)


@pytest.fixture
def services() -> FakeServices:
    fake = FakeServices()
    for symbol in ("AAPL", "MSFT"):
        fake.report(symbol, "stocks", PRICES)
        fake.report(symbol, "overview", {**OVERVIEW, "symbol": symbol})
        fake.report(symbol, "incomeStatement", INCOME_STATEMENT)
        fake.report(symbol, "balanceSheet", BALANCE_SHEET)
        fake.report(symbol, "cashFlowStatement", CASH_FLOW)
    return fake


@pytest_asyncio.fixture
async def client(services: FakeServices):
    async with httpx.AsyncClient(transport=httpx.MockTransport(services.handle)) as http:
        yield DataServiceClient(http, data_service_url=DATA_URL, dcf_service_url=DCF_URL)


@pytest.fixture
def surfaces() -> dict[str, RenderSurface]:
    return {
        chart_target_id(report_type): RenderSurface(chart_target_id(report_type))
        for report_type in CHARTED_TYPES
    }


@pytest.fixture
def dashboard(client: DataServiceClient, surfaces: dict[str, RenderSurface]) -> StockDashboard:
    return StockDashboard(client, surfaces=surfaces)
