"""Async HTTP client for the stock data service and the DCF compute service.

Both services are opaque collaborators.  Every failure leaves this module
as a ``DashboardError`` subclass:

- ``NetworkFailure`` for transport errors and non-2xx statuses;
- ``ParseFailure`` for bodies that are not JSON or not the expected shape;
- ``ServiceRejection`` for a structured ``{"error": ...}`` from the DCF
  endpoint, whose message is meant for the user.

No retries are attempted; each call is a single request.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any

import httpx

from dashboard.config import settings
from dashboard.errors import NetworkFailure, ParseFailure, ServiceRejection
from dashboard.schemas.dcf import DcfRequest, DcfResult, GrowthRateVector
from dashboard.schemas.reports import ReportRecord, ReportType, report_tag

logger = logging.getLogger("dashboard.client")


def resource_path(symbol: str, report_type: str) -> str:
    """Deterministic data-service path for a (symbol, report type) pair."""
    return f"{symbol}/{report_tag(report_type)}"


class DataServiceClient:
    """Thin wrapper around ``httpx.AsyncClient``.

    Pass *http* to share a client (tests hand in one built on
    ``httpx.MockTransport``); otherwise the wrapper owns its client and
    closes it in ``aclose``.
    """

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        *,
        data_service_url: str | None = None,
        dcf_service_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.data_service_url = (data_service_url or settings.data_service_url).rstrip("/")
        self.dcf_service_url = (dcf_service_url or settings.dcf_service_url).rstrip("/")
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.request_timeout_seconds
        )

    async def __aenter__(self) -> "DataServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Data service
    # ------------------------------------------------------------------

    async def fetch(self, symbol: str, report_type: str) -> list[ReportRecord] | dict[str, Any]:
        """Fetch one resource: a record list, or a single object for ``overview``."""
        if report_type == ReportType.OVERVIEW:
            return await self.fetch_overview(symbol)
        return await self.fetch_report(symbol, report_type)

    async def fetch_report(self, symbol: str, report_type: str) -> list[ReportRecord]:
        url = f"{self.data_service_url}/{resource_path(symbol, report_type)}"
        payload = await self._get_json(url)
        if not isinstance(payload, list):
            raise ParseFailure(url, f"expected a JSON array, got {type(payload).__name__}")
        if not all(isinstance(item, dict) for item in payload):
            raise ParseFailure(url, "expected every array item to be a JSON object")
        return payload

    async def fetch_overview(self, symbol: str) -> dict[str, Any]:
        url = f"{self.data_service_url}/{resource_path(symbol, ReportType.OVERVIEW)}"
        payload = await self._get_json(url)
        if not isinstance(payload, dict):
            raise ParseFailure(url, f"expected a JSON object, got {type(payload).__name__}")
        return payload

    async def _get_json(self, url: str) -> Any:
        t0 = time.perf_counter()
        try:
            resp = await self._http.get(url)
        except httpx.HTTPError as exc:
            raise NetworkFailure(url, None, str(exc) or type(exc).__name__) from exc

        elapsed = round((time.perf_counter() - t0) * 1000, 2)
        logger.debug("GET %s status=%d ms=%.1f", url, resp.status_code, elapsed)

        if not resp.is_success:
            raise NetworkFailure(url, resp.status_code, resp.reason_phrase)
        try:
            return resp.json()
        except ValueError as exc:
            raise ParseFailure(url, "body is not valid JSON") from exc

    # ------------------------------------------------------------------
    # DCF service
    # ------------------------------------------------------------------

    async def submit_dcf(self, vector: GrowthRateVector) -> DcfResult:
        """POST the growth-rate vector and return the computed DCF value."""
        url = f"{self.dcf_service_url}/dcfData"
        body = DcfRequest(growth_rates=list(vector.rates)).model_dump(by_alias=True)
        try:
            resp = await self._http.post(url, json=body)
        except httpx.HTTPError as exc:
            raise NetworkFailure(url, None, str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            message = _structured_error(resp)
            if message is not None:
                raise ServiceRejection(message)
            raise NetworkFailure(url, resp.status_code, resp.text or resp.reason_phrase)

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ParseFailure(url, "body is not valid JSON") from exc

        value = payload.get("value") if isinstance(payload, dict) else None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ParseFailure(url, "response carries no numeric 'value'")
        message = payload.get("message")
        return DcfResult(value=float(value), message=message if isinstance(message, str) else None)


def _structured_error(resp: httpx.Response) -> str | None:
    """Return the ``error`` string of a ``{"error": ...}`` body, if there is one."""
    try:
        payload = resp.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("error"), str) and payload["error"]:
        return payload["error"]
    return None
