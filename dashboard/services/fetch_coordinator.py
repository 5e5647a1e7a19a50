"""Per-report asynchronous loading with independent state slots.

Each report type owns one ``LoadState`` slot.  ``load`` moves exactly that
slot through idle -> loading -> loaded | failed and publishes every
transition to subscribers.

A symbol change bumps a generation counter.  Responses that arrive for an
older generation are dropped, so a slow request for the previous symbol
can never overwrite the current one.  In-flight requests are not
cancelled.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Protocol

from dashboard.errors import DashboardError
from dashboard.schemas.load_state import LoadState, LoadStatus
from dashboard.schemas.reports import AUTO_TYPES, STATEMENT_TYPES, ReportType, report_tag
from dashboard.services.data_client import resource_path

logger = logging.getLogger("dashboard.fetch")

StateListener = Callable[[str, LoadState], None]

DEFAULT_REPORT_TYPES: tuple[ReportType, ...] = AUTO_TYPES + STATEMENT_TYPES


class ReportSource(Protocol):
    async def fetch(self, symbol: str, report_type: str): ...


class FetchCoordinator:
    """Owns the load-state slots for the active symbol.

    Attributes:
        symbol: The active symbol, or ``None`` before the first ``reset``.
    """

    def __init__(
        self,
        source: ReportSource,
        report_types: Iterable[str] = DEFAULT_REPORT_TYPES,
    ) -> None:
        self._source = source
        self._states: dict[str, LoadState] = {report_tag(rt): LoadState.idle() for rt in report_types}
        # report type -> token of the most recently issued load
        self._latest: dict[str, object] = {}
        self._listeners: list[StateListener] = []
        self._generation = 0
        self.symbol: str | None = None

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def state(self, report_type: str) -> LoadState:
        return self._states[report_tag(report_type)]

    def states(self) -> dict[str, LoadState]:
        return dict(self._states)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* for every slot transition.  Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def reset(self, symbol: str) -> None:
        """Make *symbol* active and return every slot to idle."""
        self._generation += 1
        self.symbol = symbol
        self._latest.clear()
        for report_type, state in self._states.items():
            if state.status is not LoadStatus.IDLE:
                self._publish(report_type, LoadState.idle())
        logger.info("reset symbol=%s generation=%d", symbol, self._generation)

    async def load(self, symbol: str, report_type: str) -> LoadState:
        """Load one report for the active symbol and return the slot's final state.

        A request for any other symbol is dropped without touching state.

        Raises:
            KeyError: *report_type* has no slot.
        """
        tag = report_tag(report_type)
        if tag not in self._states:
            raise KeyError(f"unknown report type '{tag}'")
        if symbol != self.symbol:
            logger.info("ignoring load of %s for %s (active symbol %s)", tag, symbol, self.symbol)
            return self._states[tag]

        generation = self._generation
        token = object()
        self._latest[tag] = token
        self._publish(tag, LoadState.loading())

        path = resource_path(symbol, tag)
        t0 = time.perf_counter()
        try:
            data = await self._source.fetch(symbol, tag)
        except DashboardError as exc:
            outcome = LoadState.failed(str(exc))
            logger.warning("load %s failed: %s", path, exc)
        else:
            outcome = LoadState.loaded(data)
        elapsed = round((time.perf_counter() - t0) * 1000, 2)

        if generation != self._generation:
            logger.info("discarding stale response for %s (active symbol %s)", path, self.symbol)
            return self._states[tag]
        if self._latest.get(tag) is not token:
            logger.debug("discarding superseded response for %s", path)
            return self._states[tag]

        self._publish(tag, outcome)
        logger.info("load %s status=%s ms=%.1f", path, outcome.status.value, elapsed)
        return outcome

    def _publish(self, report_type: str, state: LoadState) -> None:
        self._states[report_type] = state
        for listener in list(self._listeners):
            listener(report_type, state)
