"""Growth-rate input form for the DCF projection.

The form keeps an immutable ``GrowthRateVector``; every edit swaps in a
new copy.  Invalid input never raises: it is stored as ``None``.
"""

from __future__ import annotations

import logging
import math
from enum import IntEnum
from typing import Protocol

from dashboard.config import settings
from dashboard.errors import DashboardError, ServiceRejection
from dashboard.schemas.dcf import DcfResult, GrowthRateVector

logger = logging.getLogger("dashboard.dcf")

GENERIC_FAILURE = "DCF calculation failed."


class FocusDirection(IntEnum):
    UP = -1
    DOWN = 1


_KEY_DIRECTIONS = {"ArrowDown": FocusDirection.DOWN, "ArrowUp": FocusDirection.UP}


class DcfService(Protocol):
    async def submit_dcf(self, vector: GrowthRateVector) -> DcfResult: ...


def parse_rate(raw: str | None) -> float | None:
    """Parse user input into a growth rate.

    A comma decimal separator is accepted (``"1,5"`` -> 1.5).  Empty,
    unparseable and non-finite input yields ``None``.
    """
    if raw is None:
        return None
    text = str(raw).strip().replace(",", ".", 1)
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


class GrowthRateForm:
    """State of the growth-rate form.

    Attributes:
        vector: Current inputs.
        focused: Index of the field holding keyboard focus.
        result: Last DCF value, ``None`` until a submission succeeds.
        notice: Message to show the user after a failed submission.
        submitting: True while a submission is in flight.
    """

    def __init__(self, size: int | None = None) -> None:
        self.vector = GrowthRateVector.empty(size or settings.growth_rate_slots)
        self.focused = 0
        self.result: float | None = None
        self.notice: str | None = None
        self.submitting = False
        # token of the submission in flight, if any
        self._pending: object | None = None

    def __len__(self) -> int:
        return len(self.vector)

    def set_value(self, index: int, raw: str | None) -> GrowthRateVector:
        self.vector = self.vector.with_value(index, parse_rate(raw))
        return self.vector

    def field_label(self, index: int) -> str:
        if not 0 <= index < len(self.vector):
            raise IndexError(f"growth-rate index {index} out of range")
        if index == self.vector.terminal_index:
            return "Terminal Value: "
        return f"Year {index + 1}: "

    def focus_navigate(self, current: int, direction: int) -> int:
        """Move focus one field up or down; moves past either end are ignored."""
        target = current + int(direction)
        if 0 <= target < len(self.vector):
            self.focused = target
        return self.focused

    def handle_key(self, index: int, key: str) -> bool:
        """Arrow-key navigation.  Returns True when *key* was consumed."""
        direction = _KEY_DIRECTIONS.get(key)
        if direction is None:
            return False
        self.focus_navigate(index, direction)
        return True

    async def submit(self, service: DcfService) -> float | None:
        """Send the current vector and record the outcome.

        The previous result is cleared before the request goes out, so a
        failed submission never shows an older value.  When submissions
        overlap, only the most recently issued one updates the form.
        """
        token = object()
        self._pending = token
        self.result = None
        self.notice = None
        self.submitting = True
        result: float | None = None
        notice: str | None = None
        try:
            outcome = await service.submit_dcf(self.vector)
        except ServiceRejection as exc:
            logger.info("DCF submission rejected: %s", exc.message)
            notice = exc.message
        except DashboardError as exc:
            logger.warning("DCF submission failed: %s", exc)
            notice = GENERIC_FAILURE
        else:
            result = outcome.value
            logger.info("DCF result=%s", outcome.value)
        finally:
            latest = self._pending is token
            if latest:
                self._pending = None
                self.submitting = False

        if not latest:
            logger.debug("discarding superseded DCF response")
            return self.result
        self.result = result
        self.notice = notice
        return result
