"""Per-report load state."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class LoadState(BaseModel):
    """Tagged variant over idle / loading / loaded(data) / failed(error).

    ``data`` is only set when loaded and ``error`` only when failed, so a
    failed slot never carries a stale payload.
    """

    model_config = ConfigDict(frozen=True)

    status: LoadStatus = LoadStatus.IDLE
    data: Any | None = None
    error: str | None = None

    @classmethod
    def idle(cls) -> "LoadState":
        return cls(status=LoadStatus.IDLE)

    @classmethod
    def loading(cls) -> "LoadState":
        return cls(status=LoadStatus.LOADING)

    @classmethod
    def loaded(cls, data: Any) -> "LoadState":
        return cls(status=LoadStatus.LOADED, data=data)

    @classmethod
    def failed(cls, error: str) -> "LoadState":
        return cls(status=LoadStatus.FAILED, error=error)

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.status is LoadStatus.LOADED
