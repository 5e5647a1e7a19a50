"""DCF submission schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GrowthRateVector(BaseModel):
    """Fixed-length growth-rate inputs: yearly projections then the terminal value.

    Unset entries are ``None``.  The vector is immutable; ``with_value``
    returns a copy with a single entry replaced.
    """

    model_config = ConfigDict(frozen=True)

    rates: tuple[float | None, ...]

    @classmethod
    def empty(cls, size: int) -> "GrowthRateVector":
        if size < 1:
            raise ValueError("growth-rate vector needs at least one slot")
        return cls(rates=(None,) * size)

    def with_value(self, index: int, value: float | None) -> "GrowthRateVector":
        if not 0 <= index < len(self.rates):
            raise IndexError(f"growth-rate index {index} out of range 0..{len(self.rates) - 1}")
        rates = list(self.rates)
        rates[index] = value
        return GrowthRateVector(rates=tuple(rates))

    @property
    def terminal_index(self) -> int:
        return len(self.rates) - 1

    def __len__(self) -> int:
        return len(self.rates)


class DcfRequest(BaseModel):
    """Body posted to the DCF endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    growth_rates: list[float | None] = Field(..., alias="growthRates")


class DcfResult(BaseModel):
    """Successful DCF response."""

    value: float
    message: str | None = None
