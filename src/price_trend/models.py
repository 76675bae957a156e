"""Data models for price trend charting."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


def _num(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


@dataclass(frozen=True)
class PriceObservation:
    """One recorded price for a product on a given day.

    Maps to the trend service contract: { date, price }
    """

    date: date
    price: Decimal

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "price": float(self.price)}


@dataclass(frozen=True)
class TrendStatistics:
    """Summary numbers shown above the chart.

    All fields are None for an empty series. ``today_peak_price`` and
    ``today_discount_percent`` are set only when today's highest raw sample
    is above the live price.
    """

    min_price: Decimal | None = None
    max_price: Decimal | None = None
    latest_change: Decimal | None = None
    today_peak_price: Decimal | None = None
    today_discount_percent: Decimal | None = None

    def to_dict(self) -> dict:
        return {
            "min_price": _num(self.min_price),
            "max_price": _num(self.max_price),
            "latest_change": _num(self.latest_change),
            "today_peak_price": _num(self.today_peak_price),
            "today_discount_percent": _num(self.today_discount_percent),
        }


class PresentationState(str, Enum):
    """Lifecycle of the trend panel."""
    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"


@dataclass(frozen=True)
class TrendView:
    """Everything the chart needs for one render."""

    state: PresentationState
    series: tuple[PriceObservation, ...] = ()
    statistics: TrendStatistics = field(default_factory=TrendStatistics)

    @classmethod
    def loading(cls) -> TrendView:
        return cls(state=PresentationState.LOADING)

    @classmethod
    def empty(cls) -> TrendView:
        return cls(state=PresentationState.EMPTY)

    @property
    def labels(self) -> list[str]:
        """X-axis labels in MM-DD form."""
        return [obs.date.strftime("%m-%d") for obs in self.series]

    @property
    def prices(self) -> list[Decimal]:
        return [obs.price for obs in self.series]

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "labels": self.labels,
            "series": [obs.to_dict() for obs in self.series],
            "statistics": self.statistics.to_dict(),
        }
