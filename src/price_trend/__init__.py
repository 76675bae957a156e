"""Price Trend Module - daily trend series and chart statistics."""

from .aggregator import (
    build_trend_view,
    compute_statistics,
    deduplicate,
    format_today_discount,
    parse_observation,
    parse_observations,
    with_live_today,
)
from .loader import TrendLoader
from .models import PresentationState, PriceObservation, TrendStatistics, TrendView

__all__ = [
    "PresentationState",
    "PriceObservation",
    "TrendLoader",
    "TrendStatistics",
    "TrendView",
    "build_trend_view",
    "compute_statistics",
    "deduplicate",
    "format_today_discount",
    "parse_observation",
    "parse_observations",
    "with_live_today",
]
