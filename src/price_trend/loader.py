"""Fetch a product's trend from the backend and build its view."""

from __future__ import annotations

import logging
from datetime import date

import requests

from ..backend.client import ApiError
from ..backend.product_service import ProductService
from .aggregator import build_trend_view
from .models import TrendView

logger = logging.getLogger(__name__)


class TrendLoader:
    """Load trend data for the chart panel.

    A failed fetch yields an EMPTY view, the same panel shown for a product
    with no history; the failure is logged.
    """

    def __init__(self, service: ProductService) -> None:
        self._service = service

    def load(
        self,
        activity_id: str,
        reference_price: object,
        today: date | None = None,
    ) -> TrendView:
        today = today or date.today()
        try:
            raw = self._service.get_price_trend(activity_id)
        except (ApiError, requests.RequestException) as exc:
            logger.warning("Price trend fetch failed for %s: %s", activity_id, exc)
            return TrendView.empty()

        view = build_trend_view(raw, reference_price, today)
        logger.info(
            "Trend for %s: %d raw samples, %d points (%s)",
            activity_id,
            len(raw),
            len(view.series),
            view.state.value,
        )
        return view
