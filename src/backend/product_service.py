"""Product listing, price trend and block/unblock endpoints."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..common.models import PriceTrendRecord, Product
from .client import ApiClient

logger = logging.getLogger(__name__)


class ProductService:
    """Read products and their price history from the backend."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_products(self, filters: dict[str, Any] | None = None) -> list[Product]:
        """List products. Empty strings and ``False`` filters are not sent."""
        params = {
            key: str(value).lower() if isinstance(value, bool) else str(value)
            for key, value in (filters or {}).items()
            if value is not None and value is not False and value != ""
        }
        resp = self._client.request("GET", "/products", params=params)
        products = [Product(**item) for item in resp.data or []]
        logger.debug("Fetched %d products (filters=%s)", len(products), params)
        return products

    def get_price_trend(self, activity_id: str) -> list[PriceTrendRecord]:
        """Raw, unordered trend samples for one product.

        Items that do not even have the ``{date, price}`` shape are skipped
        here; bad dates inside well-shaped items are left to the aggregator.
        """
        resp = self._client.request("GET", f"/products/{activity_id}/trend")
        records: list[PriceTrendRecord] = []
        for item in resp.data or []:
            try:
                records.append(PriceTrendRecord.model_validate(item))
            except ValidationError:
                logger.warning("Skipping malformed trend item for %s: %r", activity_id, item)
        return records

    def block_product(self, activity_id: str) -> None:
        self._client.request("POST", f"/products/{activity_id}/block")
        logger.info("Blocked product %s", activity_id)

    def unblock_product(self, activity_id: str) -> None:
        self._client.request("POST", f"/products/unblock/{activity_id}")
        logger.info("Unblocked product %s", activity_id)

    def get_blocked_products(self) -> list[Product]:
        resp = self._client.request("GET", "/products/blocked")
        return [Product(**item) for item in resp.data or []]
