"""Price-drop alert CRUD endpoints."""

from __future__ import annotations

import logging

from ..common.models import CreateNotificationParams, UpdateNotificationParams
from .client import ApiClient

logger = logging.getLogger(__name__)


class NotificationService:
    """Create, update and delete price-drop alerts."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def create(self, params: CreateNotificationParams) -> None:
        self._client.request(
            "POST",
            "/products/notifications",
            json_body=params.model_dump(by_alias=True),
        )
        logger.info(
            "Created alert for %s at %.2f", params.activity_id, params.target_price
        )

    def update(self, activity_id: str, params: UpdateNotificationParams) -> None:
        self._client.request(
            "PUT",
            f"/products/notifications/{activity_id}",
            json_body=params.model_dump(by_alias=True),
        )
        logger.info("Updated alert for %s to %.2f", activity_id, params.target_price)

    def delete(self, activity_id: str) -> None:
        self._client.request("DELETE", f"/products/notifications/{activity_id}")
        logger.info("Deleted alert for %s", activity_id)
