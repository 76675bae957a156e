"""Shared Pydantic data models for the deal monitor.

These models define the wire contracts with the deal backend REST API.
Field names follow the backend's camelCase JSON; Python code uses the
snake_case attribute names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class _CamelModel(BaseModel):
    model_config = {"populate_by_name": True}


# === Response envelope ===

class ResponseMeta(BaseModel):
    """Pagination metadata attached to list responses."""
    total: int = 0
    page: int = 0
    limit: int = 0


class ApiResponse(BaseModel):
    """Standard envelope: ``{code, data, message, meta}``."""
    code: int
    data: Any = None
    message: str = ""
    meta: ResponseMeta | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300


# === Products ===

class Product(_CamelModel):
    """A deal listed by one of the delivery platforms."""
    id: int = 0
    activity_id: str = Field(alias="activityId")
    platform: str = ""
    region: str = ""
    title: str = ""
    shop_name: str = Field(default="", alias="shopName")
    original_price: float = Field(default=0.0, ge=0, alias="originalPrice")
    current_price: float = Field(default=0.0, ge=0, alias="currentPrice")
    sales_status: int = Field(default=0, alias="salesStatus")
    sales_status_text: str = Field(default="", alias="salesStatusText")
    discount: float | None = None
    drop_rate: float | None = Field(default=None, alias="dropRate")
    has_notification: bool = Field(default=False, alias="hasNotification")
    target_price: float | None = Field(default=None, alias="targetPrice")


class PriceTrendRecord(BaseModel):
    """One raw sample from the price-trend service.

    ``date`` is kept as the string the service sent (ISO-8601 date or
    date-time); parsing and validation happen in the trend aggregator.
    """
    date: str
    price: float


# === Notifications ===

class CreateNotificationParams(_CamelModel):
    """Body of ``POST /products/notifications``."""
    activity_id: str = Field(alias="activityId")
    target_price: float = Field(gt=0, alias="targetPrice")


class UpdateNotificationParams(_CamelModel):
    """Body of ``PUT /products/notifications/{activityId}``."""
    target_price: float = Field(gt=0, alias="targetPrice")

