"""Backend Client Module - thin wrappers around the deal REST API."""

from .client import ApiClient, ApiError, normalize_bark_key
from .notification_service import NotificationService
from .product_service import ProductService

__all__ = [
    "ApiClient",
    "ApiError",
    "NotificationService",
    "ProductService",
    "normalize_bark_key",
]
