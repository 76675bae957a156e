# Common utilities and shared modules
"""
Shared components used by the alert engine, the trend aggregator and the
backend client:
- Data models (Pydantic schemas)
- Decimal money helpers
- Logging configuration
- Project configuration
"""

from .config import PROJECT_ROOT, Settings, settings
from .logging import setup_logging
from .money import format_price, round2, to_decimal

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "setup_logging",
    "format_price",
    "round2",
    "to_decimal",
]
