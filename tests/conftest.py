"""Shared test fixtures for the deal monitor."""

import sys
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.config import ApiSettings


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def today() -> date:
    """A fixed 'today' so trend tests never depend on the wall clock."""
    return date(2024, 1, 2)


@pytest.fixture
def sample_product_data() -> dict:
    """Return a product as the listing service sends it."""
    return {
        "id": 17,
        "activityId": "tt-20240101-0042",
        "platform": "探探糖",
        "region": "广州",
        "title": "霸王茶姬 伯牙绝弦 中杯",
        "shopName": "霸王茶姬(天河店)",
        "originalPrice": 19.0,
        "currentPrice": 9.9,
        "salesStatus": 1,
        "salesStatusText": "在售",
        "hasNotification": True,
        "targetPrice": 7.5,
    }


@pytest.fixture
def raw_trend() -> list[dict]:
    """Raw trend samples: duplicated days, unordered, with a date-time string."""
    return [
        {"date": "2024-01-02T09:30:00+08:00", "price": 9},
        {"date": "2024-01-01", "price": 10},
        {"date": "2024-01-01T18:00:00", "price": 8},
    ]


@pytest.fixture
def api_settings() -> ApiSettings:
    """API settings pointing at a fake host with no retry delay worth waiting for."""
    return ApiSettings(
        base_url="http://api.test/api",
        timeout_seconds=5,
        max_retries=3,
        user_key="https://api.day.app/DeviceKey123",
    )


def _make_response(status_code: int = 200, payload: object = None) -> MagicMock:
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.content = b"" if payload is None else b"{}"
    resp.json.return_value = payload
    if status_code >= 400:
        error = requests.HTTPError(f"{status_code} Error")
        error.response = resp
        resp.raise_for_status.side_effect = error
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def make_response():
    """Factory for mocked ``requests.Response`` objects."""
    return _make_response
