"""HTTP client for the deal backend REST API, with retry and user identity."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from ..common.config import ApiSettings, settings
from ..common.models import ApiResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The backend rejected a request (4xx or a non-success envelope code)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def normalize_bark_key(value: str) -> str:
    """Reduce a Bark push URL to its device key.

    ``https://api.day.app/AbCdEf`` and ``AbCdEf`` both identify the same
    user; the backend expects the bare key in ``X-User-ID``.
    """
    trimmed = value.strip()
    if trimmed.startswith("http"):
        parts = trimmed.split("/")
        return parts[-1] or trimmed
    return trimmed


class ApiClient:
    """Thin wrapper around a requests session bound to the API base URL.

    Features:
    - JSON envelope unwrapping (``{code, data, message}``)
    - ``X-User-ID`` header derived from the Bark key
    - Automatic retries with exponential backoff on connection errors,
      5xx and 429

    Usage:
        with ApiClient() as client:
            trend = client.request("GET", "/products/abc/trend")
    """

    BACKOFF_BASE = 2.0

    def __init__(
        self,
        api_settings: ApiSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = api_settings or settings.api
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        user_id = normalize_bark_key(self.settings.user_key)
        if user_id:
            self._session.headers["X-User-ID"] = user_id

    def url(self, path: str) -> str:
        return self.settings.base_url.rstrip("/") + "/" + path.lstrip("/")

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> ApiResponse:
        """Send a request and return the decoded envelope.

        Raises:
            ApiError: On a 4xx response or a non-success envelope code.
            requests.RequestException: After all retries exhausted.
        """
        url = self.url(path)
        attempts = max(self.settings.max_retries, 1)
        last_exc: Exception | None = None

        for attempt in range(attempts):
            try:
                resp = self._session.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    timeout=self.settings.timeout_seconds,
                )
                resp.raise_for_status()
                return self._decode(resp)

            except requests.RequestException as exc:
                last_exc = exc

                # 4xx other than 429 will not change on retry
                if (
                    isinstance(exc, requests.HTTPError)
                    and exc.response is not None
                    and 400 <= exc.response.status_code < 500
                    and exc.response.status_code != 429
                ):
                    logger.warning("%s %s failed (4xx, no retry): %s", method, url, exc)
                    raise ApiError(
                        _error_message(exc.response),
                        status_code=exc.response.status_code,
                    ) from exc

                if attempt + 1 >= attempts:
                    break

                wait_time = self.BACKOFF_BASE ** attempt
                logger.warning(
                    "%s %s failed (attempt %d/%d): %s, retrying in %.1fs",
                    method,
                    url,
                    attempt + 1,
                    attempts,
                    exc,
                    wait_time,
                )
                time.sleep(wait_time)

        logger.error("%s %s failed after %d attempts", method, url, attempts)
        raise last_exc  # type: ignore[misc]

    @staticmethod
    def _decode(resp: requests.Response) -> ApiResponse:
        if not resp.content:
            return ApiResponse(code=resp.status_code)
        try:
            payload = resp.json()
        except ValueError:
            return ApiResponse(code=resp.status_code)
        if not isinstance(payload, dict) or "code" not in payload:
            return ApiResponse(code=resp.status_code, data=payload)
        envelope = ApiResponse(**payload)
        if not envelope.ok:
            raise ApiError(envelope.message or "request failed", status_code=envelope.code)
        return envelope

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _error_message(resp: requests.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return f"HTTP {resp.status_code}"
