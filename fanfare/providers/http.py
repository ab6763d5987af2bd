"""Outbound HTTP client shared by the HTTP-based providers.

Every request carries a fixed timeout.  Transport errors and timeouts
(status 500) and non-2xx responses (their own status) are folded into an
unsuccessful ``ApiResponse`` rather than raised, so a slow or broken
provider fails exactly one channel send.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


class ApiResponse(BaseModel):
    """Normalized outcome of an outbound HTTP call."""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Any = None
    status_code: int = 0
    error_message: str | None = None


class ApiClient:
    """Thin synchronous wrapper around ``httpx.Client``.

    Parameters
    ----------
    timeout:
        Request timeout in seconds, applied to connect, read, write and pool.
    client:
        Pre-built ``httpx.Client``.  When omitted one is created and owned
        by this instance.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def post(
        self,
        url: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        *,
        content: str | bytes | None = None,
    ) -> ApiResponse:
        """POST *body* as JSON (or raw *content*) and return an ``ApiResponse``."""
        logger.info("POST: %s", _redact(url))
        try:
            if content is not None:
                response = self._client.post(url, content=content, headers=headers)
            else:
                response = self._client.post(url, json=body, headers=headers)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("POST timed out after %ss: %s", self._timeout, _redact(url))
            return ApiResponse(success=False, status_code=500, error_message=f"Timeout: {exc}")
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("POST failed with HTTP %d: %s", status, _redact(url))
            return ApiResponse(
                success=False,
                status_code=status,
                error_message=f"HTTP {status}: {exc.response.text}",
            )
        except httpx.HTTPError as exc:
            logger.error("POST failed: %s (%s)", _redact(url), exc)
            return ApiResponse(success=False, status_code=500, error_message=str(exc) or "Unknown error")

        return ApiResponse(success=True, data=_decode(response), status_code=response.status_code)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text


def _redact(url: str) -> str:
    # Push gateway tokens travel in the query string.
    return url.split("?", 1)[0]
