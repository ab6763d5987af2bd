"""Authenticated client for the parent service.

Each request is signed with a shared secret.  The JSON body is serialized
exactly once; the same string is signed and sent, so the parent service
can recompute the signature byte-for-byte.

Headers
-------
X-Service-Key   the service's API key
X-Timestamp     ISO-8601 UTC timestamp of the request
X-Signature     base64(HMAC-SHA256(secret, timestamp + body + endpoint))
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from fanfare.providers.http import ApiClient, ApiResponse
from fanfare.security.signing import generate_signature, iso_timestamp

logger = logging.getLogger(__name__)


class ParentServiceClient:
    """Posts signed JSON requests to the parent service."""

    def __init__(
        self,
        server_url: str,
        api_key: str,
        secret_key: str,
        api_client: ApiClient,
    ) -> None:
        self._server_url = server_url.rstrip("/")
        self._api_key = api_key
        self._secret_key = secret_key
        self._api = api_client

    @property
    def provider_name(self) -> str:
        return "parent-service"

    def is_available(self) -> bool:
        return bool(self._server_url and self._api_key and self._secret_key)

    def build_headers(self, endpoint: str, body_json: str) -> dict[str, str]:
        timestamp = iso_timestamp()
        signature = generate_signature(timestamp, body_json, endpoint, self._secret_key)
        return {
            "X-Service-Key": self._api_key,
            "X-Timestamp": timestamp,
            "X-Signature": signature,
            "Content-Type": "application/json",
        }

    def post_with_auth(self, endpoint: str, body: Any) -> ApiResponse:
        """POST *body* to *endpoint* (a path beginning with ``/``)."""
        if not self.is_available():
            return ApiResponse(
                success=False, status_code=500, error_message="Parent service not configured"
            )
        body_json = json.dumps(body, separators=(",", ":"), default=str)
        headers = self.build_headers(endpoint, body_json)
        logger.debug("Signed request to parent service %s", endpoint)
        return self._api.post(f"{self._server_url}{endpoint}", content=body_json, headers=headers)


class MockParentServiceClient:
    """Degraded-mode parent-service client: records requests, never sends."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, Any]] = []
        logger.warning(
            "Parent service client running in MOCK mode; in-app notifications "
            "will not be delivered. Set FANFARE_IN_APP_PROVIDER=parent to enable delivery."
        )

    @property
    def provider_name(self) -> str:
        return "parent-service-mock"

    def is_available(self) -> bool:
        return True

    def post_with_auth(self, endpoint: str, body: Any) -> ApiResponse:
        self.requests.append((endpoint, body))
        logger.warning("[MOCK] Parent service request to %s not sent", endpoint)
        return ApiResponse(
            success=True,
            status_code=200,
            data={"id": f"MOCK-INAPP-{uuid.uuid4().hex[:12]}"},
        )
