"""Push providers — Gotify delivery and a degraded-mode mock."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from fanfare.models.records import DeliveryResult
from fanfare.providers.http import ApiClient

logger = logging.getLogger(__name__)


class GotifyPushProvider:
    """Publishes push messages to a Gotify server.

    Messages go to ``<server_url>/message?token=<app_token>``; the Gotify
    message id from the response becomes the ``message_id``.
    """

    def __init__(self, server_url: str, app_token: str, api_client: ApiClient) -> None:
        self._server_url = server_url.rstrip("/")
        self._app_token = app_token
        self._api = api_client

    @property
    def provider_name(self) -> str:
        return "gotify"

    def is_available(self) -> bool:
        return bool(self._server_url and self._app_token)

    def send_push(self, user_id: str, title: str, body: str, priority: int) -> DeliveryResult:
        if not self.is_available():
            return DeliveryResult.failed(
                self.provider_name, "Gotify server not configured", recipient=user_id
            )

        payload: dict[str, Any] = {
            "title": title,
            "message": body,
            "priority": priority,
            "extras": {
                "userId": user_id,
                "timestamp": int(time.time() * 1000),
            },
        }
        url = f"{self._server_url}/message?token={self._app_token}"
        response = self._api.post(url, payload, headers={"Content-Type": "application/json"})

        if not response.success:
            logger.error("Push to user %s failed: %s", user_id, response.error_message)
            return DeliveryResult.failed(
                self.provider_name,
                response.error_message or "Gotify error",
                recipient=user_id,
                status_code=response.status_code or 500,
            )

        message_id = None
        if isinstance(response.data, dict) and response.data.get("id") is not None:
            message_id = str(response.data["id"])
        logger.info("Push sent to user %s (gotify id=%s)", user_id, message_id)
        return DeliveryResult.ok(self.provider_name, message_id, recipient=user_id)


class MockPushProvider:
    """Degraded-mode push provider: logs each message and reports success."""

    def __init__(self) -> None:
        logger.warning(
            "Push provider running in MOCK mode; no push messages will be delivered. "
            "Set FANFARE_PUSH_PROVIDER=gotify to enable delivery."
        )

    @property
    def provider_name(self) -> str:
        return "push-mock"

    def is_available(self) -> bool:
        return True

    def send_push(self, user_id: str, title: str, body: str, priority: int) -> DeliveryResult:
        logger.warning(
            "[MOCK] Push to user %s not delivered (priority=%d): %s | %s",
            user_id,
            priority,
            title,
            body,
        )
        return DeliveryResult.ok(
            self.provider_name, f"MOCK-PUSH-{uuid.uuid4().hex[:12]}", recipient=user_id
        )
