"""SMS providers — HTTP gateway delivery and a degraded-mode mock.

The gateway accepts a batch of ``{receiver, content}`` messages in a single
request and answers with one ``success`` flag for the whole batch, so a
batch send yields one ``DeliveryResult`` per receiver that all share the
same outcome.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from fanfare.models.records import DeliveryResult
from fanfare.providers.http import ApiClient

logger = logging.getLogger(__name__)


def normalize_phone(phone: str) -> str:
    """Strip whitespace and a leading ``+`` from an E.164 number."""
    phone = phone.strip()
    return phone[1:] if phone.startswith("+") else phone


class HttpSmsProvider:
    """Sends SMS through a JSON HTTP gateway.

    Parameters
    ----------
    api_url:
        Gateway endpoint receiving the batch payload.
    api_key:
        Value sent verbatim in the ``Authorization`` header.
    api_client:
        Shared ``ApiClient`` (carries the request timeout).
    """

    def __init__(self, api_url: str, api_key: str, api_client: ApiClient) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._api = api_client

    @property
    def provider_name(self) -> str:
        return "http-sms"

    def is_available(self) -> bool:
        return bool(self._api_url and self._api_key)

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def send_sms(self, to: str, body: str, sender_id: str) -> DeliveryResult:
        results = self.send_sms_batch_custom({to: body}, sender_id)
        return results[0]

    def send_sms_batch(
        self, recipients: list[str], body: str, sender_id: str
    ) -> list[DeliveryResult]:
        return self.send_sms_batch_custom({to: body for to in recipients}, sender_id)

    def send_sms_batch_custom(
        self, recipient_messages: dict[str, str], sender_id: str
    ) -> list[DeliveryResult]:
        """Send a distinct message to each receiver in one gateway request."""
        if not recipient_messages:
            return []
        if not self.is_available():
            return [
                DeliveryResult.failed(
                    self.provider_name, "SMS gateway not configured", recipient=to
                )
                for to in recipient_messages
            ]

        payload: dict[str, Any] = {
            "sender_name": sender_id,
            "is_scheduled": False,
            "scheduled_date": None,
            "messages": [
                {"receiver": normalize_phone(to), "content": content}
                for to, content in recipient_messages.items()
            ],
        }
        response = self._api.post(
            self._api_url,
            payload,
            headers={"Authorization": self._api_key, "Content-Type": "application/json"},
        )

        if not response.success:
            logger.error(
                "SMS batch of %d failed: %s", len(recipient_messages), response.error_message
            )
            return [
                DeliveryResult.failed(
                    self.provider_name,
                    response.error_message or "SMS gateway error",
                    recipient=to,
                    status_code=response.status_code or 500,
                )
                for to in recipient_messages
            ]

        data = response.data if isinstance(response.data, dict) else {}
        if not data.get("success", False):
            message = str(data.get("message") or "Gateway reported failure")
            logger.error("SMS gateway rejected batch of %d: %s", len(recipient_messages), message)
            return [
                DeliveryResult.failed(self.provider_name, message, recipient=to, status_code=200)
                for to in recipient_messages
            ]

        logger.info(
            "SMS batch of %d accepted by gateway: %s", len(recipient_messages), data.get("message")
        )
        # The gateway returns no per-message id.
        return [
            DeliveryResult.ok(self.provider_name, str(uuid.uuid4()), recipient=to)
            for to in recipient_messages
        ]


class MockSmsProvider:
    """Degraded-mode SMS provider: logs each message and reports success."""

    def __init__(self) -> None:
        logger.warning(
            "SMS provider running in MOCK mode; no SMS will be delivered. "
            "Set FANFARE_SMS_PROVIDER=http to enable delivery."
        )

    @property
    def provider_name(self) -> str:
        return "sms-mock"

    def is_available(self) -> bool:
        return True

    def send_sms(self, to: str, body: str, sender_id: str) -> DeliveryResult:
        logger.warning("[MOCK] SMS from %s to %s not delivered: %s", sender_id, to, body)
        return DeliveryResult.ok(
            self.provider_name, f"MOCK-SMS-{uuid.uuid4().hex[:12]}", recipient=to
        )

    def send_sms_batch(
        self, recipients: list[str], body: str, sender_id: str
    ) -> list[DeliveryResult]:
        return [self.send_sms(to, body, sender_id) for to in recipients]

    def send_sms_batch_custom(
        self, recipient_messages: dict[str, str], sender_id: str
    ) -> list[DeliveryResult]:
        return [self.send_sms(to, body, sender_id) for to, body in recipient_messages.items()]
