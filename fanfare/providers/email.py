"""Email providers: SendGrid delivery and a degraded-mode mock."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from fanfare.models.records import DeliveryResult
from fanfare.providers.http import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class EmailMessage(BaseModel):
    """A rendered email ready for delivery."""

    model_config = ConfigDict(frozen=True)

    to: str
    sender: str
    subject: str
    html_body: str
    text_body: str = ""


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a readable description of a SendGrid error payload."""
    if body in (None, "", b""):
        return None
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body.strip() or None
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        return json.dumps(body)
    return str(body)


class SendGridEmailProvider:
    """Delivers email through the SendGrid v3 API.

    Parameters
    ----------
    api_key:
        SendGrid API key.
    client:
        Optional pre-built ``SendGridAPIClient`` (tests inject a fake).
    timeout:
        Request timeout in seconds, applied to the client this provider
        builds.  A timed-out send fails with status 500.
    """

    def __init__(
        self,
        api_key: str,
        client: Any | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._client = client
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return "sendgrid"

    @property
    def timeout(self) -> float:
        return self._timeout

    def _build_client(self) -> Any:
        client = SendGridAPIClient(self._api_key)
        # python_http_client hands its timeout to every child request.
        client.client.timeout = self._timeout
        return client

    def is_available(self) -> bool:
        return bool(self._api_key)

    def send_email(self, message: EmailMessage) -> DeliveryResult:
        if not self.is_available():
            return DeliveryResult.failed(
                self.provider_name, "SendGrid API key not configured", recipient=message.to
            )

        mail = Mail(
            from_email=message.sender,
            to_emails=message.to,
            subject=message.subject,
            html_content=message.html_body,
        )
        try:
            client = self._client or self._build_client()
            response = client.send(mail)
        except Exception as exc:
            status_code = getattr(exc, "status_code", None) or 500
            details = _extract_sendgrid_error_details(getattr(exc, "body", None)) or str(exc)
            logger.error("SendGrid request failed with status %s: %s", status_code, details)
            return DeliveryResult.failed(
                self.provider_name, details, recipient=message.to, status_code=status_code
            )

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _extract_sendgrid_error_details(getattr(response, "body", None))
            logger.error("SendGrid responded with status %s: %s", status_code, details)
            return DeliveryResult.failed(
                self.provider_name,
                details or f"HTTP {status_code}",
                recipient=message.to,
                status_code=status_code if isinstance(status_code, int) else 500,
            )

        headers = getattr(response, "headers", None) or {}
        message_id = headers.get("X-Message-Id") if hasattr(headers, "get") else None
        logger.info("Email sent via SendGrid to %s", message.to)
        return DeliveryResult.ok(self.provider_name, message_id, recipient=message.to)


class MockEmailProvider:
    """Degraded-mode email provider: logs the message and reports success."""

    def __init__(self) -> None:
        logger.warning(
            "Email provider running in MOCK mode; no email will be delivered. "
            "Set FANFARE_EMAIL_PROVIDER=sendgrid to enable delivery."
        )

    @property
    def provider_name(self) -> str:
        return "email-mock"

    def is_available(self) -> bool:
        return True

    def send_email(self, message: EmailMessage) -> DeliveryResult:
        message_id = f"MOCK-EMAIL-{uuid.uuid4().hex[:12]}"
        logger.warning(
            "[MOCK] Email to %s not delivered (subject=%r, %d chars)",
            message.to,
            message.subject,
            len(message.html_body),
        )
        return DeliveryResult.ok(self.provider_name, message_id, recipient=message.to)
