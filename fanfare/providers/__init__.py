"""Provider protocols for outbound delivery.

Every provider exposes a ``provider_name`` and an ``is_available()`` check
plus one or more send methods returning ``DeliveryResult``.  Providers
never raise for delivery failures; they report them in the result.
Each protocol has a real implementation and a ``Mock*`` degraded-mode
variant selected by configuration.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from fanfare.models.records import DeliveryResult
from fanfare.providers.email import EmailMessage, MockEmailProvider, SendGridEmailProvider
from fanfare.providers.http import ApiClient, ApiResponse
from fanfare.providers.parent import MockParentServiceClient, ParentServiceClient
from fanfare.providers.push import GotifyPushProvider, MockPushProvider
from fanfare.providers.sms import HttpSmsProvider, MockSmsProvider


@runtime_checkable
class EmailProvider(Protocol):
    """Sends a single rendered email."""

    @property
    def provider_name(self) -> str: ...

    def is_available(self) -> bool: ...

    def send_email(self, message: EmailMessage) -> DeliveryResult: ...


@runtime_checkable
class SmsProvider(Protocol):
    """Sends SMS, singly or as one gateway batch."""

    @property
    def provider_name(self) -> str: ...

    def is_available(self) -> bool: ...

    def send_sms(self, to: str, body: str, sender_id: str) -> DeliveryResult: ...

    def send_sms_batch(
        self, recipients: list[str], body: str, sender_id: str
    ) -> list[DeliveryResult]: ...

    def send_sms_batch_custom(
        self, recipient_messages: dict[str, str], sender_id: str
    ) -> list[DeliveryResult]: ...


@runtime_checkable
class PushProvider(Protocol):
    """Sends a push message to one user."""

    @property
    def provider_name(self) -> str: ...

    def is_available(self) -> bool: ...

    def send_push(self, user_id: str, title: str, body: str, priority: int) -> DeliveryResult: ...


@runtime_checkable
class ParentServiceProvider(Protocol):
    """Posts authenticated requests to the parent service."""

    @property
    def provider_name(self) -> str: ...

    def is_available(self) -> bool: ...

    def post_with_auth(self, endpoint: str, body: Any) -> ApiResponse: ...


__all__ = [
    # Protocols
    "EmailProvider",
    "SmsProvider",
    "PushProvider",
    "ParentServiceProvider",
    # HTTP
    "ApiClient",
    "ApiResponse",
    # Implementations
    "EmailMessage",
    "SendGridEmailProvider",
    "MockEmailProvider",
    "HttpSmsProvider",
    "MockSmsProvider",
    "GotifyPushProvider",
    "MockPushProvider",
    "ParentServiceClient",
    "MockParentServiceClient",
]
