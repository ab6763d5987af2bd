"""Unit tests for the channel senders and the dispatch table."""

from __future__ import annotations

import uuid
from typing import Any

import pytest

from fanfare.channels import (
    IN_APP_ENDPOINT,
    ChannelDispatchTable,
    ChannelSender,
    ChatAppChannel,
    EmailChannel,
    InAppChannel,
    IncompleteDispatchTableError,
    PushChannel,
    SmsChannel,
    WebhookChannel,
    build_dispatch_table,
)
from fanfare.channels.catalog import EMAIL_SUBJECTS, IN_APP_TITLES, PUSH_PRIORITIES, PUSH_TITLES
from fanfare.channels.in_app import extract_service_id, extract_shop_id
from fanfare.config import FanfareConfig
from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult
from fanfare.providers import ApiResponse, MockEmailProvider, MockParentServiceClient
from fanfare.providers.email import EmailMessage
from fanfare.templating.renderer import TemplateRenderer
from fanfare.templating.resources import InMemoryTemplateStore

USER_ID = "3f2c1a7e-4b5d-4c6e-8f90-1a2b3c4d5e6f"
SHOP_ID = "9b8a7c6d-5e4f-4a3b-9c2d-1e0f9a8b7c6d"


class _CapturingEmailProvider:
    def __init__(self) -> None:
        self.messages: list[EmailMessage] = []

    @property
    def provider_name(self) -> str:
        return "capture"

    def is_available(self) -> bool:
        return True

    def send_email(self, message: EmailMessage) -> DeliveryResult:
        self.messages.append(message)
        return DeliveryResult.ok("capture", "e-1", recipient=message.to)


class _CapturingSmsProvider:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    @property
    def provider_name(self) -> str:
        return "capture"

    def is_available(self) -> bool:
        return True

    def send_sms(self, to: str, body: str, sender_id: str) -> DeliveryResult:
        self.sent.append((to, body, sender_id))
        return DeliveryResult.ok("capture", "s-1", recipient=to)

    def send_sms_batch(self, recipients, body, sender_id):
        return [self.send_sms(to, body, sender_id) for to in recipients]

    def send_sms_batch_custom(self, recipient_messages, sender_id):
        return [self.send_sms(to, body, sender_id) for to, body in recipient_messages.items()]


class _CapturingPushProvider:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str, int]] = []

    @property
    def provider_name(self) -> str:
        return "capture"

    def is_available(self) -> bool:
        return True

    def send_push(self, user_id: str, title: str, body: str, priority: int) -> DeliveryResult:
        self.sent.append((user_id, title, body, priority))
        return DeliveryResult.ok("capture", "p-1", recipient=user_id)


class _FailingParentClient:
    @property
    def provider_name(self) -> str:
        return "parent-service"

    def is_available(self) -> bool:
        return True

    def post_with_auth(self, endpoint: str, body: Any) -> ApiResponse:
        return ApiResponse(success=False, status_code=401, error_message="HTTP 401: bad signature")


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer(
        InMemoryTemplateStore(
            {
                ("email", "order_confirmation"): "<p>Order {{orderId}} for {{customer.name}}</p>",
                ("sms", "order_confirmation"): "Order {{orderId}} confirmed",
            }
        )
    )


# ---------------------------------------------------------------------------
# Test: ChannelDispatchTable
# ---------------------------------------------------------------------------


class TestChannelDispatchTable:
    def _complete(self) -> list[ChannelSender]:
        renderer = TemplateRenderer(InMemoryTemplateStore())
        return [
            EmailChannel(MockEmailProvider(), renderer, "noreply@example.com"),
            SmsChannel(_CapturingSmsProvider(), renderer, "Shop"),
            PushChannel(_CapturingPushProvider(), renderer),
            InAppChannel(MockParentServiceClient(), renderer),
            WebhookChannel(),
            ChatAppChannel(),
        ]

    def test_complete_table_builds(self):
        table = ChannelDispatchTable(self._complete())
        assert set(table.senders) == set(NotificationChannel)

    def test_missing_channel_rejected(self):
        senders = [s for s in self._complete() if s.channel != NotificationChannel.PUSH]
        with pytest.raises(IncompleteDispatchTableError, match="PUSH"):
            ChannelDispatchTable(senders)

    def test_duplicate_channel_rejected(self):
        with pytest.raises(IncompleteDispatchTableError, match="duplicate"):
            ChannelDispatchTable([*self._complete(), WebhookChannel()])

    def test_every_sender_satisfies_protocol(self):
        assert all(isinstance(s, ChannelSender) for s in self._complete())

    def test_send_routes_to_channel(self):
        table = ChannelDispatchTable(self._complete())
        result = table.send(NotificationChannel.WEBHOOK, NotificationType.ORDER_SHIPPED, None, {})
        assert result.success is True
        assert result.provider == "webhook-stub"

    def test_build_from_default_config_uses_mocks(self):
        table = build_dispatch_table(FanfareConfig())
        names = {
            channel: getattr(sender, "provider", None)
            for channel, sender in table.senders.items()
        }
        assert names[NotificationChannel.EMAIL].provider_name == "email-mock"
        assert names[NotificationChannel.SMS].provider_name == "sms-mock"
        assert names[NotificationChannel.PUSH].provider_name == "push-mock"
        assert names[NotificationChannel.IN_APP].provider_name == "parent-service-mock"

    def test_build_with_real_selection(self):
        config = FanfareConfig(
            email_provider="sendgrid",
            sendgrid_api_key="SG.test",
            sms_provider="http",
            push_provider="gotify",
            in_app_provider="parent",
        )
        table = build_dispatch_table(config)
        providers = {c: s.provider.provider_name for c, s in table.senders.items() if hasattr(s, "provider")}
        assert providers == {
            NotificationChannel.EMAIL: "sendgrid",
            NotificationChannel.SMS: "http-sms",
            NotificationChannel.PUSH: "gotify",
            NotificationChannel.IN_APP: "parent-service",
        }


# ---------------------------------------------------------------------------
# Test: EMAIL / SMS / PUSH senders
# ---------------------------------------------------------------------------


class TestEmailChannel:
    def test_renders_template_and_subject(self, renderer):
        provider = _CapturingEmailProvider()
        channel = EmailChannel(provider, renderer, "noreply@example.com")
        result = channel.send(
            NotificationType.ORDER_CONFIRMATION,
            "ada@example.com",
            {"orderId": "O-7", "customer": {"name": "Ada"}},
        )
        assert result.success is True
        message = provider.messages[0]
        assert message.to == "ada@example.com"
        assert message.sender == "noreply@example.com"
        assert message.subject == EMAIL_SUBJECTS[NotificationType.ORDER_CONFIRMATION]
        assert message.html_body == "<p>Order O-7 for Ada</p>"

    def test_missing_template_sends_fallback(self, renderer):
        provider = _CapturingEmailProvider()
        EmailChannel(provider, renderer, "x@example.com").send(
            NotificationType.SHOP_LOW_INVENTORY, "a@example.com", {}
        )
        assert "shop_low_inventory" in provider.messages[0].html_body

    def test_no_contact_raises(self, renderer):
        with pytest.raises(ValueError):
            EmailChannel(_CapturingEmailProvider(), renderer, "x").send(
                NotificationType.ORDER_CONFIRMATION, None, {}
            )


class TestSmsChannel:
    def test_renders_and_sends(self, renderer):
        provider = _CapturingSmsProvider()
        SmsChannel(provider, renderer, "Shop").send(
            NotificationType.ORDER_CONFIRMATION, "+255700000001", {"orderId": "O-7"}
        )
        assert provider.sent == [("+255700000001", "Order O-7 confirmed", "Shop")]


class TestPushChannel:
    def test_title_priority_and_message(self, renderer):
        provider = _CapturingPushProvider()
        PushChannel(provider, renderer).send(
            NotificationType.ORDER_SHIPPED, USER_ID, {"orderId": "O-7"}
        )
        user_id, title, body, priority = provider.sent[0]
        assert user_id == USER_ID
        assert title == PUSH_TITLES[NotificationType.ORDER_SHIPPED]
        assert priority == PUSH_PRIORITIES[NotificationType.ORDER_SHIPPED]
        assert "O-7" in body
        assert "{{" not in body


# ---------------------------------------------------------------------------
# Test: IN_APP
# ---------------------------------------------------------------------------


class TestInAppChannel:
    def test_request_shape(self, renderer):
        client = MockParentServiceClient()
        data = {"orderId": "O-7", "shop": {"id": SHOP_ID}}
        result = InAppChannel(client, renderer).send(NotificationType.ORDER_CONFIRMATION, USER_ID, data)

        assert result.success is True
        endpoint, body = client.requests[0]
        assert endpoint == IN_APP_ENDPOINT == "/api/v1/notifications/in-app"
        assert body["userId"] == USER_ID
        assert body["shopId"] == SHOP_ID
        assert body["serviceId"] == "O-7"
        assert body["serviceType"] == "ORDER"
        assert body["title"] == IN_APP_TITLES[NotificationType.ORDER_CONFIRMATION]
        assert body["type"] == "ORDER_CONFIRMATION"
        assert body["priority"] in {"LOW", "NORMAL", "HIGH"}
        assert body["data"] == data
        assert "O-7" in body["message"]

    def test_invalid_user_id_raises(self, renderer):
        with pytest.raises(ValueError):
            InAppChannel(MockParentServiceClient(), renderer).send(
                NotificationType.ORDER_CONFIRMATION, "not-a-uuid", {}
            )

    def test_parent_failure_reported(self, renderer):
        result = InAppChannel(_FailingParentClient(), renderer).send(
            NotificationType.PAYMENT_FAILURE, USER_ID, {"paymentId": "P-1"}
        )
        assert result.success is False
        assert result.status_code == 401
        assert "bad signature" in result.error_message

    def test_service_id_precedence(self):
        assert extract_service_id({"cartId": "C", "paymentId": "P", "orderId": "O"}) == "O"
        assert extract_service_id({"cartId": "C", "paymentId": "P"}) == "P"
        assert extract_service_id({"cartId": 12}) == "12"
        assert extract_service_id({}).startswith("GENERAL-")

    def test_shop_id(self):
        assert extract_shop_id({}) is None
        assert extract_shop_id({"shop": "flat"}) is None
        assert extract_shop_id({"shop": {"id": SHOP_ID.upper()}}) == str(uuid.UUID(SHOP_ID))
        with pytest.raises(ValueError):
            extract_shop_id({"shop": {"id": "bogus"}})
