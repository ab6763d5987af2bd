"""Inbound notification event models.

An event arrives already deserialized from the transport layer.  It names
one notification type, an ordered recipient list, the channels to deliver
on, and an arbitrary nested data mapping used for template rendering.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NotificationType(str, Enum):
    """The closed set of notification kinds."""

    ORDER_CONFIRMATION = "ORDER_CONFIRMATION"
    ORDER_SHIPPED = "ORDER_SHIPPED"
    ORDER_DELIVERED = "ORDER_DELIVERED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    PAYMENT_FAILURE = "PAYMENT_FAILURE"
    CART_ABANDONMENT = "CART_ABANDONMENT"
    CHECKOUT_EXPIRY = "CHECKOUT_EXPIRY"
    WALLET_BALANCE_UPDATE = "WALLET_BALANCE_UPDATE"
    INSTALLMENT_DUE = "INSTALLMENT_DUE"
    SHOP_NEW_ORDER = "SHOP_NEW_ORDER"
    SHOP_LOW_INVENTORY = "SHOP_LOW_INVENTORY"
    GROUP_PURCHASE_COMPLETE = "GROUP_PURCHASE_COMPLETE"
    GROUP_PURCHASE_CREATED = "GROUP_PURCHASE_CREATED"
    GROUP_MEMBER_JOINED = "GROUP_MEMBER_JOINED"
    GROUP_SEATS_TRANSFERRED = "GROUP_SEATS_TRANSFERRED"
    WELCOME_EMAIL = "WELCOME_EMAIL"
    PROMOTIONAL_OFFER = "PROMOTIONAL_OFFER"


class NotificationChannel(str, Enum):
    """Delivery mechanisms a notification can be routed through."""

    EMAIL = "EMAIL"
    SMS = "SMS"
    PUSH = "PUSH"
    IN_APP = "IN_APP"
    WEBHOOK = "WEBHOOK"
    CHAT_APP = "CHAT_APP"


class NotificationPriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


# Contact field a channel needs on the recipient.  ``None`` means the
# channel has no per-recipient address requirement.
CONTACT_FIELDS: dict[NotificationChannel, str | None] = {
    NotificationChannel.EMAIL: "email",
    NotificationChannel.SMS: "phone",
    NotificationChannel.PUSH: "user_id",
    NotificationChannel.IN_APP: "user_id",
    NotificationChannel.WEBHOOK: None,
    NotificationChannel.CHAT_APP: None,
}


class Recipient(BaseModel):
    """A single notification recipient.

    Every field is optional; a channel only succeeds when the contact field
    it requires (see ``CONTACT_FIELDS``) is present and non-blank.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    email: str | None = None
    phone: str | None = None
    name: str | None = None
    language: str | None = None

    def has_contact_for(self, channel: NotificationChannel) -> bool:
        """Return ``True`` if the recipient can be addressed on *channel*."""
        field_name = CONTACT_FIELDS[channel]
        if field_name is None:
            return True
        value = getattr(self, field_name)
        return bool(value and value.strip())

    def contact_for(self, channel: NotificationChannel) -> str | None:
        """Return the address used on *channel*.

        Channels without an address requirement are addressed by ``user_id``
        (which may be ``None``).
        """
        field_name = CONTACT_FIELDS[channel] or "user_id"
        return getattr(self, field_name)

    @property
    def display_id(self) -> str:
        """Best available identifier for log lines."""
        return self.user_id or self.email or self.phone or "<anonymous>"


class NotificationEvent(BaseModel):
    """One inbound notification event, immutable once received."""

    model_config = ConfigDict(frozen=True)

    type: NotificationType
    recipients: list[Recipient] = []
    channels: list[NotificationChannel] = []
    priority: NotificationPriority = NotificationPriority.NORMAL
    data: dict[str, Any] = {}

    @field_validator("channels")
    @classmethod
    def _collapse_duplicate_channels(
        cls, channels: list[NotificationChannel]
    ) -> list[NotificationChannel]:
        # Order is kept; a repeated channel is delivered once.
        return list(dict.fromkeys(channels))

    @field_validator("data", mode="before")
    @classmethod
    def _none_data_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value
