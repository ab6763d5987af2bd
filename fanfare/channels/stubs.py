"""WEBHOOK and CHAT_APP channels.

Neither has a delivery backend yet.  Both log the request and report
success so events that list them are not marked as failures.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult

logger = logging.getLogger(__name__)


class _LoggingStubChannel:
    _channel: NotificationChannel

    @property
    def channel(self) -> NotificationChannel:
        return self._channel

    def send(
        self,
        notification_type: NotificationType,
        contact: str | None,
        template_data: Mapping[str, Any],
    ) -> DeliveryResult:
        logger.info(
            "%s channel has no backend; %s for %s accepted without delivery",
            self._channel.value,
            notification_type.value,
            contact or "<no contact>",
        )
        return DeliveryResult.ok(f"{self._channel.value.lower()}-stub", recipient=contact)


class WebhookChannel(_LoggingStubChannel):
    _channel = NotificationChannel.WEBHOOK


class ChatAppChannel(_LoggingStubChannel):
    _channel = NotificationChannel.CHAT_APP
