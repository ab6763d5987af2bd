"""SMS channel — renders ``sms/<template>.txt`` and sends it to one phone number."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fanfare.channels.catalog import TEMPLATE_NAMES
from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult
from fanfare.providers import SmsProvider
from fanfare.templating.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class SmsChannel:
    def __init__(self, provider: SmsProvider, renderer: TemplateRenderer, sender_id: str) -> None:
        self._provider = provider
        self._renderer = renderer
        self._sender_id = sender_id

    @property
    def channel(self) -> NotificationChannel:
        return NotificationChannel.SMS

    @property
    def provider(self) -> SmsProvider:
        return self._provider

    def send(
        self,
        notification_type: NotificationType,
        contact: str | None,
        template_data: Mapping[str, Any],
    ) -> DeliveryResult:
        if not contact:
            raise ValueError("SMS requires a recipient phone number")

        body = self._renderer.render_sms(TEMPLATE_NAMES[notification_type], template_data)
        logger.info(
            "SMS ready: type=%s length=%d sender=%s provider=%s",
            notification_type.value,
            len(body),
            self._sender_id,
            self._provider.provider_name,
        )
        return self._provider.send_sms(contact, body, self._sender_id)
