"""PUSH channel — catalog title, priority and rendered message per type."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fanfare.channels.catalog import PUSH_MESSAGES, PUSH_PRIORITIES, PUSH_TITLES
from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult
from fanfare.providers import PushProvider
from fanfare.templating.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class PushChannel:
    def __init__(self, provider: PushProvider, renderer: TemplateRenderer) -> None:
        self._provider = provider
        self._renderer = renderer

    @property
    def channel(self) -> NotificationChannel:
        return NotificationChannel.PUSH

    @property
    def provider(self) -> PushProvider:
        return self._provider

    def send(
        self,
        notification_type: NotificationType,
        contact: str | None,
        template_data: Mapping[str, Any],
    ) -> DeliveryResult:
        if not contact:
            raise ValueError("PUSH requires a recipient user id")

        title = PUSH_TITLES[notification_type]
        priority = PUSH_PRIORITIES[notification_type]
        message = self._renderer.render_text(PUSH_MESSAGES[notification_type], template_data)
        logger.info(
            "Push ready: type=%s user=%s priority=%d provider=%s",
            notification_type.value,
            contact,
            priority,
            self._provider.provider_name,
        )
        return self._provider.send_push(contact, title, message, priority)
