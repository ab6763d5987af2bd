"""EMAIL channel — renders ``email/<template>.html`` and hands it to the provider."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fanfare.channels.catalog import EMAIL_SUBJECTS, TEMPLATE_NAMES
from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult
from fanfare.providers import EmailProvider
from fanfare.providers.email import EmailMessage
from fanfare.templating.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class EmailChannel:
    """Sends the rendered HTML template for a notification type by email.

    Parameters
    ----------
    provider:
        The email provider (SendGrid or mock).
    renderer:
        Template renderer used for ``email/`` templates.
    sender:
        The ``From`` address.
    """

    def __init__(self, provider: EmailProvider, renderer: TemplateRenderer, sender: str) -> None:
        self._provider = provider
        self._renderer = renderer
        self._sender = sender

    @property
    def channel(self) -> NotificationChannel:
        return NotificationChannel.EMAIL

    @property
    def provider(self) -> EmailProvider:
        return self._provider

    def send(
        self,
        notification_type: NotificationType,
        contact: str | None,
        template_data: Mapping[str, Any],
    ) -> DeliveryResult:
        if not contact:
            raise ValueError("EMAIL requires a recipient email address")

        template_name = TEMPLATE_NAMES[notification_type]
        html = self._renderer.render_email(template_name, template_data)
        message = EmailMessage(
            to=contact,
            sender=self._sender,
            subject=EMAIL_SUBJECTS[notification_type],
            html_body=html,
        )
        logger.info(
            "Email ready: type=%s template=%s provider=%s",
            notification_type.value,
            template_name,
            self._provider.provider_name,
        )
        return self._provider.send_email(message)
