"""IN_APP channel — signed request to the parent service.

The request body carries the recipient's ``userId`` (a UUID), the shop id
from ``data.shop.id`` when present, a ``serviceId`` taken from the first of
``orderId``/``paymentId``/``cartId`` (or ``GENERAL-<epoch millis>``), and
the catalog title, message, priority and service type for the
notification type.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Mapping

from fanfare.channels.catalog import (
    IN_APP_MESSAGES,
    IN_APP_PRIORITIES,
    IN_APP_SERVICE_TYPES,
    IN_APP_TITLES,
)
from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult
from fanfare.providers import ParentServiceProvider
from fanfare.templating.renderer import TemplateRenderer

logger = logging.getLogger(__name__)

IN_APP_ENDPOINT = "/api/v1/notifications/in-app"

SERVICE_ID_KEYS: tuple[str, ...] = ("orderId", "paymentId", "cartId")


def extract_shop_id(data: Mapping[str, Any]) -> str | None:
    """Return ``data.shop.id`` as a canonical UUID string, if present.

    Raises
    ------
    ValueError
        If the shop id is present but not a valid UUID.
    """
    shop = data.get("shop")
    if isinstance(shop, Mapping) and shop.get("id") is not None:
        return str(uuid.UUID(str(shop["id"])))
    return None


def extract_service_id(data: Mapping[str, Any]) -> str:
    for key in SERVICE_ID_KEYS:
        value = data.get(key)
        if value is not None:
            return str(value)
    return f"GENERAL-{int(time.time() * 1000)}"


class InAppChannel:
    """Posts in-app notifications to the parent service.

    Parameters
    ----------
    client:
        Signed parent-service client (real or mock).
    renderer:
        Renders the catalog message template against the event data.
    """

    def __init__(self, client: ParentServiceProvider, renderer: TemplateRenderer) -> None:
        self._client = client
        self._renderer = renderer

    @property
    def channel(self) -> NotificationChannel:
        return NotificationChannel.IN_APP

    @property
    def provider(self) -> ParentServiceProvider:
        return self._client

    def build_request(
        self,
        notification_type: NotificationType,
        user_id: str,
        template_data: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Build the JSON body for the in-app endpoint.

        Raises
        ------
        ValueError
            If *user_id* or the shop id is not a valid UUID.
        """
        return {
            "userId": str(uuid.UUID(user_id)),
            "shopId": extract_shop_id(template_data),
            "serviceId": extract_service_id(template_data),
            "serviceType": IN_APP_SERVICE_TYPES[notification_type],
            "title": IN_APP_TITLES[notification_type],
            "message": self._renderer.render_text(
                IN_APP_MESSAGES[notification_type], template_data
            ),
            "type": notification_type.value,
            "priority": IN_APP_PRIORITIES[notification_type],
            "data": dict(template_data),
        }

    def send(
        self,
        notification_type: NotificationType,
        contact: str | None,
        template_data: Mapping[str, Any],
    ) -> DeliveryResult:
        if not contact:
            raise ValueError("IN_APP requires a recipient user id")

        request = self.build_request(notification_type, contact, template_data)
        logger.info(
            "Sending in-app notification: user=%s serviceType=%s",
            contact,
            request["serviceType"],
        )
        response = self._client.post_with_auth(IN_APP_ENDPOINT, request)

        if not response.success:
            logger.error(
                "In-app notification failed: user=%s error=%s", contact, response.error_message
            )
            return DeliveryResult.failed(
                self._client.provider_name,
                response.error_message or "Parent service error",
                recipient=contact,
                status_code=response.status_code or 500,
            )

        message_id = None
        if isinstance(response.data, dict) and response.data.get("id") is not None:
            message_id = str(response.data["id"])
        return DeliveryResult.ok(self._client.provider_name, message_id, recipient=contact)
