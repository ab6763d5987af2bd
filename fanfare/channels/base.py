"""Channel sender protocol.

A sender turns ``(notification_type, contact, template_data)`` into one
provider call and reports the provider's ``DeliveryResult``.  Senders may
raise; the batch processor records an exception as a failed result for
that channel only.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult


@runtime_checkable
class ChannelSender(Protocol):
    """Protocol that every channel sender must implement.

    Attributes
    ----------
    channel : NotificationChannel
        The single channel this sender serves.
    """

    @property
    def channel(self) -> NotificationChannel:
        """Return the channel this sender delivers on."""
        ...

    def send(
        self,
        notification_type: NotificationType,
        contact: str | None,
        template_data: Mapping[str, Any],
    ) -> DeliveryResult:
        """Deliver one notification to *contact*.

        Parameters
        ----------
        notification_type:
            Selects templates, subjects, titles and priorities.
        contact:
            Email address, phone number or user id, depending on the
            channel.  ``None`` for channels without a contact requirement.
        template_data:
            The event's data mapping, shared by every recipient.
        """
        ...
