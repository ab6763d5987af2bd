"""ChannelDispatchTable — one sender per ``NotificationChannel``.

The table is validated when it is built: every channel must have exactly
one sender.  A missing or duplicated channel is a startup error, so a
channel requested at dispatch time always has somewhere to go.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from fanfare.channels.base import ChannelSender
from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult

logger = logging.getLogger(__name__)


class IncompleteDispatchTableError(RuntimeError):
    """Raised when the dispatch table does not cover every channel exactly once."""


class ChannelDispatchTable:
    """Maps each ``NotificationChannel`` to its sender.

    Usage
    -----
    >>> table = ChannelDispatchTable([email, sms, push, in_app, webhook, chat])
    >>> table.send(NotificationChannel.EMAIL, NotificationType.WELCOME_EMAIL,
    ...            "a@example.com", {"customer": {"name": "Ada"}})

    Raises
    ------
    IncompleteDispatchTableError
        If a channel has no sender, or more than one.
    """

    def __init__(self, senders: Iterable[ChannelSender]) -> None:
        table: dict[NotificationChannel, ChannelSender] = {}
        duplicates: list[str] = []
        for sender in senders:
            if sender.channel in table:
                duplicates.append(sender.channel.value)
                continue
            table[sender.channel] = sender

        missing = [c.value for c in NotificationChannel if c not in table]
        problems: list[str] = []
        if missing:
            problems.append(f"missing senders for {', '.join(missing)}")
        if duplicates:
            problems.append(f"duplicate senders for {', '.join(duplicates)}")
        if problems:
            raise IncompleteDispatchTableError("Dispatch table invalid: " + "; ".join(problems))

        self._senders = table
        logger.debug("Dispatch table ready with %d channels", len(table))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def sender_for(self, channel: NotificationChannel) -> ChannelSender:
        return self._senders[channel]

    @property
    def senders(self) -> Mapping[NotificationChannel, ChannelSender]:
        """Return a copy of the channel-to-sender mapping."""
        return dict(self._senders)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def send(
        self,
        channel: NotificationChannel,
        notification_type: NotificationType,
        contact: str | None,
        template_data: Mapping[str, Any],
    ) -> DeliveryResult:
        """Route one send to the channel's sender.

        Exceptions from the sender propagate to the caller.
        """
        return self._senders[channel].send(notification_type, contact, template_data)
