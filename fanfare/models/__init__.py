"""Fanfare data models — all Pydantic v2, all frozen (immutable)."""

from fanfare.models.batch import Batch
from fanfare.models.events import (
    CONTACT_FIELDS,
    NotificationChannel,
    NotificationEvent,
    NotificationPriority,
    NotificationType,
    Recipient,
)
from fanfare.models.records import (
    DELIVERED_STATUSES,
    BatchOutcome,
    ChannelResult,
    DeliveryResult,
    DispatchReport,
    NotificationRecord,
    NotificationStatus,
)

__all__ = [
    # events
    "NotificationType",
    "NotificationChannel",
    "NotificationPriority",
    "CONTACT_FIELDS",
    "Recipient",
    "NotificationEvent",
    # records
    "NotificationStatus",
    "DELIVERED_STATUSES",
    "NotificationRecord",
    "ChannelResult",
    "DeliveryResult",
    "BatchOutcome",
    "DispatchReport",
    # batching
    "Batch",
]
