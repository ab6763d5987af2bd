"""Persisted notification records and transient dispatch outcomes.

A ``NotificationRecord`` is written once per recipient per event: inserted
as PROCESSING, then updated exactly once with its final status.  The
remaining models here are never persisted; they carry results from a
channel send up to the batch processor and from batch tasks up to the
orchestrator.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fanfare.models.events import (
    NotificationChannel,
    NotificationEvent,
    NotificationType,
    Recipient,
)


class NotificationStatus(str, Enum):
    """Lifecycle of a notification record."""

    PROCESSING = "PROCESSING"
    SENT = "SENT"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"


DELIVERED_STATUSES: frozenset[NotificationStatus] = frozenset(
    {NotificationStatus.SENT, NotificationStatus.PARTIAL}
)


class NotificationRecord(BaseModel):
    """Stored snapshot of one recipient's notification.

    ``sent_at`` is set if and only if ``status`` is SENT or PARTIAL.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str
    user_id: str | None = None
    recipient_email: str | None = None
    recipient_phone: str | None = None
    recipient_name: str | None = None
    type: NotificationType
    channels: list[NotificationChannel] = []
    status: NotificationStatus = NotificationStatus.PROCESSING
    template_data: dict[str, Any] = {}
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    sent_at: datetime | None = None

    @model_validator(mode="after")
    def _sent_at_matches_status(self) -> "NotificationRecord":
        delivered = self.status in DELIVERED_STATUSES
        if delivered and self.sent_at is None:
            raise ValueError(f"sent_at is required when status is {self.status.value}")
        if not delivered and self.sent_at is not None:
            raise ValueError(f"sent_at must be empty when status is {self.status.value}")
        return self

    @classmethod
    def for_recipient(
        cls,
        correlation_id: str,
        recipient: Recipient,
        event: NotificationEvent,
    ) -> "NotificationRecord":
        """Build the initial PROCESSING record for *recipient*."""
        return cls(
            correlation_id=correlation_id,
            user_id=recipient.user_id,
            recipient_email=recipient.email,
            recipient_phone=recipient.phone,
            recipient_name=recipient.name,
            type=event.type,
            channels=list(event.channels),
            status=NotificationStatus.PROCESSING,
            template_data=dict(event.data),
        )

    def finalize(self, status: NotificationStatus) -> "NotificationRecord":
        """Return a copy carrying the final *status* (and ``sent_at``)."""
        sent_at = datetime.now(timezone.utc) if status in DELIVERED_STATUSES else None
        return self.model_copy(update={"status": status, "sent_at": sent_at})


class ChannelResult(BaseModel):
    """Outcome of one (recipient, channel) delivery attempt."""

    model_config = ConfigDict(frozen=True)

    channel: NotificationChannel
    success: bool
    skipped: bool = False
    message_id: str | None = None
    error_message: str | None = None


class DeliveryResult(BaseModel):
    """What a provider reports back for a single send."""

    model_config = ConfigDict(frozen=True)

    success: bool
    provider: str = ""
    message_id: str | None = None
    error_message: str | None = None
    recipient: str | None = None
    status_code: int = 0

    @classmethod
    def ok(cls, provider: str, message_id: str | None = None, **extra: Any) -> "DeliveryResult":
        return cls(success=True, provider=provider, message_id=message_id, status_code=200, **extra)

    @classmethod
    def failed(cls, provider: str, error_message: str, **extra: Any) -> "DeliveryResult":
        extra.setdefault("status_code", 500)
        return cls(success=False, provider=provider, error_message=error_message, **extra)


class BatchOutcome(BaseModel):
    """Completion signal of one batch task."""

    model_config = ConfigDict(frozen=True)

    correlation_id: str
    batch_number: int
    recipients_total: int
    status_counts: dict[NotificationStatus, int] = {}
    persistence_failures: int = 0
    duration_ms: int = 0


class DispatchReport(BaseModel):
    """Aggregate result of dispatching one event."""

    model_config = ConfigDict(frozen=True)

    correlation_id: str
    recipients_total: int = 0
    batches_total: int = 0
    batches_completed: int = 0
    batches_failed: int = 0
    batches_rejected: int = 0
    status_counts: dict[NotificationStatus, int] = {}
    persistence_failures: int = 0
    duration_ms: int = 0

    @property
    def records_finalized(self) -> int:
        return sum(self.status_counts.values())
