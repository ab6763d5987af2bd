"""BatchProcessor — sequential per-recipient, per-channel delivery.

For every recipient in a batch:

1. insert a PROCESSING record;
2. send on each requested channel in order, skipping channels the
   recipient has no contact for and containing any sender exception to
   that channel;
3. compute the final status from the channel results;
4. update the record with the final status.

A store failure aborts the current recipient only.  The batch carries on
with the next recipient.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar

from fanfare.channels.table import ChannelDispatchTable
from fanfare.core.status import determine_final_status
from fanfare.models.batch import Batch
from fanfare.models.events import (
    CONTACT_FIELDS,
    NotificationChannel,
    NotificationEvent,
    Recipient,
)
from fanfare.models.records import (
    BatchOutcome,
    ChannelResult,
    NotificationRecord,
    NotificationStatus,
)
from fanfare.store.base import NotificationStore, NotificationStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BatchProcessor:
    """Processes one batch of recipients for an event.

    Safe to share between worker threads: it holds no per-batch state.

    Parameters
    ----------
    dispatch_table:
        Routes each channel send to its sender.
    store:
        Receives one ``create`` and one ``update`` per recipient.
    """

    def __init__(self, dispatch_table: ChannelDispatchTable, store: NotificationStore) -> None:
        self._table = dispatch_table
        self._store = store

    def process_batch(self, batch: Batch, event: NotificationEvent) -> BatchOutcome:
        """Deliver *event* to every recipient in *batch*, in order."""
        started = time.monotonic()
        logger.info(
            "Batch %d started: %d recipient(s), correlation=%s",
            batch.batch_number,
            batch.size,
            batch.correlation_id,
        )

        status_counts: dict[NotificationStatus, int] = {}
        persistence_failures = 0

        for recipient in batch.recipients:
            try:
                status = self.process_recipient(batch.correlation_id, recipient, event)
            except NotificationStoreError as exc:
                persistence_failures += 1
                logger.error(
                    "Batch %d: could not persist notification for recipient %s: %s",
                    batch.batch_number,
                    recipient.display_id,
                    exc,
                )
                continue
            status_counts[status] = status_counts.get(status, 0) + 1

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            "Batch %d finished in %dms: %s",
            batch.batch_number,
            duration_ms,
            _format_counts(status_counts, persistence_failures),
        )
        return BatchOutcome(
            correlation_id=batch.correlation_id,
            batch_number=batch.batch_number,
            recipients_total=batch.size,
            status_counts=status_counts,
            persistence_failures=persistence_failures,
            duration_ms=duration_ms,
        )

    def process_recipient(
        self, correlation_id: str, recipient: Recipient, event: NotificationEvent
    ) -> NotificationStatus:
        """Deliver to one recipient and persist its record.

        Raises
        ------
        NotificationStoreError
            If the record cannot be created or updated, whatever the
            store raised.
        """
        record = NotificationRecord.for_recipient(correlation_id, recipient, event)
        record_id = self._persist(self._store.create, record)

        results = [self._send_channel(channel, recipient, event) for channel in event.channels]
        status = determine_final_status(results)
        self._persist(self._store.update, record_id, record.finalize(status))

        summary = " ".join(
            f"{r.channel.value}={'ok' if r.success else 'fail'}" for r in results
        )
        logger.info(
            "Recipient %s: %s | %s", recipient.display_id, summary or "<no channels>", status.value
        )
        return status

    @staticmethod
    def _persist(operation: Callable[..., T], *args: Any) -> T:
        # Any store fault is this recipient's persistence failure.
        try:
            return operation(*args)
        except NotificationStoreError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise NotificationStoreError(f"{type(exc).__name__}: {exc}") from exc

    def _send_channel(
        self, channel: NotificationChannel, recipient: Recipient, event: NotificationEvent
    ) -> ChannelResult:
        if not recipient.has_contact_for(channel):
            logger.warning(
                "Skipping %s for recipient %s: no %s",
                channel.value,
                recipient.display_id,
                CONTACT_FIELDS[channel],
            )
            return ChannelResult(
                channel=channel,
                success=False,
                skipped=True,
                error_message=f"Recipient has no {CONTACT_FIELDS[channel]}",
            )

        try:
            delivery = self._table.send(
                channel, event.type, recipient.contact_for(channel), event.data
            )
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "%s send to recipient %s raised: %s", channel.value, recipient.display_id, exc
            )
            return ChannelResult(channel=channel, success=False, error_message=str(exc))

        if not delivery.success:
            logger.error(
                "%s send to recipient %s failed via %s: %s",
                channel.value,
                recipient.display_id,
                delivery.provider,
                delivery.error_message,
            )
        return ChannelResult(
            channel=channel,
            success=delivery.success,
            message_id=delivery.message_id,
            error_message=delivery.error_message,
        )


def _format_counts(status_counts: dict[NotificationStatus, int], persistence_failures: int) -> str:
    parts = [f"{status.value}={count}" for status, count in sorted(
        status_counts.items(), key=lambda item: item[0].value
    )]
    if persistence_failures:
        parts.append(f"unpersisted={persistence_failures}")
    return ", ".join(parts) or "no recipients"
