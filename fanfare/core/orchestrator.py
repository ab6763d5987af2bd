"""Fan-out orchestrator — the entry point for inbound notification events.

The orchestrator assigns each event a correlation id, splits its
recipients into batches, runs one ``BatchProcessor`` task per batch on a
bounded worker pool and joins every task before reporting.  It keeps no
state between events.
"""

from __future__ import annotations

import logging
import time
import uuid
from concurrent.futures import Future
from typing import Any

from fanfare.channels.factory import build_dispatch_table
from fanfare.config import FanfareConfig
from fanfare.core.batch_processor import BatchProcessor
from fanfare.core.batching import split_into_batches
from fanfare.core.production_guard import enforce_production_constraints
from fanfare.core.worker_pool import BoundedWorkerPool, PoolSaturatedError
from fanfare.models.batch import Batch
from fanfare.models.events import NotificationEvent
from fanfare.models.records import BatchOutcome, DispatchReport, NotificationStatus
from fanfare.providers.http import ApiClient
from fanfare.store.base import NotificationStore
from fanfare.store.sqlite_store import SqliteNotificationStore

logger = logging.getLogger(__name__)


class NotificationOrchestrator:
    """Fans one event out to all of its recipients.

    Parameters
    ----------
    processor:
        Processes a single batch.  Shared by all worker threads.
    config:
        Supplies ``batch_size`` and the pool settings.  Uses defaults if
        not provided.
    pool:
        Worker pool to submit batch tasks to.  Built from *config* when
        omitted; either way the orchestrator owns it and ``shutdown``
        drains it.
    api_client:
        HTTP client shared by the providers.  When given, the orchestrator
        owns it and ``shutdown`` closes it after draining the pool.
    """

    def __init__(
        self,
        processor: BatchProcessor,
        config: FanfareConfig | None = None,
        *,
        pool: BoundedWorkerPool | None = None,
        api_client: ApiClient | None = None,
    ) -> None:
        self._config = config or FanfareConfig()
        self._processor = processor
        self._api_client = api_client
        self._pool = pool or BoundedWorkerPool(
            workers=self._config.parallel_threads,
            queue_capacity=self._config.queue_capacity,
            policy=self._config.backpressure,
        )

    @classmethod
    def from_config(
        cls,
        config: FanfareConfig,
        *,
        store: NotificationStore | None = None,
        **table_overrides: Any,
    ) -> "NotificationOrchestrator":
        """Build a fully wired orchestrator from configuration.

        Runs the production guard, builds the dispatch table (provider
        overrides are passed to ``build_dispatch_table``) and opens the
        SQLite store at ``config.database_path`` unless *store* is given.
        The HTTP client is created here and closed by ``shutdown``, unless
        the caller passes its own ``api_client``.

        Raises
        ------
        ProductionConfigError
            If production constraints are violated.
        IncompleteDispatchTableError
            If the dispatch table does not cover every channel.
        """
        enforce_production_constraints(config)
        owned_client: ApiClient | None = None
        if table_overrides.get("api_client") is None:
            owned_client = ApiClient(timeout=config.request_timeout_seconds)
            table_overrides["api_client"] = owned_client
        try:
            table = build_dispatch_table(config, **table_overrides)
            store = store or SqliteNotificationStore(config.database_path)
        except Exception:
            if owned_client is not None:
                owned_client.close()
            raise
        return cls(BatchProcessor(table, store), config, api_client=owned_client)

    @property
    def pool(self) -> BoundedWorkerPool:
        return self._pool

    @property
    def api_client(self) -> ApiClient | None:
        return self._api_client

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def process(self, event: NotificationEvent) -> None:
        """Fire-and-forget entry point for the event source.

        Outcomes are observable through the stored records and the logs.
        """
        self.dispatch(event)

    def dispatch(self, event: NotificationEvent) -> DispatchReport:
        """Dispatch *event* and return the aggregate report.

        Returns once every submitted batch task has finished.  A task that
        raised is logged and counted in ``batches_failed``; it does not
        affect its siblings.  Under the ``reject`` policy a batch refused
        by the pool is logged and counted in ``batches_rejected``, and its
        recipients get no record.
        """
        started = time.monotonic()
        correlation_id = str(uuid.uuid4())
        recipients_total = len(event.recipients)

        logger.info(
            "Dispatching %s to %d recipient(s) on [%s], correlation=%s",
            event.type.value,
            recipients_total,
            ", ".join(c.value for c in event.channels),
            correlation_id,
        )

        if recipients_total == 0:
            logger.info("Event %s has no recipients; nothing to dispatch", correlation_id)
            return DispatchReport(correlation_id=correlation_id)

        batches = split_into_batches(correlation_id, event.recipients, self._config.batch_size)
        submitted: list[tuple[Batch, Future[BatchOutcome]]] = []
        rejected = 0

        for batch in batches:
            try:
                future = self._pool.submit(self._processor.process_batch, batch, event)
            except PoolSaturatedError as exc:
                rejected += 1
                logger.error(
                    "Batch %d (%d recipient(s)) rejected, correlation=%s: %s",
                    batch.batch_number,
                    batch.size,
                    correlation_id,
                    exc,
                )
                continue
            submitted.append((batch, future))

        outcomes: list[BatchOutcome] = []
        failed = 0
        for batch, future in submitted:
            try:
                outcomes.append(future.result())
            except Exception as exc:  # noqa: BLE001
                failed += 1
                logger.error(
                    "Batch %d failed, correlation=%s: %s",
                    batch.batch_number,
                    correlation_id,
                    exc,
                    exc_info=exc,
                )

        report = _aggregate(
            correlation_id,
            recipients_total,
            len(batches),
            outcomes,
            failed,
            rejected,
            int((time.monotonic() - started) * 1000),
        )
        logger.info(
            "Dispatch %s complete in %dms: %d/%d batch(es) completed, %d failed, %d rejected; "
            "sent=%d partial=%d failed=%d unpersisted=%d",
            correlation_id,
            report.duration_ms,
            report.batches_completed,
            report.batches_total,
            report.batches_failed,
            report.batches_rejected,
            report.status_counts.get(NotificationStatus.SENT, 0),
            report.status_counts.get(NotificationStatus.PARTIAL, 0),
            report.status_counts.get(NotificationStatus.FAILED, 0),
            report.persistence_failures,
        )
        return report

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def shutdown(self, timeout: float | None = None) -> bool:
        """Drain the worker pool, waiting at most *timeout* seconds.

        Defaults to ``config.shutdown_timeout_seconds``.  The owned HTTP
        client is closed afterwards; a batch still running past the
        timeout fails its remaining HTTP channel sends.
        """
        if timeout is None:
            timeout = self._config.shutdown_timeout_seconds
        drained = self._pool.shutdown(timeout=timeout)
        if self._api_client is not None:
            self._api_client.close()
        return drained


def _aggregate(
    correlation_id: str,
    recipients_total: int,
    batches_total: int,
    outcomes: list[BatchOutcome],
    failed: int,
    rejected: int,
    duration_ms: int,
) -> DispatchReport:
    status_counts: dict[NotificationStatus, int] = {}
    for outcome in outcomes:
        for status, count in outcome.status_counts.items():
            status_counts[status] = status_counts.get(status, 0) + count
    return DispatchReport(
        correlation_id=correlation_id,
        recipients_total=recipients_total,
        batches_total=batches_total,
        batches_completed=len(outcomes),
        batches_failed=failed,
        batches_rejected=rejected,
        status_counts=status_counts,
        persistence_failures=sum(o.persistence_failures for o in outcomes),
        duration_ms=duration_ms,
    )
