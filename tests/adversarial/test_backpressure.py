"""Adversarial tests for worker-pool backpressure during dispatch.

A flood of batches must either wait for a free slot (block) or be
refused and counted (reject); nothing is silently dropped and no
recipient gets a half-written record.
"""

from __future__ import annotations

import threading
import time

import pytest

from fanfare.config import FanfareConfig
from fanfare.core.batch_processor import BatchProcessor
from fanfare.core.orchestrator import NotificationOrchestrator
from fanfare.core.worker_pool import BoundedWorkerPool
from fanfare.models.events import NotificationChannel
from fanfare.models.records import NotificationStatus


def _slow(seconds: float):
    def _behavior(contact):
        time.sleep(seconds)
        return True

    return _behavior


@pytest.fixture
def build(make_table, memory_store):
    created: list[NotificationOrchestrator] = []

    def _factory(policy: str, workers: int = 1, queue_capacity: int = 0, batch_size: int = 2):
        table, senders = make_table(email=_slow(0.2))
        config = FanfareConfig(
            batch_size=batch_size,
            parallel_threads=workers,
            queue_capacity=queue_capacity,
            backpressure=policy,
        )
        orchestrator = NotificationOrchestrator(BatchProcessor(table, memory_store), config)
        created.append(orchestrator)
        return orchestrator, senders

    yield _factory
    for orchestrator in created:
        orchestrator.shutdown(timeout=10)


# ---------------------------------------------------------------------------
# Test: reject policy
# ---------------------------------------------------------------------------


class TestRejectPolicy:
    def test_excess_batches_are_rejected_and_counted(self, build, make_event, memory_store):
        orchestrator, _ = build("reject", workers=1, queue_capacity=0, batch_size=2)
        report = orchestrator.dispatch(make_event(n=8))

        # One slot: the first batch runs, the other three are refused.
        assert report.batches_total == 4
        assert report.batches_completed == 1
        assert report.batches_rejected == 3
        assert report.batches_failed == 0
        assert report.status_counts == {NotificationStatus.SENT: 2}
        assert memory_store.count(correlation_id=report.correlation_id) == 2

    def test_rejected_recipients_have_no_records(self, build, make_event, memory_store):
        orchestrator, senders = build("reject", workers=1, queue_capacity=0, batch_size=1)
        event = make_event(n=3)
        report = orchestrator.dispatch(event)

        stored = {r.user_id for r in memory_store.list_by_correlation(report.correlation_id)}
        assert stored == {event.recipients[0].user_id}
        assert len(senders[NotificationChannel.EMAIL].calls) == 1

    def test_queue_capacity_absorbs_a_burst(self, build, make_event, memory_store):
        orchestrator, _ = build("reject", workers=1, queue_capacity=3, batch_size=2)
        report = orchestrator.dispatch(make_event(n=8))
        assert report.batches_rejected == 0
        assert report.records_finalized == 8

    def test_rejection_is_logged(self, build, make_event, caplog: pytest.LogCaptureFixture):
        orchestrator, _ = build("reject", workers=1, queue_capacity=0, batch_size=1)
        with caplog.at_level("ERROR", logger="fanfare.core.orchestrator"):
            orchestrator.dispatch(make_event(n=2))
        assert "rejected" in caplog.text


# ---------------------------------------------------------------------------
# Test: block policy
# ---------------------------------------------------------------------------


class TestBlockPolicy:
    def test_every_batch_eventually_runs(self, build, make_event, memory_store):
        orchestrator, _ = build("block", workers=1, queue_capacity=0, batch_size=2)
        report = orchestrator.dispatch(make_event(n=6))

        assert report.batches_completed == 3
        assert report.batches_rejected == 0
        assert memory_store.count(
            correlation_id=report.correlation_id, status=NotificationStatus.SENT
        ) == 6

    def test_in_flight_tasks_never_exceed_capacity(self, make_table, memory_store, make_event):
        running = 0
        peak = 0
        lock = threading.Lock()

        def _tracked(contact):
            nonlocal running, peak
            with lock:
                running += 1
                peak = max(peak, running)
            time.sleep(0.02)
            with lock:
                running -= 1
            return True

        table, _ = make_table(email=_tracked)
        pool = BoundedWorkerPool(workers=3, queue_capacity=2, policy="block")
        orchestrator = NotificationOrchestrator(
            BatchProcessor(table, memory_store), FanfareConfig(batch_size=1), pool=pool
        )
        try:
            report = orchestrator.dispatch(make_event(n=20))
        finally:
            orchestrator.shutdown(timeout=10)

        assert report.records_finalized == 20
        assert peak <= 3
