"""Adversarial tests for failure isolation across the real channel senders.

A crashing provider, an unreachable gateway, malformed ids or hostile
template data must fail at most the one (recipient, channel) pair they
touch.  Every recipient still ends with exactly one finalized record.
"""

from __future__ import annotations

import pytest

from fanfare.channels.factory import build_dispatch_table
from fanfare.core.batch_processor import BatchProcessor
from fanfare.core.orchestrator import NotificationOrchestrator
from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import DeliveryResult, NotificationStatus
from fanfare.providers import MockEmailProvider, MockSmsProvider

ALL_CHANNELS = [
    NotificationChannel.EMAIL,
    NotificationChannel.SMS,
    NotificationChannel.PUSH,
    NotificationChannel.IN_APP,
]


class _ExplodingEmailProvider(MockEmailProvider):
    """Raises for one address, delivers the rest."""

    def __init__(self, poisoned: str) -> None:
        super().__init__()
        self._poisoned = poisoned

    def send_email(self, message):
        if message.to == self._poisoned:
            raise ConnectionResetError("socket torn down mid-write")
        return super().send_email(message)


class _DeadSmsGateway(MockSmsProvider):
    def send_sms(self, to, body, sender_id):
        return DeliveryResult.failed(self.provider_name, "gateway unreachable", recipient=to)


@pytest.fixture
def run(test_config, memory_store):
    created: list[NotificationOrchestrator] = []

    def _run(event, **providers):
        table = build_dispatch_table(test_config, **providers)
        orchestrator = NotificationOrchestrator(BatchProcessor(table, memory_store), test_config)
        created.append(orchestrator)
        report = orchestrator.dispatch(event)
        records = {r.user_id: r for r in memory_store.list_by_correlation(report.correlation_id)}
        return report, records

    yield _run
    for orchestrator in created:
        orchestrator.shutdown(timeout=5)


# ---------------------------------------------------------------------------
# Test: provider failures
# ---------------------------------------------------------------------------


class TestProviderFailures:
    def test_raising_provider_fails_one_pair(self, run, make_event):
        event = make_event(n=5, channels=[NotificationChannel.EMAIL, NotificationChannel.SMS])
        victim = event.recipients[2]
        report, records = run(
            event, email_provider=_ExplodingEmailProvider(poisoned=victim.email)
        )

        assert report.batches_failed == 0
        assert len(records) == 5
        assert records[victim.user_id].status == NotificationStatus.PARTIAL
        others = [r for uid, r in records.items() if uid != victim.user_id]
        assert all(r.status == NotificationStatus.SENT for r in others)

    def test_dead_gateway_degrades_to_partial(self, run, make_event):
        event = make_event(n=4, channels=[NotificationChannel.EMAIL, NotificationChannel.SMS])
        report, records = run(event, sms_provider=_DeadSmsGateway())
        assert report.status_counts == {NotificationStatus.PARTIAL: 4}
        assert all(r.sent_at is not None for r in records.values())

    def test_dead_gateway_alone_is_failed(self, run, make_event):
        event = make_event(n=2, channels=[NotificationChannel.SMS])
        report, records = run(event, sms_provider=_DeadSmsGateway())
        assert report.status_counts == {NotificationStatus.FAILED: 2}
        assert all(r.sent_at is None for r in records.values())


# ---------------------------------------------------------------------------
# Test: hostile recipient and event data
# ---------------------------------------------------------------------------


class TestHostileData:
    def test_non_uuid_user_id_fails_only_in_app(self, run, make_event, make_recipient):
        bad = make_recipient(user_id="not-a-uuid")
        event = make_event(
            n=2, channels=[NotificationChannel.EMAIL, NotificationChannel.IN_APP]
        )
        event = event.model_copy(update={"recipients": [*event.recipients, bad]})
        report, records = run(event)

        assert records["not-a-uuid"].status == NotificationStatus.PARTIAL
        assert report.status_counts[NotificationStatus.SENT] == 2

    def test_invalid_shop_id_fails_in_app_for_everyone(self, run, make_event):
        event = make_event(
            n=3,
            channels=[NotificationChannel.PUSH, NotificationChannel.IN_APP],
            type=NotificationType.SHOP_NEW_ORDER,
        )
        event = event.model_copy(update={"data": {**event.data, "shop": {"id": "shop-42"}}})
        report, _ = run(event)
        assert report.status_counts == {NotificationStatus.PARTIAL: 3}

    def test_blank_contacts_are_skipped_not_crashed(self, run, make_recipient, make_event):
        ghost = make_recipient(email="   ", phone="", user_id=None)
        event = make_event(n=0, channels=ALL_CHANNELS, recipients=[ghost])
        report, records = run(event)

        assert report.status_counts == {NotificationStatus.FAILED: 1}
        assert list(records) == [None]

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"items": "not a list", "customer": None},
            {"items": [None, 3, {"name": None}], "payment": {"amount": [1, 2]}},
            {"orderId": "{{#each items}}", "customer": {"name": "{{/if}}"}},
        ],
        ids=["empty", "wrong-types", "nulls", "marker-injection"],
    )
    def test_malformed_template_data_still_delivers(self, run, make_event, data):
        event = make_event(n=2, channels=ALL_CHANNELS, data=data)
        report, records = run(event)
        assert report.batches_failed == 0
        assert report.status_counts == {NotificationStatus.SENT: 2}
        assert len(records) == 2

    def test_every_notification_type_renders_on_every_channel(self, run, make_event):
        for notification_type in NotificationType:
            event = make_event(n=1, channels=ALL_CHANNELS, type=notification_type)
            report, _ = run(event)
            assert report.status_counts == {NotificationStatus.SENT: 1}, notification_type
