"""Shared test fixtures for Fanfare."""

from __future__ import annotations

import os
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from fanfare.channels.stubs import ChatAppChannel, WebhookChannel
from fanfare.channels.table import ChannelDispatchTable
from fanfare.config import FanfareConfig
from fanfare.models.events import (
    NotificationChannel,
    NotificationEvent,
    NotificationType,
    Recipient,
)
from fanfare.models.records import DeliveryResult
from fanfare.store.base import InMemoryNotificationStore
from fanfare.store.sqlite_store import SqliteNotificationStore


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer FANFARE_* variables and .env files out of tests."""
    for key in list(os.environ):
        if key.startswith("FANFARE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def memory_store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture
def sqlite_store(tmp_dir: Path) -> SqliteNotificationStore:
    """Provide a fresh SqliteNotificationStore backed by a temp database."""
    return SqliteNotificationStore(tmp_dir / "notifications.db")


@pytest.fixture
def test_config(tmp_dir: Path) -> FanfareConfig:
    """Mock providers, small batches, temp database."""
    return FanfareConfig(
        database_path=tmp_dir / "notifications.db",
        batch_size=3,
        parallel_threads=2,
        queue_capacity=10,
        shutdown_timeout_seconds=5,
    )


# ---------------------------------------------------------------------------
# Model factories — shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_recipient() -> Callable[..., Recipient]:
    """Factory fixture: build a Recipient with every contact field set."""
    counter = iter(range(1, 1_000_000))

    def _factory(**overrides: Any) -> Recipient:
        n = next(counter)
        defaults: dict[str, Any] = {
            "user_id": f"00000000-0000-4000-8000-{n:012d}",
            "email": f"user{n}@example.com",
            "phone": f"+2557000{n:05d}",
            "name": f"User {n}",
        }
        defaults.update(overrides)
        return Recipient(**defaults)

    return _factory


@pytest.fixture
def make_event(make_recipient: Callable[..., Recipient]) -> Callable[..., NotificationEvent]:
    """Factory fixture: build a NotificationEvent with *n* fresh recipients."""

    def _factory(
        n: int = 3,
        channels: list[NotificationChannel] | None = None,
        type: NotificationType = NotificationType.ORDER_CONFIRMATION,
        **overrides: Any,
    ) -> NotificationEvent:
        defaults: dict[str, Any] = {
            "type": type,
            "recipients": [make_recipient() for _ in range(n)],
            "channels": channels if channels is not None else [NotificationChannel.EMAIL],
            "data": {
                "orderId": "ORD-1001",
                "customer": {"name": "Ada"},
                "payment": {"amount": "59.00", "currency": "USD"},
                "items": [{"name": "Lamp", "quantity": 1}, {"name": "Desk", "quantity": 1}],
            },
        }
        defaults.update(overrides)
        return NotificationEvent(**defaults)

    return _factory


# ---------------------------------------------------------------------------
# Scriptable channel senders
# ---------------------------------------------------------------------------


class RecordingSender:
    """Channel sender that records calls and returns a scripted outcome.

    *behavior* is called with the contact and returns ``True``/``False``
    for success, or raises to simulate a misbehaving sender.
    """

    def __init__(
        self,
        channel: NotificationChannel,
        behavior: Callable[[str | None], bool] | None = None,
    ) -> None:
        self._channel = channel
        self._behavior = behavior or (lambda contact: True)
        self._lock = threading.Lock()
        self.calls: list[tuple[NotificationType, str | None, Mapping[str, Any]]] = []

    @property
    def channel(self) -> NotificationChannel:
        return self._channel

    def send(
        self,
        notification_type: NotificationType,
        contact: str | None,
        template_data: Mapping[str, Any],
    ) -> DeliveryResult:
        with self._lock:
            self.calls.append((notification_type, contact, template_data))
        if self._behavior(contact):
            return DeliveryResult.ok(f"fake-{self._channel.value.lower()}", f"msg-{contact}")
        return DeliveryResult.failed(f"fake-{self._channel.value.lower()}", "provider said no")


@pytest.fixture
def make_table() -> Callable[..., tuple[ChannelDispatchTable, dict[NotificationChannel, RecordingSender]]]:
    """Factory fixture: a complete dispatch table of RecordingSenders.

    Keyword arguments map lower-case channel names to sender behaviors,
    e.g. ``make_table(sms=lambda contact: False)``.
    """

    def _factory(
        **behaviors: Callable[[str | None], bool],
    ) -> tuple[ChannelDispatchTable, dict[NotificationChannel, RecordingSender]]:
        senders = {
            channel: RecordingSender(channel, behaviors.get(channel.value.lower()))
            for channel in (
                NotificationChannel.EMAIL,
                NotificationChannel.SMS,
                NotificationChannel.PUSH,
                NotificationChannel.IN_APP,
            )
        }
        table = ChannelDispatchTable([*senders.values(), WebhookChannel(), ChatAppChannel()])
        return table, senders

    return _factory
