"""Record store protocol and in-memory implementation."""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from fanfare.models.records import NotificationRecord, NotificationStatus


class NotificationStoreError(RuntimeError):
    """Raised when a notification record cannot be written or read."""


@runtime_checkable
class NotificationStore(Protocol):
    """Persistence for per-recipient notification records.

    ``create`` is called once with the PROCESSING record and ``update``
    once with the final record.  Implementations must tolerate concurrent
    calls for distinct record ids and raise ``NotificationStoreError`` on
    failure.
    """

    def create(self, record: NotificationRecord) -> str:
        """Persist a new record and return its id."""
        ...

    def update(self, record_id: str, record: NotificationRecord) -> None:
        """Replace the stored record *record_id*."""
        ...


class InMemoryNotificationStore:
    """Thread-safe dict-backed store for tests and dry runs."""

    def __init__(self) -> None:
        self._records: dict[str, NotificationRecord] = {}
        self._lock = threading.Lock()

    def create(self, record: NotificationRecord) -> str:
        with self._lock:
            if record.id in self._records:
                raise NotificationStoreError(f"Duplicate notification record id {record.id}")
            self._records[record.id] = record
        return record.id

    def update(self, record_id: str, record: NotificationRecord) -> None:
        with self._lock:
            if record_id not in self._records:
                raise NotificationStoreError(f"No notification record with id {record_id}")
            self._records[record_id] = record

    def get(self, record_id: str) -> NotificationRecord | None:
        with self._lock:
            return self._records.get(record_id)

    def list_by_correlation(self, correlation_id: str) -> list[NotificationRecord]:
        with self._lock:
            return [r for r in self._records.values() if r.correlation_id == correlation_id]

    def count(
        self,
        correlation_id: str | None = None,
        status: NotificationStatus | None = None,
    ) -> int:
        with self._lock:
            return sum(
                1
                for r in self._records.values()
                if (correlation_id is None or r.correlation_id == correlation_id)
                and (status is None or r.status == status)
            )
