"""Notification record persistence."""

from fanfare.store.base import InMemoryNotificationStore, NotificationStore, NotificationStoreError
from fanfare.store.sqlite_store import SqliteNotificationStore

__all__ = [
    "NotificationStore",
    "NotificationStoreError",
    "InMemoryNotificationStore",
    "SqliteNotificationStore",
]
