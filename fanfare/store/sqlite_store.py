"""Notification record store backed by SQLite.

Design:
- One connection per operation, so concurrent batch tasks never share a
  connection and writes to distinct records need no locking here.
- WAL journal mode plus a busy timeout so concurrent writers wait for the
  write lock instead of failing immediately.
- ``create`` inserts, ``update`` replaces an existing row by id.  Any
  ``sqlite3.Error`` surfaces as ``NotificationStoreError``.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

from fanfare.models.events import NotificationChannel, NotificationType
from fanfare.models.records import NotificationRecord, NotificationStatus
from fanfare.store.base import NotificationStoreError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_NOTIFICATIONS = """
CREATE TABLE IF NOT EXISTS notifications (
    seq                 INTEGER PRIMARY KEY AUTOINCREMENT,
    id                  TEXT NOT NULL UNIQUE,
    correlation_id      TEXT NOT NULL,
    user_id             TEXT,
    recipient_email     TEXT,
    recipient_phone     TEXT,
    recipient_name      TEXT,
    type                TEXT NOT NULL,
    channels_json       TEXT NOT NULL DEFAULT '[]',
    status              TEXT NOT NULL,
    template_data_json  TEXT NOT NULL DEFAULT '{}',
    created_at          TEXT NOT NULL,
    sent_at             TEXT
);
"""

_CREATE_IDX_CORRELATION = """
CREATE INDEX IF NOT EXISTS idx_correlation ON notifications(correlation_id, seq);
"""

_COLUMNS = (
    "id, correlation_id, user_id, recipient_email, recipient_phone, recipient_name, "
    "type, channels_json, status, template_data_json, created_at, sent_at"
)

DEFAULT_BUSY_TIMEOUT_SECONDS = 30.0


class SqliteNotificationStore:
    """SQLite-backed ``NotificationStore``.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Created if it does not exist.
    busy_timeout:
        Seconds a writer waits for the database lock.
    """

    def __init__(
        self, db_path: Path | str, busy_timeout: float = DEFAULT_BUSY_TIMEOUT_SECONDS
    ) -> None:
        self._db_path = Path(db_path)
        self._busy_timeout = busy_timeout
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @property
    def db_path(self) -> Path:
        return self._db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(
                str(self._db_path), timeout=self._busy_timeout, check_same_thread=False
            )
        except sqlite3.Error as exc:
            raise NotificationStoreError(f"Cannot open {self._db_path}: {exc}") from exc
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise NotificationStoreError(str(exc)) from exc
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(_CREATE_NOTIFICATIONS)
            conn.execute(_CREATE_IDX_CORRELATION)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, record: NotificationRecord) -> str:
        """Insert *record* and return its id."""
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO notifications ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                self._record_to_row(record),
            )
        return record.id

    def update(self, record_id: str, record: NotificationRecord) -> None:
        """Replace the stored record *record_id* with *record*.

        Raises
        ------
        NotificationStoreError
            If no record with *record_id* exists.
        """
        row = self._record_to_row(record)
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE notifications SET
                    correlation_id = ?, user_id = ?, recipient_email = ?,
                    recipient_phone = ?, recipient_name = ?, type = ?,
                    channels_json = ?, status = ?, template_data_json = ?,
                    created_at = ?, sent_at = ?
                WHERE id = ?
                """,
                (*row[1:], record_id),
            )
            if cursor.rowcount == 0:
                raise NotificationStoreError(f"No notification record with id {record_id}")

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def get(self, record_id: str) -> NotificationRecord | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM notifications WHERE id = ?", (record_id,)
            ).fetchone()
        return self._row_to_record(row) if row else None

    def list_by_correlation(self, correlation_id: str) -> list[NotificationRecord]:
        """Return every record of one dispatch, in insertion order."""
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM notifications WHERE correlation_id = ? ORDER BY seq ASC",
                (correlation_id,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def count(
        self,
        correlation_id: str | None = None,
        status: NotificationStatus | None = None,
    ) -> int:
        clauses: list[str] = []
        params: list[str] = []
        if correlation_id is not None:
            clauses.append("correlation_id = ?")
            params.append(correlation_id)
        if status is not None:
            clauses.append("status = ?")
            params.append(status.value)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        with self._connect() as conn:
            row = conn.execute(f"SELECT COUNT(*) FROM notifications{where}", params).fetchone()
        return int(row[0])

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _record_to_row(record: NotificationRecord) -> tuple:
        return (
            record.id,
            record.correlation_id,
            record.user_id,
            record.recipient_email,
            record.recipient_phone,
            record.recipient_name,
            record.type.value,
            json.dumps([c.value for c in record.channels]),
            record.status.value,
            json.dumps(record.template_data, default=str),
            record.created_at.isoformat(),
            record.sent_at.isoformat() if record.sent_at else None,
        )

    @staticmethod
    def _row_to_record(row: tuple) -> NotificationRecord:
        return NotificationRecord(
            id=row[0],
            correlation_id=row[1],
            user_id=row[2],
            recipient_email=row[3],
            recipient_phone=row[4],
            recipient_name=row[5],
            type=NotificationType(row[6]),
            channels=[NotificationChannel(c) for c in json.loads(row[7])],
            status=NotificationStatus(row[8]),
            template_data=json.loads(row[9]),
            created_at=datetime.fromisoformat(row[10]),
            sent_at=datetime.fromisoformat(row[11]) if row[11] else None,
        )
