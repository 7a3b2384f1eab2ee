"""Slot persistence backed by a SQLite database."""

from __future__ import annotations

import sqlite3
import threading
from datetime import UTC, datetime
from typing import Any

from pyvehold.exceptions import HoldStorageError

_CREATE_SQL = """\
CREATE TABLE IF NOT EXISTS kv (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);
"""

_UPSERT_SQL = """\
INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
"""


class SqliteSlot:
    """Thread-safe slot stored in a ``kv`` table."""

    def __init__(self, db_path: str = ":memory:") -> None:
        self._db_path = db_path
        self._lock = threading.RLock()
        try:
            self._conn = sqlite3.connect(db_path, check_same_thread=False)
            with self._lock:
                self._conn.executescript(_CREATE_SQL)
        except sqlite3.Error as exc:
            raise HoldStorageError(f"Cannot open {db_path}: {exc}", backend="sqlite") from exc

    def get(self, key: str) -> str | None:
        try:
            with self._lock:
                row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise HoldStorageError(f"Cannot read {key!r}: {exc}", key=key, backend="sqlite") from exc
        return None if row is None else str(row[0])

    def set(self, key: str, value: str) -> None:
        now_iso = datetime.now(UTC).isoformat()
        try:
            with self._lock:
                self._conn.execute(_UPSERT_SQL, (key, value, now_iso))
                self._conn.commit()
        except sqlite3.Error as exc:
            raise HoldStorageError(f"Cannot write {key!r}: {exc}", key=key, backend="sqlite") from exc

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> SqliteSlot:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
