"""SQLite storage adapter.

Persists flat key-value blobs (JSON text) in a single SQLite table. The
checkpoint and group stores sit on top of it and own their own keys.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Optional


class SQLiteStorage:
    """Thin SQLite wrapper holding one text blob per key."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - kv_store: whole-value blobs, read fully and written back fully
        """

        with self._connect() as conn:
            # Fields:
            # - key: store key, e.g. "wsd:groups" (PRIMARY KEY)
            # - value: serialized blob
            # - updated_at: last write, for debugging only
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )

    def get_value(self, key: str) -> Optional[str]:
        """Return the blob stored under key, if any."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,),
            ).fetchone()
        return str(row["value"]) if row else None

    def set_value(self, key: str, value: str) -> None:
        """Upsert the blob stored under key."""

        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, now.isoformat()),
            )
