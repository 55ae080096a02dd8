"""
SQLite Key-Value Adapter.

Implements KeyValueStorePort on a single `kv_store` table.
Each key is one row; saves are single-statement upserts so a record is
never partially written.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value_json TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class SQLiteKeyValueStore:
    """SQLite implementation of KeyValueStorePort."""

    def __init__(
        self,
        db_path: str | Path,
        connection: sqlite3.Connection | None = None,
    ) -> None:
        self.db_path = str(db_path)

        if connection is None and self.db_path == ":memory:":
            # An in-memory database lives only as long as its connection
            connection = sqlite3.connect(self.db_path, check_same_thread=False)
        elif connection is None:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._shared_conn = connection

        conn = self._get_conn()
        try:
            conn.executescript(_SCHEMA)
            conn.commit()
            logger.debug("kv_store schema ready at %s", self.db_path)
        finally:
            if self._should_close():
                conn.close()

    def _get_conn(self) -> sqlite3.Connection:
        """Get database connection (uses the shared one if held)."""
        if self._shared_conn is not None:
            return self._shared_conn
        return sqlite3.connect(self.db_path)

    def _should_close(self) -> bool:
        """Whether to close connection after use."""
        return self._shared_conn is None

    def load(self, key: str) -> Any | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT value_json FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
            return json.loads(row[0]) if row else None
        finally:
            if self._should_close():
                conn.close()

    def save(self, key: str, value: Any) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value_json=excluded.value_json,
                    updated_at=excluded.updated_at
                """,
                (key, json.dumps(value), datetime.now(UTC).isoformat()),
            )
            conn.commit()
        finally:
            if self._should_close():
                conn.close()

    def delete(self, key: str) -> bool:
        conn = self._get_conn()
        try:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            if self._should_close():
                conn.close()
