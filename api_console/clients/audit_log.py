"""SQLite-backed append-only log of proxied calls."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from api_console.models.token import AuditLogEntry

_COLUMNS = (
    "collection",
    "endpoint",
    "method",
    "url",
    "request_body",
    "response_body",
    "status_code",
    "duration",
    "error",
)


class SQLiteAuditLogStore:
    """Persist one row per relay invocation; rows are never updated."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS api_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    collection TEXT,
                    endpoint TEXT,
                    method TEXT,
                    url TEXT,
                    request_body TEXT,
                    response_body TEXT,
                    status_code INTEGER,
                    duration INTEGER,
                    error TEXT,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_api_logs_collection "
                "ON api_logs (collection, created_at)"
            )

    def insert(self, entry: AuditLogEntry) -> None:
        created_at = entry.created_at or datetime.now(timezone.utc)
        values = [getattr(entry, column) for column in _COLUMNS]
        placeholders = ", ".join("?" for _ in range(len(_COLUMNS) + 1))
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO api_logs ({', '.join(_COLUMNS)}, created_at) "
                f"VALUES ({placeholders})",
                (*values, created_at.isoformat()),
            )

    def query(
        self, *, collection: Optional[str] = None, limit: int = 50
    ) -> List[AuditLogEntry]:
        sql = "SELECT * FROM api_logs"
        params: list = []
        if collection:
            sql += " WHERE collection = ?"
            params.append(collection)
        sql += " ORDER BY created_at DESC, id DESC LIMIT ?"
        params.append(limit)
        with self._connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [AuditLogEntry(**dict(row)) for row in rows]

    def clear(self) -> int:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM api_logs")
        return cursor.rowcount


__all__ = ["SQLiteAuditLogStore"]
