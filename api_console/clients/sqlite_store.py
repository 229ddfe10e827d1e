"""SQLite-backed token cache records."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


class SQLiteStore:
    """Token records keyed uniquely by logical environment."""

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
                CREATE TABLE IF NOT EXISTS token_cache (
                    environment TEXT PRIMARY KEY,
                    access_token TEXT NOT NULL,
                    token_type TEXT NOT NULL DEFAULT 'Bearer',
                    expires_in INTEGER NOT NULL,
                    expires_at TEXT NOT NULL,
                    scope TEXT,
                    updated_at TEXT NOT NULL
                )
                """
            )

    def put_token(self, item: Dict[str, Any]) -> None:
        environment = item.get("environment")
        if not environment:
            raise ValueError("Token record must include an 'environment' key")

        expires_at = item["expires_at"]
        if isinstance(expires_at, datetime):
            expires_at = expires_at.isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO token_cache (
                    environment, access_token, token_type, expires_in,
                    expires_at, scope, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(environment) DO UPDATE SET
                    access_token = excluded.access_token,
                    token_type = excluded.token_type,
                    expires_in = excluded.expires_in,
                    expires_at = excluded.expires_at,
                    scope = excluded.scope,
                    updated_at = excluded.updated_at
                """,
                (
                    environment,
                    item["access_token"],
                    item.get("token_type") or "Bearer",
                    item["expires_in"],
                    expires_at,
                    item.get("scope"),
                    datetime.now(timezone.utc).isoformat(),
                ),
            )

    def get_token(self, environment: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT environment, access_token, token_type, expires_in,
                       expires_at, scope
                FROM token_cache WHERE environment = ?
                """,
                (environment,),
            ).fetchone()
        if not row:
            return None
        record = dict(row)
        record["expires_at"] = datetime.fromisoformat(record["expires_at"])
        return record

    def count_tokens(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM token_cache").fetchone()
        return int(row["total"])


__all__ = ["SQLiteStore"]
