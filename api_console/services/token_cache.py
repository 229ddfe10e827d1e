"""
Helpers for persisting and validating bearer tokens per logical environment.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from api_console.clients.sqlite_store import SQLiteStore
from api_console.models.token import CachedToken, TokenResponse
from api_console.services.environments import alias_environment


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCacheService:
    """Manages the single cached token held for each environment partition."""

    def __init__(
        self,
        store: SQLiteStore,
        *,
        default_ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._default_ttl = default_ttl_seconds
        self._clock = clock

    def upsert(self, environment: str, token: TokenResponse) -> CachedToken:
        """Replace the token stored for ``environment`` with a fresh one."""
        expires_in = token.expires_in
        if expires_in is None:
            expires_in = self._default_ttl
        cached = CachedToken(
            environment=environment,
            access_token=token.access_token or "",
            token_type=token.token_type or "Bearer",
            expires_in=expires_in,
            expires_at=self._clock() + timedelta(seconds=expires_in),
            scope=token.scope or None,
        )
        self._store.put_token(cached.model_dump())
        return cached

    def get(self, environment: str) -> Optional[CachedToken]:
        record = self._store.get_token(environment)
        if not record:
            return None
        expires_at = record["expires_at"]
        if expires_at.tzinfo is None:
            record["expires_at"] = expires_at.replace(tzinfo=timezone.utc)
        return CachedToken(**record)

    def is_valid(self, record: Optional[CachedToken]) -> bool:
        """A token is usable up to and including its expiry instant."""
        if record is None:
            return False
        return not self._clock() > record.expires_at

    def get_valid(self, identifier: str) -> Optional[CachedToken]:
        """Resolve a UI-facing identifier to its cached token if still valid."""
        record = self.get(alias_environment(identifier))
        return record if self.is_valid(record) else None


__all__ = ["TokenCacheService"]
