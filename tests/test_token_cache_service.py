try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from datetime import timedelta

import pytest

from api_console.clients.sqlite_store import SQLiteStore
from api_console.models.token import TokenResponse
from api_console.services.token_cache import TokenCacheService


@pytest.fixture()
def store(tmp_path) -> SQLiteStore:
    return SQLiteStore(str(tmp_path / "console.db"))


def test_upsert_applies_defaults(store, clock) -> None:
    service = TokenCacheService(store, clock=clock)

    cached = service.upsert("opera_cloud", TokenResponse(access_token="abc"))

    assert cached.token_type == "Bearer"
    assert cached.expires_in == 3600
    assert cached.scope is None
    assert cached.expires_at == clock.now + timedelta(seconds=3600)


def test_upsert_twice_keeps_single_record_with_latest_fields(store, clock) -> None:
    service = TokenCacheService(store, clock=clock)

    service.upsert(
        "distribution",
        TokenResponse(access_token="first", expires_in=60, scope="read"),
    )
    clock.advance(seconds=30)
    service.upsert(
        "distribution",
        TokenResponse(access_token="second", token_type="MAC", expires_in=120),
    )

    assert store.count_tokens() == 1
    stored = service.get("distribution")
    assert stored is not None
    assert stored.access_token == "second"
    assert stored.token_type == "MAC"
    assert stored.expires_in == 120
    assert stored.scope is None
    assert stored.expires_at == clock.now + timedelta(seconds=120)


def test_get_missing_environment_returns_none(store) -> None:
    service = TokenCacheService(store)
    assert service.get("ra_storage") is None
    assert service.is_valid(None) is False


def test_validity_boundary(store, clock) -> None:
    service = TokenCacheService(store, clock=clock)
    cached = service.upsert("opera_cloud", TokenResponse(access_token="abc", expires_in=10))

    clock.now = cached.expires_at - timedelta(milliseconds=1)
    assert service.is_valid(cached) is True

    clock.now = cached.expires_at
    assert service.is_valid(cached) is True

    clock.now = cached.expires_at + timedelta(milliseconds=1)
    assert service.is_valid(cached) is False


def test_get_valid_aliases_identifier_and_checks_expiry(store, clock) -> None:
    service = TokenCacheService(store, clock=clock)
    service.upsert("opera_cloud", TokenResponse(access_token="abc", expires_in=10))

    token = service.get_valid("nor1")
    assert token is not None
    assert token.authorization == "Bearer abc"

    clock.advance(seconds=11)
    assert service.get_valid("property") is None


def test_default_ttl_is_configurable(store, clock) -> None:
    service = TokenCacheService(store, default_ttl_seconds=600, clock=clock)
    cached = service.upsert("ra_storage", TokenResponse(access_token="abc"))
    assert cached.expires_in == 600


def test_explicit_zero_lifetime_is_not_replaced_by_default(store, clock) -> None:
    service = TokenCacheService(store, clock=clock)

    cached = service.upsert("opera_cloud", TokenResponse(access_token="abc", expires_in=0))

    assert cached.expires_in == 0
    assert cached.expires_at == clock.now
    assert service.get_valid("opera_cloud") is not None
    clock.advance(seconds=1)
    assert service.get_valid("opera_cloud") is None
