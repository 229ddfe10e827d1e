"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from api_console.clients import SQLiteAuditLogStore, SQLiteStore, TokenEndpointClient
from api_console.core.config import get_settings
from api_console.services import (
    ProxyRelayService,
    TokenCacheService,
    TokenIssuerService,
    build_token_flows,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_sqlite_store() -> SQLiteStore:
    """Provide the shared token cache record store."""
    return SQLiteStore(_settings().database_path)


@lru_cache()
def get_audit_log_store() -> SQLiteAuditLogStore:
    """Provide the shared audit log store."""
    return SQLiteAuditLogStore(_settings().database_path)


@lru_cache()
def get_token_endpoint_client() -> TokenEndpointClient:
    """Create a client for posting grant requests to authorization servers."""
    return TokenEndpointClient(timeout=_settings().http.token_timeout_seconds)


@lru_cache()
def get_token_cache_service() -> TokenCacheService:
    """Provide helper for reading and writing cached tokens."""
    return TokenCacheService(
        store=get_sqlite_store(),
        default_ttl_seconds=_settings().tokens.default_ttl_seconds,
    )


def get_token_issuer_service() -> TokenIssuerService:
    """Build a token issuer wired to every supported token flow."""
    return TokenIssuerService(
        cache=get_token_cache_service(),
        flows=build_token_flows(get_token_endpoint_client()),
    )


def get_proxy_relay_service() -> ProxyRelayService:
    """Build a relay using the cached tokens and the audit log."""
    return ProxyRelayService(
        token_cache=get_token_cache_service(),
        audit_store=get_audit_log_store(),
        timeout=_settings().http.proxy_timeout_seconds,
    )


__all__ = [
    "get_audit_log_store",
    "get_proxy_relay_service",
    "get_sqlite_store",
    "get_token_cache_service",
    "get_token_endpoint_client",
    "get_token_issuer_service",
]
