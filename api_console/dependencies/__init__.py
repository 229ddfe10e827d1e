"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_audit_log_store,
    get_proxy_relay_service,
    get_sqlite_store,
    get_token_cache_service,
    get_token_endpoint_client,
    get_token_issuer_service,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_app_settings",
    "get_audit_log_store",
    "get_proxy_relay_service",
    "get_sqlite_store",
    "get_token_cache_service",
    "get_token_endpoint_client",
    "get_token_issuer_service",
]
