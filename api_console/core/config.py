"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, the relay services and the
maintenance scripts share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import logging
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class HttpSettings(BaseSettings):
    """Outbound HTTP behaviour for token servers and proxied calls."""

    model_config = SettingsConfigDict(populate_by_name=True)

    proxy_timeout_seconds: Optional[float] = Field(
        30.0,
        gt=0,
        validation_alias="CONSOLE_PROXY_TIMEOUT",
        description="Upper bound for a proxied call. Unset disables the timeout.",
    )
    token_timeout_seconds: float = Field(
        10.0, gt=0, validation_alias="CONSOLE_TOKEN_TIMEOUT"
    )


class TokenSettings(BaseSettings):
    """Token cache configuration."""

    model_config = SettingsConfigDict(populate_by_name=True)

    default_ttl_seconds: int = Field(
        3600,
        gt=0,
        validation_alias="CONSOLE_DEFAULT_TOKEN_TTL",
        description="Lifetime assumed when the token server omits expires_in.",
    )


class AuditSettings(BaseSettings):
    """Audit log query limits."""

    model_config = SettingsConfigDict(populate_by_name=True)

    default_limit: int = Field(50, gt=0, validation_alias="CONSOLE_AUDIT_DEFAULT_LIMIT")
    max_limit: int = Field(1000, gt=0, validation_alias="CONSOLE_AUDIT_MAX_LIMIT")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    database_path: str = Field(
        "data/api_console.db",
        validation_alias="CONSOLE_DB_PATH",
        description="SQLite file holding the token cache and the audit log.",
    )
    http: HttpSettings = Field(default_factory=HttpSettings)
    tokens: TokenSettings = Field(default_factory=TokenSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        """Reject level names the logging module does not know."""
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {value}")
        return normalized


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "AuditSettings",
    "HttpSettings",
    "TokenSettings",
    "get_settings",
]
