"""
Domain models for cached tokens and audit records.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenResponse(BaseModel):
    """Token payload returned by any of the supported authorization servers."""

    model_config = ConfigDict(extra="ignore")

    access_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None


class CachedToken(_CamelModel):
    """Most recent token for one logical environment."""

    environment: str = Field(..., description="Cache partition key.")
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    expires_at: datetime = Field(
        ..., description="Issuance time plus expires_in; authoritative for validity."
    )
    scope: Optional[str] = None

    @property
    def authorization(self) -> str:
        return f"{self.token_type} {self.access_token}"


class AuditLogEntry(_CamelModel):
    """Record of one proxied call attempt.

    The relay fills it in as the call progresses; rows are never updated once
    inserted.
    """

    id: Optional[int] = None
    collection: Optional[str] = None
    endpoint: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    request_body: Optional[str] = None
    response_body: Optional[str] = None
    status_code: Optional[int] = None
    duration: Optional[int] = Field(None, description="Elapsed milliseconds.")
    error: Optional[str] = None
    created_at: Optional[datetime] = None


__all__ = ["AuditLogEntry", "CachedToken", "TokenResponse"]
