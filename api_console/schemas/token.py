"""Schemas for token issue and status checks."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api_console.models.token import CachedToken


class TokenIssueRequest(BaseModel):
    """Operator request to fetch a fresh token for an environment."""

    environment: str = Field(..., description="UI-facing environment identifier.")
    credentials: Dict[str, Any] = Field(
        default_factory=dict,
        description="Credential bag; several key spellings are accepted per field.",
    )


class TokenInfo(BaseModel):
    """Token details echoed back to the console."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    token_type: str
    expires_in: int
    expires_at: datetime
    environment: str

    @classmethod
    def from_cached(cls, token: CachedToken) -> "TokenInfo":
        return cls(
            access_token=token.access_token,
            token_type=token.token_type,
            expires_in=token.expires_in,
            expires_at=token.expires_at,
            environment=token.environment,
        )


class TokenIssueResponse(BaseModel):
    success: bool = True
    token: TokenInfo


class TokenStatusResponse(BaseModel):
    valid: bool
    token: Optional[TokenInfo] = None
    message: Optional[str] = None


__all__ = [
    "TokenInfo",
    "TokenIssueRequest",
    "TokenIssueResponse",
    "TokenStatusResponse",
]
