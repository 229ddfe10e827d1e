"""Schemas for relayed API calls and the audit log."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api_console.models.token import AuditLogEntry
from api_console.utils.urls import build_url


class ProxyRequest(BaseModel):
    """Outbound call the console asks the relay to execute."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    method: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    headers: Optional[Dict[str, Any]] = None
    body: Any = None
    environment: str = Field(..., description="UI-facing environment identifier.")
    collection: str
    endpoint: str
    path_params: Optional[Dict[str, str]] = Field(
        None, description="Values for {{name}} and :name placeholders in the URL."
    )
    query_params: Optional[Dict[str, Optional[str]]] = Field(
        None, description="Query parameters appended to the URL; empty values are dropped."
    )

    def resolved_url(self) -> str:
        if self.path_params is None and self.query_params is None:
            return self.url
        return build_url(self.url, self.path_params, self.query_params)


class AuditLogPage(BaseModel):
    """Response envelope for audit log queries."""

    logs: List[AuditLogEntry] = Field(default_factory=list)


__all__ = ["AuditLogPage", "ProxyRequest"]
