"""
Same-origin relay for authorized calls to the downstream APIs.

Every invocation writes exactly one audit entry, whichever way it exits, and
the relay itself never raises: failures come back as a ``RelayResult``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from api_console.clients.audit_log import SQLiteAuditLogStore
from api_console.models.token import AuditLogEntry
from api_console.schemas.proxy import ProxyRequest
from api_console.services.token_cache import TokenCacheService
from api_console.utils.http import (
    JSON_CONTENT_TYPE,
    build_async_client,
    decode_response_body,
    flatten_headers,
    serialize_body,
)

logger = logging.getLogger(__name__)

TOKEN_MISSING_ERROR = "Token expired or not found"
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass
class RelayResult:
    """Outcome of one relayed call."""

    success: bool
    status_code: int
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    duration: int = 0
    error: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"error": self.error}
        return {
            "success": self.success,
            "statusCode": self.status_code,
            "data": self.data,
            "headers": self.headers,
            "duration": self.duration,
        }


class ProxyRelayService:
    """Attach the cached token to a request, execute it and audit the result."""

    def __init__(
        self,
        token_cache: TokenCacheService,
        audit_store: SQLiteAuditLogStore,
        *,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._tokens = token_cache
        self._audit = audit_store
        self._timeout = timeout
        self._transport = transport

    async def relay(self, request: ProxyRequest) -> RelayResult:
        started = time.perf_counter()
        method = request.method.upper()
        url = request.resolved_url()
        draft = AuditLogEntry(
            collection=request.collection,
            endpoint=request.endpoint,
            method=method,
            url=url,
        )

        try:
            if request.body is not None:
                draft.request_body = serialize_body(request.body)

            token = self._tokens.get_valid(request.environment)
            if token is None:
                draft.error = TOKEN_MISSING_ERROR
                draft.status_code = 401
                draft.duration = _elapsed_ms(started)
                self._write_audit(draft)
                return RelayResult(
                    success=False,
                    status_code=401,
                    duration=draft.duration,
                    error=f"{TOKEN_MISSING_ERROR}. Please refresh the token.",
                )

            headers = httpx.Headers(
                {"Authorization": token.authorization, "Content-Type": JSON_CONTENT_TYPE}
            )
            for key, value in (request.headers or {}).items():
                if value is not None:
                    headers[key] = str(value)

            content = None
            if request.body is not None and method in _BODY_METHODS:
                content = serialize_body(request.body)

            async with build_async_client(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method, url, headers=headers, content=content
                )
            duration = _elapsed_ms(started)

            data = decode_response_body(response)
            result = RelayResult(
                success=response.is_success,
                status_code=response.status_code,
                data=data,
                headers=flatten_headers(response.headers),
                duration=duration,
            )
            draft.status_code = response.status_code
            draft.response_body = serialize_body(data)
            draft.duration = duration
        except Exception as exc:  # pylint: disable=broad-except
            message = str(exc) or exc.__class__.__name__
            logger.error("Relay of %s %s failed: %s", method, url, message)
            draft.error = message
            draft.status_code = 500
            draft.duration = _elapsed_ms(started)
            self._write_audit(draft)
            return RelayResult(
                success=False, status_code=500, duration=draft.duration, error=message
            )

        self._write_audit(draft)
        logger.info(
            "Relayed %s %s -> %s in %sms", method, url, result.status_code, duration
        )
        return result

    def _write_audit(self, entry: AuditLogEntry) -> None:
        """Persist an audit entry; a storage failure is logged and dropped."""
        try:
            self._audit.insert(entry)
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Failed to write audit entry for %s %s", entry.method, entry.url
            )


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


__all__ = ["ProxyRelayService", "RelayResult", "TOKEN_MISSING_ERROR"]
