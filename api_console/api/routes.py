"""
FastAPI routes for the API console relay.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from api_console.dependencies import (
    SettingsDependency,
    get_audit_log_store,
    get_proxy_relay_service,
    get_token_cache_service,
    get_token_issuer_service,
)
from api_console.schemas import (
    AuditLogPage,
    ProxyRequest,
    TokenInfo,
    TokenIssueRequest,
    TokenIssueResponse,
    TokenStatusResponse,
)
from api_console.services.environments import UnknownEnvironmentError
from api_console.services.proxy_relay import TOKEN_MISSING_ERROR

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.post("/token-issue", status_code=HTTPStatus.OK)
async def issue_token(
    payload: TokenIssueRequest,
    issuer: Annotated[Any, Depends(get_token_issuer_service)],
) -> JSONResponse:
    """Fetch a token for the requested environment and cache it."""
    try:
        cached = await issuer.issue(payload.environment, payload.credentials)
    except UnknownEnvironmentError as exc:
        return _error(str(exc), HTTPStatus.BAD_REQUEST)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Token request for %s failed", payload.environment)
        return _error(str(exc) or "Failed to obtain token", HTTPStatus.INTERNAL_SERVER_ERROR)

    body = TokenIssueResponse(token=TokenInfo.from_cached(cached))
    return JSONResponse(content=body.model_dump(mode="json", by_alias=True))


@router.get("/token-status", status_code=HTTPStatus.OK)
async def token_status(
    token_cache: Annotated[Any, Depends(get_token_cache_service)],
    environment: str | None = Query(
        default=None, description="UI-facing environment identifier."
    ),
) -> JSONResponse:
    """Report whether a usable token is cached for the environment."""
    if not environment:
        return _error("Environment required", HTTPStatus.BAD_REQUEST)

    try:
        cached = token_cache.get_valid(environment)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Token status check for %s failed", environment)
        return _error(str(exc) or "Failed to check token", HTTPStatus.INTERNAL_SERVER_ERROR)

    if cached is None:
        body = TokenStatusResponse(valid=False, message=TOKEN_MISSING_ERROR)
    else:
        body = TokenStatusResponse(valid=True, token=TokenInfo.from_cached(cached))
    return JSONResponse(
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True)
    )


@router.post("/proxy", status_code=HTTPStatus.OK)
async def proxy_request(
    payload: ProxyRequest,
    relay: Annotated[Any, Depends(get_proxy_relay_service)],
) -> JSONResponse:
    """Execute an authorized call on behalf of the console."""
    result = await relay.relay(payload)
    if result.error is not None:
        return _error(result.error, result.status_code)
    return JSONResponse(content=jsonable_encoder(result.to_payload()))


@router.get("/audit-log", status_code=HTTPStatus.OK)
async def list_audit_log(
    settings: SettingsDependency,
    audit_store: Annotated[Any, Depends(get_audit_log_store)],
    limit: int | None = Query(default=None, ge=1, description="Maximum entries."),
    collection: str | None = Query(default=None, description="Collection filter."),
) -> JSONResponse:
    """Return the most recent relay audit entries."""
    effective_limit = min(limit or settings.audit.default_limit, settings.audit.max_limit)
    try:
        entries = audit_store.query(collection=collection, limit=effective_limit)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Audit log query failed")
        return _error(str(exc) or "Failed to fetch logs", HTTPStatus.INTERNAL_SERVER_ERROR)

    page = AuditLogPage(logs=entries)
    return JSONResponse(content=page.model_dump(mode="json", by_alias=True))


@router.delete("/audit-log", status_code=HTTPStatus.OK)
async def clear_audit_log(
    audit_store: Annotated[Any, Depends(get_audit_log_store)],
) -> JSONResponse:
    """Remove every audit entry."""
    try:
        removed = audit_store.clear()
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Clearing the audit log failed")
        return _error(str(exc) or "Failed to clear logs", HTTPStatus.INTERNAL_SERVER_ERROR)

    logger.info("Cleared %s audit entries", removed)
    return JSONResponse(content={"success": True, "message": "Logs cleared"})
