"""HTTP helpers shared by the token flows and the proxy relay."""

from __future__ import annotations

import base64
import json
from typing import Any

import httpx

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def basic_authorization(username: str, password: str) -> str:
    """Return an ``Authorization`` header value for HTTP Basic auth."""
    raw = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def serialize_body(body: Any) -> str:
    """Pass strings through unchanged and compact-JSON-encode everything else."""
    if isinstance(body, str):
        return body
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def decode_response_body(response: httpx.Response) -> Any:
    """Parse JSON responses, returning text for any other content type."""
    content_type = response.headers.get("content-type", "")
    if JSON_CONTENT_TYPE in content_type.lower():
        return response.json()
    return response.text


def flatten_headers(headers: httpx.Headers) -> dict[str, str]:
    """Collapse response headers into a plain mapping keyed by lower-case name."""
    flattened: dict[str, str] = {}
    for key, value in headers.multi_items():
        key = key.lower()
        flattened[key] = f"{flattened[key]}, {value}" if key in flattened else value
    return flattened


def build_async_client(
    *,
    timeout: float | None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create a one-shot client; ``timeout=None`` waits indefinitely."""
    return httpx.AsyncClient(timeout=timeout, transport=transport)


__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "basic_authorization",
    "build_async_client",
    "decode_response_body",
    "flatten_headers",
    "serialize_body",
]
