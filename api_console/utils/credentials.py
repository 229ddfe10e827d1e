"""Lookup helpers for free-form credential bags."""

from __future__ import annotations

from typing import Any, Mapping


def resolve_credential(bag: Mapping[str, Any] | None, *candidate_keys: str) -> str:
    """
    Return the first non-empty value among ``candidate_keys``.

    Operators paste credentials exported from several tools, so the same field
    shows up as ``ClientId``, ``CLIENT_ID`` or ``client_id``, and numeric ids
    may arrive as JSON numbers. A missing value yields an empty string so the
    token server gets to reject the request.
    """
    if not bag:
        return ""
    for key in candidate_keys:
        value = bag.get(key)
        if value is None or value == "":
            continue
        return value if isinstance(value, str) else str(value)
    return ""


def mask_secret(value: str, *, visible: int = 0) -> str:
    """Render a credential for log output."""
    if not value:
        return "MISSING"
    if visible <= 0:
        return "***"
    return value[:visible] + "***"


__all__ = ["mask_secret", "resolve_credential"]
