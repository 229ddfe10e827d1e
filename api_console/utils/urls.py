"""Endpoint URL templating: ``{{variable}}`` and ``:variable`` placeholders."""

from __future__ import annotations

import re
from typing import Mapping
from urllib.parse import quote

_PLACEHOLDER = re.compile(r"\{\{([^}]+)\}\}|:([A-Za-z_][A-Za-z0-9_]*)")

# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def replace_variables(template: str, variables: Mapping[str, str] | None) -> str:
    """Substitute known placeholders, leaving unknown ones untouched."""
    if not template:
        return ""
    variables = variables or {}

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1) if match.group(1) is not None else match.group(2)
        value = variables.get(name)
        return match.group(0) if value is None else value

    return _PLACEHOLDER.sub(_substitute, template)


def build_url(
    base_url: str,
    path_params: Mapping[str, str] | None,
    query_params: Mapping[str, str | None] | None,
) -> str:
    """Expand path placeholders and append the non-empty query parameters."""
    url = replace_variables(base_url, path_params)
    query = "&".join(
        f"{_encode_component(key)}={_encode_component(value)}"
        for key, value in (query_params or {}).items()
        if value is not None and value != ""
    )
    if query:
        url += ("&" if "?" in url else "?") + query
    return url


def extract_path_params(url: str) -> list[str]:
    """List placeholder names in the order they first appear."""
    params: list[str] = []
    for match in _PLACEHOLDER.finditer(url or ""):
        name = match.group(1) if match.group(1) is not None else match.group(2)
        if name and name not in params:
            params.append(name)
    return params


__all__ = ["build_url", "extract_path_params", "replace_variables"]
