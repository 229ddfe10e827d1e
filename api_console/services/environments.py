"""Mapping of UI-facing environment identifiers onto token cache partitions."""

from __future__ import annotations

OPERA_CLOUD = "opera_cloud"
DISTRIBUTION = "distribution"
RA_STORAGE = "ra_storage"

LOGICAL_ENVIRONMENTS = frozenset({OPERA_CLOUD, DISTRIBUTION, RA_STORAGE})

_ALIASES: dict[str, str] = {
    OPERA_CLOUD: OPERA_CLOUD,
    "property": OPERA_CLOUD,
    "workflows": OPERA_CLOUD,
    "nor1": OPERA_CLOUD,
    DISTRIBUTION: DISTRIBUTION,
    RA_STORAGE: RA_STORAGE,
    "ra_data": RA_STORAGE,
}

KNOWN_ENVIRONMENTS = frozenset(_ALIASES)


class UnknownEnvironmentError(ValueError):
    """Raised for identifiers outside the supported environment set."""

    def __init__(self, environment: str) -> None:
        super().__init__("Unknown environment")
        self.environment = environment


def alias_environment(identifier: str) -> str:
    """Return the cache partition for ``identifier``; unknown names pass through."""
    return _ALIASES.get(identifier, identifier)


__all__ = [
    "DISTRIBUTION",
    "KNOWN_ENVIRONMENTS",
    "LOGICAL_ENVIRONMENTS",
    "OPERA_CLOUD",
    "RA_STORAGE",
    "UnknownEnvironmentError",
    "alias_environment",
]
