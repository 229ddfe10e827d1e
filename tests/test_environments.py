try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from api_console.services.environments import (
    KNOWN_ENVIRONMENTS,
    LOGICAL_ENVIRONMENTS,
    alias_environment,
)


@pytest.mark.parametrize("identifier", ["property", "workflows", "nor1", "opera_cloud"])
def test_property_modules_share_opera_cloud_partition(identifier: str) -> None:
    assert alias_environment(identifier) == "opera_cloud"


@pytest.mark.parametrize("identifier", ["ra_data", "ra_storage"])
def test_reporting_modules_share_ra_storage_partition(identifier: str) -> None:
    assert alias_environment(identifier) == "ra_storage"


def test_distribution_maps_to_itself() -> None:
    assert alias_environment("distribution") == "distribution"


def test_unknown_identifier_passes_through() -> None:
    assert alias_environment("sandbox") == "sandbox"
    assert "sandbox" not in KNOWN_ENVIRONMENTS


def test_every_known_identifier_lands_on_a_logical_environment() -> None:
    assert {alias_environment(name) for name in KNOWN_ENVIRONMENTS} == LOGICAL_ENVIRONMENTS
