try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import httpx
import pytest

from api_console.clients.oauth_flows import TokenEndpointClient, TokenRequestError
from api_console.clients.sqlite_store import SQLiteStore
from api_console.models.token import TokenResponse
from api_console.services.environments import UnknownEnvironmentError
from api_console.services.token_cache import TokenCacheService
from api_console.services.token_issuer import TokenIssuerService, build_token_flows


class StubFlow:
    def __init__(self, token: TokenResponse | None = None, error: Exception | None = None) -> None:
        self.token = token or TokenResponse(access_token="stub-token", expires_in=900)
        self.error = error
        self.calls: list[dict] = []

    async def acquire(self, credentials):
        self.calls.append(dict(credentials))
        if self.error is not None:
            raise self.error
        return self.token


@pytest.fixture()
def cache(tmp_path, clock) -> TokenCacheService:
    return TokenCacheService(SQLiteStore(str(tmp_path / "console.db")), clock=clock)


@pytest.mark.asyncio
async def test_issue_caches_under_aliased_partition(cache) -> None:
    flows = {"opera_cloud": StubFlow(), "distribution": StubFlow(), "ra_storage": StubFlow()}
    issuer = TokenIssuerService(cache, flows)

    cached = await issuer.issue("workflows", {"HostName": "https://gw"})

    assert cached.environment == "opera_cloud"
    assert flows["opera_cloud"].calls == [{"HostName": "https://gw"}]
    assert flows["distribution"].calls == []
    assert cache.get("opera_cloud").access_token == "stub-token"
    assert cache.get("workflows") is None


@pytest.mark.asyncio
async def test_ra_data_uses_identity_domain_partition(cache) -> None:
    flows = {"opera_cloud": StubFlow(), "distribution": StubFlow(), "ra_storage": StubFlow()}
    issuer = TokenIssuerService(cache, flows)

    await issuer.issue("ra_data", {})

    assert len(flows["ra_storage"].calls) == 1
    assert cache.get("ra_storage") is not None


@pytest.mark.asyncio
async def test_unknown_environment_fails_before_any_flow_runs(cache) -> None:
    flows = {"opera_cloud": StubFlow(), "distribution": StubFlow(), "ra_storage": StubFlow()}
    issuer = TokenIssuerService(cache, flows)

    with pytest.raises(UnknownEnvironmentError) as excinfo:
        await issuer.issue("sandbox", {})

    assert str(excinfo.value) == "Unknown environment"
    assert all(not flow.calls for flow in flows.values())


@pytest.mark.asyncio
async def test_flow_failure_leaves_cache_untouched(cache) -> None:
    failing = StubFlow(error=TokenRequestError(400, "bad grant"))
    issuer = TokenIssuerService(
        cache, {"opera_cloud": StubFlow(), "distribution": failing, "ra_storage": StubFlow()}
    )

    with pytest.raises(TokenRequestError):
        await issuer.issue("distribution", {})

    assert cache.get("distribution") is None


@pytest.mark.asyncio
async def test_build_token_flows_routes_to_expected_token_paths(cache) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json={"access_token": "t", "expires_in": 60})

    client = TokenEndpointClient(transport=httpx.MockTransport(handler))
    issuer = TokenIssuerService(cache, build_token_flows(client))

    await issuer.issue("property", {"HostName": "https://gw"})
    await issuer.issue("distribution", {"HostName": "https://gw"})
    await issuer.issue("ra_storage", {"IDCSHostName": "https://idcs"})

    assert seen == ["/oauth/v1/tokens", "/hdpba/oauth2/v1/token", "/oauth2/v1/token"]


def test_issuer_requires_a_flow_for_every_partition(cache) -> None:
    with pytest.raises(ValueError, match="ra_storage"):
        TokenIssuerService(cache, {"opera_cloud": StubFlow(), "distribution": StubFlow()})
