"""
Operator-triggered token acquisition.

Selects the token flow for an environment identifier, runs it once and caches
the result under the identifier's partition.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from api_console.clients.oauth_flows import (
    EnterpriseClientCredentialsFlow,
    IdentityDomainClientCredentialsFlow,
    ResourceOwnerPasswordFlow,
    TokenEndpointClient,
    TokenFlow,
)
from api_console.models.token import CachedToken
from api_console.services.environments import (
    DISTRIBUTION,
    KNOWN_ENVIRONMENTS,
    LOGICAL_ENVIRONMENTS,
    OPERA_CLOUD,
    RA_STORAGE,
    UnknownEnvironmentError,
    alias_environment,
)
from api_console.services.token_cache import TokenCacheService

logger = logging.getLogger(__name__)


def build_token_flows(client: TokenEndpointClient) -> dict[str, TokenFlow]:
    """One flow per logical environment, sharing a token endpoint client."""
    return {
        OPERA_CLOUD: EnterpriseClientCredentialsFlow(client),
        DISTRIBUTION: ResourceOwnerPasswordFlow(client),
        RA_STORAGE: IdentityDomainClientCredentialsFlow(client),
    }


class TokenIssuerService:
    """Fetch tokens from the authorization servers and cache them."""

    def __init__(
        self, cache: TokenCacheService, flows: Mapping[str, TokenFlow]
    ) -> None:
        missing = LOGICAL_ENVIRONMENTS.difference(flows)
        if missing:
            raise ValueError(f"No token flow configured for: {', '.join(sorted(missing))}")
        self._cache = cache
        self._flows = flows

    def select_flow(self, environment: str) -> TokenFlow:
        if environment not in KNOWN_ENVIRONMENTS:
            raise UnknownEnvironmentError(environment)
        return self._flows[alias_environment(environment)]

    async def issue(
        self, environment: str, credentials: Mapping[str, Any]
    ) -> CachedToken:
        flow = self.select_flow(environment)
        partition = alias_environment(environment)
        token = await flow.acquire(credentials)
        cached = self._cache.upsert(partition, token)
        logger.info(
            "Cached %s token for %s (expires %s)",
            cached.token_type,
            partition,
            cached.expires_at.isoformat(),
        )
        return cached


__all__ = ["TokenIssuerService", "build_token_flows"]
