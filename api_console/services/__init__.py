"""Service layer exports."""

from .environments import UnknownEnvironmentError, alias_environment
from .proxy_relay import ProxyRelayService, RelayResult
from .token_cache import TokenCacheService
from .token_issuer import TokenIssuerService, build_token_flows

__all__ = [
    "ProxyRelayService",
    "RelayResult",
    "TokenCacheService",
    "TokenIssuerService",
    "UnknownEnvironmentError",
    "alias_environment",
    "build_token_flows",
]
