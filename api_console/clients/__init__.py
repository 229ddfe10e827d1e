"""Expose constructed client wrappers."""

from .audit_log import SQLiteAuditLogStore
from .oauth_flows import (
    EnterpriseClientCredentialsFlow,
    IdentityDomainClientCredentialsFlow,
    ResourceOwnerPasswordFlow,
    TokenEndpointClient,
    TokenRequestError,
)
from .sqlite_store import SQLiteStore

__all__ = [
    "EnterpriseClientCredentialsFlow",
    "IdentityDomainClientCredentialsFlow",
    "ResourceOwnerPasswordFlow",
    "SQLiteAuditLogStore",
    "SQLiteStore",
    "TokenEndpointClient",
    "TokenRequestError",
]
