"""Public schema exports."""

from .proxy import AuditLogPage, ProxyRequest
from .token import TokenInfo, TokenIssueRequest, TokenIssueResponse, TokenStatusResponse

__all__ = [
    "AuditLogPage",
    "ProxyRequest",
    "TokenInfo",
    "TokenIssueRequest",
    "TokenIssueResponse",
    "TokenStatusResponse",
]
