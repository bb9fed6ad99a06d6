"""Request-scoped session side channel: ledgers and context construction."""

from .token_ledger import TokenLedger
from .logout_ledger import LogoutLedger
from .context import RequestContext, AuthenticatedContext, ContextBuilder, generate_request_id

__all__ = [
    "TokenLedger",
    "LogoutLedger",
    "RequestContext",
    "AuthenticatedContext",
    "ContextBuilder",
    "generate_request_id",
]
