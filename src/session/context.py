"""
Request context construction.

One RequestContext is built per inbound request and shared by every handler
dependency and by the boundary middleware, so the request id that handlers
deliver tokens under is the one the middleware waits on.
"""

import logging
import secrets
import string
import time
from dataclasses import dataclass, fields
from typing import Callable, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from auth.session import SessionInfo, extract_session_cookie, verify_session_token
from .token_ledger import TokenLedger
from .logout_ledger import LogoutLedger

logger = logging.getLogger('menu.session.context')

_BASE36 = string.digits + string.ascii_lowercase


def generate_request_id() -> str:
    """Millisecond timestamp followed by a random base-36 suffix."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(13))
    return f"{int(time.time() * 1000)}-{suffix}"


@dataclass
class RequestContext:
    request_id: str
    session: Optional[SessionInfo]
    db: AsyncSession
    set_session_token: Callable[[str], None]
    request_logout: Callable[[], None]


@dataclass
class AuthenticatedContext(RequestContext):
    """A RequestContext whose session is known to be present."""
    session: SessionInfo

    @property
    def user_id(self) -> str:
        return self.session.user_id

    @classmethod
    def from_context(cls, context: RequestContext) -> "AuthenticatedContext":
        if context.session is None:
            raise ValueError("context has no session")
        return cls(**{f.name: getattr(context, f.name) for f in fields(RequestContext)})


class ContextBuilder:
    """Builds request contexts wired to the process-wide ledgers."""

    def __init__(self, token_ledger: TokenLedger, logout_ledger: LogoutLedger, jwt_secret: str):
        self.token_ledger = token_ledger
        self.logout_ledger = logout_ledger
        self._jwt_secret = jwt_secret

    def resolve_session(self, headers: Mapping[str, str]) -> Optional[SessionInfo]:
        token = extract_session_cookie(headers.get("cookie"))
        if not token:
            return None
        return verify_session_token(token, self._jwt_secret)

    def build(self, headers: Mapping[str, str], db: AsyncSession) -> RequestContext:
        session = self.resolve_session(headers)
        request_id = generate_request_id()

        def set_session_token(token: str) -> None:
            self.token_ledger.deliver(request_id, token)

        def request_logout() -> None:
            self.logout_ledger.mark_for_logout(request_id)

        logger.debug(f"Built context {request_id} (authenticated={session is not None})")
        return RequestContext(
            request_id=request_id,
            session=session,
            db=db,
            set_session_token=set_session_token,
            request_logout=request_logout,
        )
