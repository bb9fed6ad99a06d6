import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from service.config import get_cookie_domain, get_session_ttl_days, use_secure_cookies

logger = logging.getLogger('menu.auth.session.config')

SESSION_COOKIE_NAME = "session"


@dataclass(frozen=True)
class CookieParameters:
    """Attributes shared by every Set-Cookie we emit for the session cookie."""
    secure: bool = False
    httponly: bool = True
    samesite: Literal["lax", "strict", "none"] = "lax"
    domain: Optional[str] = None
    path: str = "/"
    max_age_days: int = 7

    def set_kwargs(self, now: datetime | None = None) -> dict:
        """Keyword arguments for Response.set_cookie when issuing a session."""
        now = now or datetime.now(timezone.utc)
        return {
            "httponly": self.httponly,
            "secure": self.secure,
            "samesite": self.samesite,
            "domain": self.domain,
            "path": self.path,
            "expires": now + timedelta(days=self.max_age_days),
        }

    def clear_kwargs(self) -> dict:
        """Keyword arguments for Response.set_cookie when expiring a session."""
        return {
            "httponly": self.httponly,
            "secure": self.secure,
            "samesite": self.samesite,
            "domain": self.domain,
            "path": self.path,
            "expires": datetime(1970, 1, 1, tzinfo=timezone.utc),
        }


def cookie_params_from_env() -> CookieParameters:
    params = CookieParameters(
        secure=use_secure_cookies(),
        domain=get_cookie_domain(),
        max_age_days=get_session_ttl_days(),
    )
    logger.debug(f"Session cookie parameters: secure={params.secure}, domain={params.domain}")
    return params
