"""HTTP session cookie handling: signed tokens and cookie attributes."""

from .config import SESSION_COOKIE_NAME, CookieParameters, cookie_params_from_env
from .models import SessionInfo
from .tokens import create_session_token, verify_session_token, extract_session_cookie

__all__ = [
    "SESSION_COOKIE_NAME",
    "CookieParameters",
    "cookie_params_from_env",
    "SessionInfo",
    "create_session_token",
    "verify_session_token",
    "extract_session_cookie",
]
