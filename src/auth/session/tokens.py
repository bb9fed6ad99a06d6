"""
Signed session tokens.

A session token is an HS256 JWT carrying the user id under the ``userId``
claim, plus ``iat`` and ``exp``. Anything that fails signature or expiry
verification is treated as "no session".
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import unquote

import jwt

from .config import SESSION_COOKIE_NAME
from .models import SessionInfo

logger = logging.getLogger('menu.auth.session.tokens')

JWT_ALG = "HS256"


def create_session_token(user_id: str, secret: str, ttl_days: int = 7, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "iat": now,
        "exp": now + timedelta(days=ttl_days),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALG)


def verify_session_token(token: str, secret: str) -> Optional[SessionInfo]:
    """
    Verify signature and expiry of a session token.

    Returns:
        SessionInfo for a valid token, None otherwise.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALG])
    except jwt.ExpiredSignatureError:
        logger.debug("Session token expired")
        return None
    except jwt.PyJWTError as e:
        logger.debug(f"Session token rejected: {type(e).__name__}")
        return None

    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        logger.debug("Session token has no userId claim")
        return None
    return SessionInfo(user_id=user_id)


def extract_session_cookie(cookie_header: Optional[str]) -> Optional[str]:
    """
    Pull the session cookie out of a raw Cookie header.

    Values are URL-decoded when they look encoded; everything after the first
    ``=`` belongs to the value.
    """
    if not cookie_header:
        return None

    for pair in cookie_header.split(";"):
        name, sep, value = pair.strip().partition("=")
        if not sep:
            continue
        if name.strip() == SESSION_COOKIE_NAME:
            return unquote(value.strip()) or None
    return None
