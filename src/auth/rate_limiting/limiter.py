import logging
import os

from typing import Callable
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

logger = logging.getLogger('menu.auth.rate_limiting')


def _rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Custom handler for rate limit exceeded errors"""
    if isinstance(exc, RateLimitExceeded):
        detail = exc.detail if hasattr(exc, "detail") else str(exc)
        error_message = f"Rate limit exceeded: {detail}"
    else:
        error_message = "Rate limit error occurred"
        logger.error(
            f"Unexpected error in rate limiter: {type(exc).__name__}: {str(exc)}"
        )

    logger.warning(f"Rate limit hit for {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={
            "error": error_message,
            "error_code": "rate_limit_exceeded",
            "message": "Too many requests. Please try again later.",
        },
    )


def create_limiter(key_func: Callable) -> Limiter:
    """
    Create and configure a rate limiter.

    Uses Redis as the storage backend when REDIS_URL is set, in-memory storage otherwise.

    Args:
        key_func (Callable): Function to extract the key for rate limiting (e.g., IP address or User ID).
    Returns:
        Limiter: the configured slowapi limiter
    """
    redis_url = os.getenv("REDIS_URL")
    enabled = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

    try:
        if redis_url:
            logger.info(f"Rate limiter using Redis storage: {redis_url}")
            return Limiter(
                key_func=key_func,
                storage_uri=redis_url,
                enabled=enabled,
            )
        else:
            logger.info("REDIS_URL not set - rate limiter using in-memory storage")
            return Limiter(
                key_func=key_func,
                enabled=enabled,
            )
    except ValueError as e:
        logger.error(
            f"Error initializing rate limiter with Redis: {type(e).__name__}: {str(e)}"
        )
        logger.warning("Falling back to in-memory rate limiting")
        return Limiter(
            key_func=key_func,
            enabled=enabled,
        )


def get_rate_limit_key(request: Request) -> str:
    """
    Extract the rate limiting key from a request.

    Returns user:{user_id} when the request carries a verified session,
    otherwise the client address.
    """
    context = getattr(request.state, "request_context", None)
    if context is not None and context.session is not None:
        logger.debug(f"Rate limiting by user_id: {context.session.user_id}")
        return f"user:{context.session.user_id}"

    return get_remote_address(request)


def get_verification_code_limit() -> str:
    return os.getenv("VERIFICATION_CODE_RATE_LIMIT", "5/minute")


limiter = create_limiter(key_func=get_rate_limit_key)
