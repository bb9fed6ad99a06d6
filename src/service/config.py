"""
Configuration setup for the digital menu service.

This module handles all configuration initialization including:
- CORS settings
- Session cookie and JWT settings
- Verification code settings
- Rate limiting setup
- Environment variables parsing
"""
import os
import logging
from typing import Tuple
from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from auth.rate_limiting import limiter, _rate_limit_exceeded_handler

logger = logging.getLogger('menu.service.config')


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def get_cors_config() -> Tuple[list[str], list[str], list[str]]:
    """
    Parse and return CORS configuration from environment variables.

    Returns:
        Tuple containing (origins, methods, headers) lists
    """
    cors_allowed_origins = os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
    cors_allowed_origins = [origin.strip() for origin in cors_allowed_origins if origin.strip()]

    # Development fallback
    if not cors_allowed_origins:
        logger.warning("CORS_ALLOWED_ORIGINS not set, using development defaults")
        cors_allowed_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    cors_allowed_methods = os.getenv("CORS_ALLOWED_METHODS", "GET,POST,PATCH,DELETE,OPTIONS").split(",")
    cors_allowed_methods = [method.strip() for method in cors_allowed_methods if method.strip()]

    cors_allowed_headers = os.getenv("CORS_ALLOWED_HEADERS", "Content-Type,Authorization").split(",")
    cors_allowed_headers = [header.strip() for header in cors_allowed_headers if header.strip()]

    return cors_allowed_origins, cors_allowed_methods, cors_allowed_headers


def get_jwt_secret() -> str:
    """
    Secret used to sign session tokens.

    Raises:
        RuntimeError: if JWT_SECRET is not set, so a misconfigured deployment
            fails at startup instead of issuing unverifiable cookies.
    """
    if not (secret := os.getenv("JWT_SECRET")):
        raise RuntimeError("JWT_SECRET environment variable must be set")
    return secret


def get_session_ttl_days() -> int:
    return int(os.getenv("SESSION_TTL_DAYS", "7"))


def use_secure_cookies() -> bool:
    """Cookies are Secure in production unless SECURE_COOKIES says otherwise."""
    if os.getenv("SECURE_COOKIES") is not None:
        return _env_flag("SECURE_COOKIES", "true")
    return os.getenv("APP_ENV", "development").lower() == "production"


def get_cookie_domain() -> str | None:
    return os.getenv("COOKIE_DOMAIN") or None


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./menu.db")


def get_verification_code_ttl_minutes() -> int:
    return int(os.getenv("VERIFICATION_CODE_TTL_MINUTES", "10"))


def get_session_token_wait_seconds() -> float:
    return float(os.getenv("SESSION_TOKEN_WAIT_SECONDS", "2.0"))


def get_ledger_retention_seconds() -> float:
    return float(os.getenv("LEDGER_RETENTION_SECONDS", "5.0"))


def setup_rate_limiting(app: FastAPI) -> None:
    """
    Configure rate limiting for the application.

    Sets up:
    - The shared limiter on app.state so slowapi decorators can find it
    - Exception handler for rate limit violations

    Args:
        app: FastAPI application instance
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    logger.info(f"Rate limiting configured (enabled={limiter.enabled})")


__all__ = [
    'get_cors_config',
    'get_jwt_secret',
    'get_session_ttl_days',
    'use_secure_cookies',
    'get_cookie_domain',
    'get_database_url',
    'get_verification_code_ttl_minutes',
    'get_session_token_wait_seconds',
    'get_ledger_retention_seconds',
    'setup_rate_limiting',
]
