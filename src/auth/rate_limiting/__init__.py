from .limiter import (
    create_limiter,
    _rate_limit_exceeded_handler,
    get_rate_limit_key,
    get_verification_code_limit,
    limiter,
)

__all__ = [
    "create_limiter",
    "_rate_limit_exceeded_handler",
    "get_rate_limit_key",
    "get_verification_code_limit",
    "limiter",
]
