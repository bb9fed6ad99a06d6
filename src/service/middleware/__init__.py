import os
import logging as log
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import ProcedureError
from .logging import RequestResponseLoggingMiddleware
from .error_handling import ErrorHandlingMiddleware
from .session import SessionCookieMiddleware, finalize_session_cookie
from .cors_debug import CORSDebugMiddleware
from .exception_handlers import procedure_error_handler, custom_http_exception_handler

logger = log.getLogger('menu.service.middleware')


def setup_middleware(
    app: FastAPI,
    cors_allowed_origins: list[str],
    cors_allowed_methods: list[str],
    cors_allowed_headers: list[str]
):
    """
    Setup all middleware and exception handlers for the FastAPI application.

    Middleware are added in reverse order (last added = first executed).
    Current order of execution:
    1. CORSDebugMiddleware (optional, only in debug mode)
    2. CORSMiddleware (handles CORS)
    3. ErrorHandlingMiddleware (catches unhandled errors)
    4. RequestResponseLoggingMiddleware (logs requests/responses)
    5. SessionCookieMiddleware (builds the request context, sets or clears the session cookie)

    Args:
        app: FastAPI application instance
        cors_allowed_origins: List of allowed CORS origins
        cors_allowed_methods: List of allowed HTTP methods
        cors_allowed_headers: List of allowed headers
    """
    app.add_exception_handler(ProcedureError, procedure_error_handler)
    app.add_exception_handler(StarletteHTTPException, custom_http_exception_handler)

    # Innermost: the context must exist before routing and the cookie is set on the final response
    app.add_middleware(SessionCookieMiddleware)

    app.add_middleware(RequestResponseLoggingMiddleware)

    app.add_middleware(ErrorHandlingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins,
        allow_credentials=True,
        allow_methods=cors_allowed_methods,
        allow_headers=cors_allowed_headers,
    )

    logger.info(f"CORS configured with origins: {cors_allowed_origins}")

    if os.getenv("DEBUG_CORS", "false").lower() == "true":
        app.add_middleware(CORSDebugMiddleware, cors_allowed_origins=cors_allowed_origins)
        logger.info("CORS debug middleware enabled")


__all__ = [
    'setup_middleware',
    'RequestResponseLoggingMiddleware',
    'ErrorHandlingMiddleware',
    'SessionCookieMiddleware',
    'finalize_session_cookie',
    'CORSDebugMiddleware',
    'procedure_error_handler',
    'custom_http_exception_handler',
]
