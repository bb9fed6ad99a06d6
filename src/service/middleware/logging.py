import logging
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request

from auth.session import SESSION_COOKIE_NAME

logger = logging.getLogger('menu.service.middleware')


class RequestResponseLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log requests and responses without leaking cookie values"""

    async def dispatch(self, request: Request, call_next):
        logger.debug(f"REQUEST: {request.method} {request.url.path}")

        session_cookie_value = request.cookies.get(SESSION_COOKIE_NAME)
        logger.debug(f"REQUEST: Session cookie present: {bool(session_cookie_value)}")
        if session_cookie_value:
            logger.debug(f"REQUEST: Session cookie length: {len(session_cookie_value)}")

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(f"UNEXPECTED_EXCEPTION: {type(exc).__name__}: {str(exc)} for {request.method} {request.url.path}")
            raise

        logger.debug(f"RESPONSE: Status {response.status_code} for {request.method} {request.url.path}")
        logger.debug(f"RESPONSE: Sets cookie: {'set-cookie' in response.headers}")

        if response.status_code >= 500:
            logger.error(f"ERROR_RESPONSE: Status {response.status_code} for {request.url.path}")
        elif response.status_code >= 400:
            logger.info(f"CLIENT_ERROR_RESPONSE: Status {response.status_code} for {request.url.path}")

        return response
