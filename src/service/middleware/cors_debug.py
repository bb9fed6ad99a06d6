import logging
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request

from auth.session import SESSION_COOKIE_NAME

logger = logging.getLogger('menu.service.middleware.cors')


class CORSDebugMiddleware(BaseHTTPMiddleware):
    """
    Logs cross-origin traffic that would break the session cookie.

    Browsers only send and store the session cookie on cross-origin calls when
    the response allows credentials for that exact origin. Anything else shows
    up in the browser as a logged-out dashboard, so it is reported here.
    """

    def __init__(self, app, cors_allowed_origins: list[str]):
        super().__init__(app)
        self.cors_allowed_origins = set(cors_allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if not origin:
            return await call_next(request)

        preflight = request.method == "OPTIONS" and "access-control-request-method" in request.headers
        logger.debug(
            f"CORS {'preflight' if preflight else 'request'} from {origin} for {request.url.path} "
            f"(session cookie sent: {SESSION_COOKIE_NAME in request.cookies})"
        )
        if origin not in self.cors_allowed_origins:
            logger.warning(f"Request from non-allowed origin: {origin}")

        response = await call_next(request)

        allowed_origin = response.headers.get("access-control-allow-origin")
        allows_credentials = response.headers.get("access-control-allow-credentials") == "true"
        if origin in self.cors_allowed_origins and (allowed_origin != origin or not allows_credentials):
            logger.warning(
                f"Response to {origin} for {request.url.path} will not carry the session cookie: "
                f"allow-origin={allowed_origin!r} allow-credentials={allows_credentials}"
            )

        return response
