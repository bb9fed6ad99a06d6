import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from fastapi import Request

from auth.session import SESSION_COOKIE_NAME, CookieParameters
from session import RequestContext, TokenLedger, LogoutLedger

logger = logging.getLogger('menu.service.middleware')


async def finalize_session_cookie(
    response: Response,
    context: RequestContext,
    token_ledger: TokenLedger,
    logout_ledger: LogoutLedger,
    cookie_params: CookieParameters,
    wait_seconds: float = 2.0,
) -> Response:
    """
    Turn the side-channel state of a finished request into cookie headers.

    A logout request wins over a freshly issued token. When no token shows up
    within wait_seconds the response goes out without a session cookie.
    """
    request_id = context.request_id
    token = await token_ledger.await_token(request_id, wait_seconds)

    if logout_ledger.is_marked_for_logout(request_id):
        response.set_cookie(SESSION_COOKIE_NAME, "", **cookie_params.clear_kwargs())
        logger.info(f"Session cookie cleared for request {request_id}")
    elif token:
        response.set_cookie(SESSION_COOKIE_NAME, token, **cookie_params.set_kwargs())
        logger.info(f"Session cookie issued for request {request_id}")

    return response


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """Builds the request context before routing and finalizes the session cookie afterwards"""

    async def dispatch(self, request: Request, call_next):
        state = request.app.state

        async with state.db_session_factory() as db:
            context = state.context_builder.build(request.headers, db)
            request.state.request_context = context

            response = await call_next(request)

            return await finalize_session_cookie(
                response,
                context,
                token_ledger=state.token_ledger,
                logout_ledger=state.logout_ledger,
                cookie_params=state.cookie_params,
                wait_seconds=state.session_token_wait_seconds,
            )
