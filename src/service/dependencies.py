"""
FastAPI dependencies for the digital menu service.

Two capability tiers are exposed to route handlers:

- get_request_context (open tier): the request's context, session may be None
- require_session (restricted tier): the same context, guaranteed to carry a session

Both hand out the context built by SessionCookieMiddleware for this request,
so hooks called by handlers are keyed by the id the middleware waits on.
"""
from fastapi import Depends, Request

from auth.email import VerificationSender
from session import RequestContext, AuthenticatedContext
from .errors import Unauthenticated


def get_request_context(request: Request) -> RequestContext:
    context = getattr(request.state, "request_context", None)
    if context is None:
        raise RuntimeError("SessionCookieMiddleware is not installed; no request context available")
    return context


def require_session(context: RequestContext = Depends(get_request_context)) -> AuthenticatedContext:
    if context.session is None:
        raise Unauthenticated()
    return AuthenticatedContext.from_context(context)


def get_email_sender(request: Request) -> VerificationSender:
    """Returns the application's verification email sender."""
    return request.app.state.email_sender


def get_verification_code_ttl(request: Request) -> int:
    return request.app.state.verification_code_ttl_minutes
