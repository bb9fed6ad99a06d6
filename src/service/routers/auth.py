from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
import logging

from auth.email import EmailDeliveryError, VerificationSender
from auth.rate_limiting import limiter, get_verification_code_limit
from auth.session import create_session_token
from auth.verification import generate_verification_code, code_expiry, code_matches
from database.models import User
from schema import RequestCodeInput, VerifyCodeInput, SuccessResponse, VerifyCodeResponse, UserResponse
from session import RequestContext, AuthenticatedContext
from ..config import get_jwt_secret, get_session_ttl_days
from ..dependencies import get_request_context, require_session, get_email_sender, get_verification_code_ttl
from ..errors import InvalidCode, NotFound, EmailDeliveryFailed
from ..ownership import get_owner

logger = logging.getLogger('menu.service.routers.auth')

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/request-verification-code")
@limiter.limit(get_verification_code_limit)
async def request_verification_code(
    request: Request,
    body: RequestCodeInput,
    context: RequestContext = Depends(get_request_context),
    sender: VerificationSender = Depends(get_email_sender),
    ttl_minutes: int = Depends(get_verification_code_ttl),
) -> SuccessResponse:
    """
    Issue a fresh six-digit code for an email address and send it there.

    Creates the user on first use. Any previously issued code is replaced.
    """
    email = _normalize_email(body.email)
    db = context.db
    code = generate_verification_code()

    user = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
    if user is None:
        user = User(email=email)
        db.add(user)
        logger.info(f"Creating user for {email}")

    user.verification_code = code
    user.verification_code_expires_at = code_expiry(ttl_minutes)
    await db.commit()

    try:
        await sender.send_verification_code(email, code)
    except EmailDeliveryError as e:
        logger.error(f"Verification code for {email} could not be delivered: {e}")
        raise EmailDeliveryFailed()

    return SuccessResponse()


@router.post("/verify-code")
async def verify_code(
    body: VerifyCodeInput,
    context: RequestContext = Depends(get_request_context),
) -> VerifyCodeResponse:
    """
    Exchange a verification code for a session.

    On success the code is consumed, the user is marked verified and a
    session token is handed to the request's side channel; the response
    carries it as the session cookie.
    """
    email = _normalize_email(body.email)
    db = context.db

    user = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
    if user is None:
        raise NotFound("User not found. Please request a verification code first.")

    if not code_matches(user.verification_code, user.verification_code_expires_at, body.code):
        logger.info(f"Rejected verification code for {email}")
        raise InvalidCode()

    user.verification_code = None
    user.verification_code_expires_at = None
    user.verified = True
    await db.commit()

    token = create_session_token(user.id, get_jwt_secret(), ttl_days=get_session_ttl_days())
    context.set_session_token(token)
    logger.info(f"User {user.id} verified, session issued")

    return VerifyCodeResponse(success=True, user_id=user.id)


@router.get("/me")
async def get_current_user(context: AuthenticatedContext = Depends(require_session)) -> UserResponse:
    return UserResponse.model_validate(await get_owner(context.db, context.user_id))


@router.post("/logout")
async def logout(context: AuthenticatedContext = Depends(require_session)) -> SuccessResponse:
    context.request_logout()
    return SuccessResponse()
