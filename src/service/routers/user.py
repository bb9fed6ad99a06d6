from fastapi import APIRouter, Depends
import logging

from schema import ProfileUpdateInput, UserResponse
from session import AuthenticatedContext
from ..dependencies import require_session
from ..ownership import get_owner

logger = logging.getLogger('menu.service.routers.user')

router = APIRouter(
    prefix="/user",
    tags=["user"],
)


@router.get("/profile")
async def get_profile(context: AuthenticatedContext = Depends(require_session)) -> UserResponse:
    return UserResponse.model_validate(await get_owner(context.db, context.user_id))


@router.patch("/profile")
async def update_profile(
    body: ProfileUpdateInput,
    context: AuthenticatedContext = Depends(require_session),
) -> UserResponse:
    """Update name and/or country; omitted fields are left as they are."""
    user = await get_owner(context.db, context.user_id)
    if body.name:
        user.name = body.name
    if body.country:
        user.country = body.country
    await context.db.commit()
    logger.info(f"Profile updated for user {user.id}")
    return UserResponse.model_validate(user)
