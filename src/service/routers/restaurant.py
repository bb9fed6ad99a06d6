from fastapi import APIRouter, Depends
from sqlalchemy import select
import logging

from database.models import Restaurant
from schema import RestaurantCreateInput, RestaurantUpdateInput, RestaurantResponse, SuccessResponse
from session import AuthenticatedContext
from ..dependencies import require_session
from ..ownership import get_owned, get_owner, owned_by

logger = logging.getLogger('menu.service.routers.restaurant')

router = APIRouter(
    prefix="/restaurants",
    tags=["restaurant"],
)


@router.post("")
async def create_restaurant(
    body: RestaurantCreateInput,
    context: AuthenticatedContext = Depends(require_session),
) -> RestaurantResponse:
    await get_owner(context.db, context.user_id)

    restaurant = Restaurant(name=body.name, location=body.location, user_id=context.user_id)
    context.db.add(restaurant)
    await context.db.commit()
    await context.db.refresh(restaurant)
    logger.info(f"Restaurant {restaurant.id} created by user {context.user_id}")
    return RestaurantResponse.model_validate(restaurant)


@router.get("")
async def list_restaurants(context: AuthenticatedContext = Depends(require_session)) -> list[RestaurantResponse]:
    """The caller's restaurants, newest first."""
    stmt = (
        select(Restaurant)
        .where(owned_by(Restaurant, context.user_id))
        .order_by(Restaurant.created_at.desc(), Restaurant.name)
    )
    restaurants = (await context.db.execute(stmt)).scalars().all()
    return [RestaurantResponse.model_validate(r) for r in restaurants]


@router.get("/{restaurant_id}")
async def get_restaurant(
    restaurant_id: str,
    context: AuthenticatedContext = Depends(require_session),
) -> RestaurantResponse:
    restaurant = await get_owned(context.db, Restaurant, restaurant_id, context.user_id)
    return RestaurantResponse.model_validate(restaurant)


@router.patch("/{restaurant_id}")
async def update_restaurant(
    restaurant_id: str,
    body: RestaurantUpdateInput,
    context: AuthenticatedContext = Depends(require_session),
) -> RestaurantResponse:
    restaurant = await get_owned(context.db, Restaurant, restaurant_id, context.user_id)
    if body.name:
        restaurant.name = body.name
    if body.location:
        restaurant.location = body.location
    await context.db.commit()
    await context.db.refresh(restaurant)
    return RestaurantResponse.model_validate(restaurant)


@router.delete("/{restaurant_id}")
async def delete_restaurant(
    restaurant_id: str,
    context: AuthenticatedContext = Depends(require_session),
) -> SuccessResponse:
    restaurant = await get_owned(context.db, Restaurant, restaurant_id, context.user_id)
    await context.db.delete(restaurant)
    await context.db.commit()
    logger.info(f"Restaurant {restaurant_id} deleted by user {context.user_id}")
    return SuccessResponse()
