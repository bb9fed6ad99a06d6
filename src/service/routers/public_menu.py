from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import selectinload
import logging

from database.models import Restaurant, Category, Dish, DishCategory
from schema import CategoryRef, PublicCategory, PublicDish, PublicMenuResponse, PublicRestaurant
from session import RequestContext
from ..dependencies import get_request_context
from ..errors import NotFound

logger = logging.getLogger('menu.service.routers.public_menu')

router = APIRouter(
    prefix="/public",
    tags=["public-menu"],
)


def _public_dish(dish: Dish) -> PublicDish:
    return PublicDish(
        id=dish.id,
        name=dish.name,
        image=dish.image,
        description=dish.description,
        price=dish.price,
        spice_level=dish.spice_level,
        categories=[CategoryRef.model_validate(link.category) for link in dish.category_links],
    )


@router.get("/menu/{restaurant_id}")
async def get_restaurant_menu(
    restaurant_id: str,
    context: RequestContext = Depends(get_request_context),
) -> PublicMenuResponse:
    """
    Diner-facing menu: the restaurant and its categories in name order, each
    listing its dishes together with every category the dish appears in.
    """
    db = context.db
    restaurant = await db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise NotFound("Restaurant not found.")

    stmt = (
        select(Category)
        .where(Category.restaurant_id == restaurant_id)
        .options(
            selectinload(Category.dish_links)
            .selectinload(DishCategory.dish)
            .selectinload(Dish.category_links)
            .selectinload(DishCategory.category)
        )
        .order_by(Category.name.asc())
    )
    categories = (await db.execute(stmt)).scalars().all()

    return PublicMenuResponse(
        restaurant=PublicRestaurant.model_validate(restaurant),
        categories=[
            PublicCategory(
                id=category.id,
                name=category.name,
                dishes=[_public_dish(link.dish) for link in category.dish_links],
            )
            for category in categories
        ],
    )
