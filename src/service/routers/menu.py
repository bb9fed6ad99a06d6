from fastapi import APIRouter, Depends
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from database.models import Restaurant, Category, Dish, DishCategory
from schema import (
    CategoryInput,
    CategoryResponse,
    CategoryRef,
    DishCreateInput,
    DishUpdateInput,
    DishResponse,
    SuccessResponse,
)
from session import AuthenticatedContext
from ..dependencies import require_session
from ..errors import BadRequest
from ..ownership import get_owned

logger = logging.getLogger('menu.service.routers.menu')

router = APIRouter(
    tags=["menu"],
)


def dish_to_response(dish: Dish) -> DishResponse:
    """Serialize a dish whose category links have been eagerly loaded."""
    return DishResponse(
        id=dish.id,
        name=dish.name,
        image=dish.image,
        description=dish.description,
        price=dish.price,
        spice_level=dish.spice_level,
        restaurant_id=dish.restaurant_id,
        categories=[CategoryRef.model_validate(link.category) for link in dish.category_links],
        created_at=dish.created_at,
        updated_at=dish.updated_at,
    )


async def _load_dish(db: AsyncSession, dish_id: str) -> Dish:
    stmt = (
        select(Dish)
        .where(Dish.id == dish_id)
        .options(selectinload(Dish.category_links).selectinload(DishCategory.category))
        .execution_options(populate_existing=True)
    )
    return (await db.execute(stmt)).scalar_one()


async def ensure_categories_in_restaurant(db: AsyncSession, category_ids: list[str], restaurant_id: str) -> list[str]:
    """
    Check that every id names a category of restaurant_id.

    Returns:
        The ids with duplicates removed, in their original order.

    Raises:
        BadRequest: if any id is unknown or belongs to another restaurant
    """
    unique_ids = list(dict.fromkeys(category_ids))
    if not unique_ids:
        return unique_ids

    stmt = select(Category.id).where(Category.id.in_(unique_ids), Category.restaurant_id == restaurant_id)
    found = set((await db.execute(stmt)).scalars().all())
    if len(found) != len(unique_ids):
        raise BadRequest("Some categories do not belong to this restaurant.")
    return unique_ids


# Categories

@router.post("/restaurants/{restaurant_id}/categories")
async def create_category(
    restaurant_id: str,
    body: CategoryInput,
    context: AuthenticatedContext = Depends(require_session),
) -> CategoryResponse:
    await get_owned(context.db, Restaurant, restaurant_id, context.user_id)

    category = Category(name=body.name, restaurant_id=restaurant_id)
    context.db.add(category)
    await context.db.commit()
    return CategoryResponse.model_validate(category)


@router.get("/restaurants/{restaurant_id}/categories")
async def list_categories(
    restaurant_id: str,
    context: AuthenticatedContext = Depends(require_session),
) -> list[CategoryResponse]:
    await get_owned(context.db, Restaurant, restaurant_id, context.user_id)

    stmt = select(Category).where(Category.restaurant_id == restaurant_id).order_by(Category.name.asc())
    categories = (await context.db.execute(stmt)).scalars().all()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.patch("/categories/{category_id}")
async def update_category(
    category_id: str,
    body: CategoryInput,
    context: AuthenticatedContext = Depends(require_session),
) -> CategoryResponse:
    category = await get_owned(context.db, Category, category_id, context.user_id)
    category.name = body.name
    await context.db.commit()
    return CategoryResponse.model_validate(category)


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: str,
    context: AuthenticatedContext = Depends(require_session),
) -> SuccessResponse:
    category = await get_owned(context.db, Category, category_id, context.user_id)
    await context.db.delete(category)
    await context.db.commit()
    return SuccessResponse()


# Dishes

@router.post("/restaurants/{restaurant_id}/dishes")
async def create_dish(
    restaurant_id: str,
    body: DishCreateInput,
    context: AuthenticatedContext = Depends(require_session),
) -> DishResponse:
    db = context.db
    await get_owned(db, Restaurant, restaurant_id, context.user_id)

    category_ids = await ensure_categories_in_restaurant(db, body.category_ids or [], restaurant_id)

    dish = Dish(
        name=body.name,
        image=str(body.image) if body.image else None,
        description=body.description,
        price=body.price,
        spice_level=body.spice_level,
        restaurant_id=restaurant_id,
    )
    dish.category_links = [DishCategory(category_id=cid) for cid in category_ids]
    db.add(dish)
    await db.commit()

    logger.info(f"Dish {dish.id} created in restaurant {restaurant_id}")
    return dish_to_response(await _load_dish(db, dish.id))


@router.get("/restaurants/{restaurant_id}/dishes")
async def list_dishes(
    restaurant_id: str,
    context: AuthenticatedContext = Depends(require_session),
) -> list[DishResponse]:
    """Dishes of a restaurant, newest first, with their categories."""
    await get_owned(context.db, Restaurant, restaurant_id, context.user_id)

    stmt = (
        select(Dish)
        .where(Dish.restaurant_id == restaurant_id)
        .options(selectinload(Dish.category_links).selectinload(DishCategory.category))
        .order_by(Dish.created_at.desc(), Dish.name)
    )
    dishes = (await context.db.execute(stmt)).scalars().all()
    return [dish_to_response(d) for d in dishes]


@router.patch("/dishes/{dish_id}")
async def update_dish(
    dish_id: str,
    body: DishUpdateInput,
    context: AuthenticatedContext = Depends(require_session),
) -> DishResponse:
    db = context.db
    dish = await get_owned(db, Dish, dish_id, context.user_id)
    provided = body.model_fields_set

    category_ids = None
    if body.category_ids is not None:
        category_ids = await ensure_categories_in_restaurant(db, body.category_ids, dish.restaurant_id)

    if body.name:
        dish.name = body.name
    if "image" in provided:
        dish.image = str(body.image) if body.image else None
    if "description" in provided:
        dish.description = body.description
    if "price" in provided:
        dish.price = body.price
    if "spice_level" in provided:
        dish.spice_level = body.spice_level

    if category_ids is not None:
        await db.execute(delete(DishCategory).where(DishCategory.dish_id == dish_id))
        db.add_all([DishCategory(dish_id=dish_id, category_id=cid) for cid in category_ids])

    await db.commit()
    return dish_to_response(await _load_dish(db, dish_id))


@router.delete("/dishes/{dish_id}")
async def delete_dish(
    dish_id: str,
    context: AuthenticatedContext = Depends(require_session),
) -> SuccessResponse:
    dish = await get_owned(context.db, Dish, dish_id, context.user_id)
    await context.db.delete(dish)
    await context.db.commit()
    return SuccessResponse()
