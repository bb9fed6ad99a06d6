"""
Row ownership checks.

Every restricted read or mutation of a restaurant, category or dish goes
through get_owned, which only returns rows reachable from the caller's own
restaurants. Absent and foreign rows are indistinguishable to the caller.
"""
import logging
from typing import TypeVar, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from database.models import User, Restaurant, Category, Dish
from .errors import NotFound

logger = logging.getLogger('menu.service.ownership')

Owned = TypeVar("Owned", Restaurant, Category, Dish)

_ENTITY_LABELS: dict[type, str] = {
    Restaurant: "Restaurant",
    Category: "Category",
    Dish: "Dish",
}


def owned_by(model: Union[type[Restaurant], type[Category], type[Dish]], user_id: str) -> ColumnElement[bool]:
    """SQL criterion selecting rows of model that belong to user_id."""
    if model is Restaurant:
        return Restaurant.user_id == user_id
    if model in (Category, Dish):
        return model.restaurant.has(Restaurant.user_id == user_id)
    raise TypeError(f"No ownership rule for {model.__name__}")


async def get_owned(db: AsyncSession, model: type[Owned], entity_id: str, user_id: str) -> Owned:
    """
    Load one row of model owned by user_id.

    Raises:
        NotFound: if the row does not exist or belongs to someone else
    """
    stmt = select(model).where(model.id == entity_id, owned_by(model, user_id))
    entity = (await db.execute(stmt)).scalar_one_or_none()
    if entity is None:
        label = _ENTITY_LABELS[model]
        logger.debug(f"{label} {entity_id} not found for user {user_id}")
        raise NotFound(f"{label} not found.")
    return entity


async def get_owner(db: AsyncSession, user_id: str) -> User:
    """
    Load the user behind a verified session.

    A session token outlives a deleted account, so this is checked before
    anything is created on the user's behalf.

    Raises:
        NotFound: if the user no longer exists
    """
    user = await db.get(User, user_id)
    if user is None:
        logger.info(f"Session refers to missing user {user_id}")
        raise NotFound("User not found.")
    return user
