from .engine import Base, create_engine, create_session_factory, init_models
from .models import User, Restaurant, Category, Dish, DishCategory

__all__ = [
    "Base",
    "create_engine",
    "create_session_factory",
    "init_models",
    "User",
    "Restaurant",
    "Category",
    "Dish",
    "DishCategory",
]
