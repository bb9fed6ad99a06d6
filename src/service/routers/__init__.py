from .auth import router as auth_router
from .user import router as user_router
from .restaurant import router as restaurant_router
from .menu import router as menu_router
from .public_menu import router as public_menu_router
from .misc import router as misc_router

__all__ = [
    "auth_router",
    "user_router",
    "restaurant_router",
    "menu_router",
    "public_menu_router",
    "misc_router",
]
