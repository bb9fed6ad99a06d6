import os
import logging

from fastapi import FastAPI

from .config import get_cors_config, setup_rate_limiting
from .lifecycle import lifespan
from .middleware import setup_middleware
from .routers import (
    auth_router,
    user_router,
    restaurant_router,
    menu_router,
    public_menu_router,
    misc_router,
)

logger = logging.getLogger('menu.service')

app = FastAPI(
    title="Digital Menu API",
    version=os.getenv("APP_VERSION", "0.1.0"),
    lifespan=lifespan,
)

cors_allowed_origins, cors_allowed_methods, cors_allowed_headers = get_cors_config()

setup_rate_limiting(app)
setup_middleware(app, cors_allowed_origins, cors_allowed_methods, cors_allowed_headers)

app.include_router(misc_router)
app.include_router(auth_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(restaurant_router, prefix="/api")
app.include_router(menu_router, prefix="/api")
app.include_router(public_menu_router, prefix="/api")
