"""
API routers.
"""

from .auth import router as auth_router
from .buildings import router as buildings_router
from .images import router as images_router
from .users import router as users_router

__all__ = ["auth_router", "buildings_router", "images_router", "users_router"]
