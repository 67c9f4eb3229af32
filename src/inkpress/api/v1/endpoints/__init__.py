# src/inkpress/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin_categories import router as admin_categories_router
from .admin_posts import router as admin_posts_router
from .admin_settings import router as admin_settings_router
from .admin_tags import router as admin_tags_router
from .auth import router as auth_router
from .blog import router as blog_router
from .uploads import router as uploads_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "blog_router",
    "users_router",
    "admin_posts_router",
    "admin_tags_router",
    "admin_categories_router",
    "admin_settings_router",
    "uploads_router",
]
