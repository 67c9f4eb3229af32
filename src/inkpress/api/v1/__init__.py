# src/inkpress/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_categories_router,
    admin_posts_router,
    admin_settings_router,
    admin_tags_router,
    auth_router,
    blog_router,
    uploads_router,
    users_router,
)

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
