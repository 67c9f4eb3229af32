# src/inkpress/models/__init__.py
"""SQLAlchemy models for the Inkpress application."""

from .category import Category
from .post import Post
from .site_settings import SiteSettings
from .tag import PostTag, Tag
from .user import User

__all__ = [
    "Category",
    "Post",
    "PostTag", "Tag",
    "SiteSettings",
    "User",
]
