# src/inkpress/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .category import CategoryCreate, CategoryResponse, CategoryStat, CategoryUpdate
from .common import PageLink, PaginationInfo, SlugAvailability
from .feed import CategoryFeedResponse, HomeFeedResponse, TagFeedResponse
from .post import (
    PostDetail,
    PostListResponse,
    PostQueryParams,
    PostResponse,
    PostStatusUpdate,
    PostSubmit,
)
from .site_settings import SiteSettingsResponse, SiteSettingsUpdate
from .tag import TagCreate, TagResponse, TagStat, TagSummary, TagUpdate
from .user import (
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenPair,
    UserResponse,
)

__all__ = [
    "CategoryCreate", "CategoryResponse", "CategoryStat", "CategoryUpdate",
    "PageLink", "PaginationInfo", "SlugAvailability",
    "CategoryFeedResponse", "HomeFeedResponse", "TagFeedResponse",
    "PostDetail", "PostListResponse", "PostQueryParams", "PostResponse",
    "PostStatusUpdate", "PostSubmit",
    "SiteSettingsResponse", "SiteSettingsUpdate",
    "TagCreate", "TagResponse", "TagStat", "TagSummary", "TagUpdate",
    "LoginRequest", "ProfileUpdateRequest", "RegisterRequest", "TokenPair", "UserResponse",
]
