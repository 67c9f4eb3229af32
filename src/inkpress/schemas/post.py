"""Post-related Pydantic schemas."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from inkpress.core.settings import settings
from inkpress.schemas.common import PaginationInfo
from inkpress.schemas.tag import TagSummary

PostStatus = Literal["draft", "published"]
PostStatusFilter = Literal["all", "draft", "published"]
PostOrderField = Literal["created_at", "updated_at", "published_at", "title"]
OrderDirection = Literal["asc", "desc"]


class PostQueryParams(BaseModel):
    """Validated filter, sort and paging options for post listings.

    Accepts both snake_case and camelCase keys (``pageSize``, ``searchTerm``)
    and rejects anything it does not know. Absent filters mean "no
    constraint"; a blank search term is the same as no search term.
    """

    page: int = Field(1, ge=1)
    page_size: int = Field(settings.feed_page_size, ge=1, le=settings.max_page_size)
    status: PostStatusFilter = "all"
    author_id: uuid.UUID | None = None
    category_id: uuid.UUID | None = None
    tag_id: uuid.UUID | None = None
    search_term: str | None = None
    order_by: PostOrderField = "created_at"
    order_direction: OrderDirection = "desc"
    is_top: bool | None = None

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("search_term")
    @classmethod
    def _blank_search_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def offset(self) -> int:
        """Row offset of the first item on the requested page."""
        return (self.page - 1) * self.page_size


class CategoryRef(BaseModel):
    """Category summary joined onto listing rows."""

    id: uuid.UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    """Schema for a post row returned by listings and write endpoints."""

    id: uuid.UUID
    title: str
    slug: str
    content: Any = None
    excerpt: str | None
    featured_image: str | None
    status: PostStatus
    author_id: uuid.UUID
    category_id: uuid.UUID | None
    published_at: datetime | None
    seo_keywords: str | None
    seo_description: str | None
    allow_comment: bool
    is_top: bool
    created_at: datetime
    updated_at: datetime
    category: CategoryRef | None = None

    model_config = ConfigDict(from_attributes=True)


class PostSubmit(BaseModel):
    """Payload submitted by the post editor for create and update."""

    title: str = Field(..., min_length=1, max_length=200)
    content: Any = None
    excerpt: str | None = None
    featured_image: str | None = None
    status: PostStatus = "draft"
    category_id: uuid.UUID
    tags: list[Annotated[str, Field(max_length=100)]] = Field(default_factory=list)
    seo_keywords: str | None = None
    seo_description: str | None = None
    allow_comment: bool = True
    is_top: bool = False

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title must not be empty")
        return value

    @field_validator("excerpt", "featured_image", "seo_keywords", "seo_description")
    @classmethod
    def _empty_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class PostStatusUpdate(BaseModel):
    """Schema for toggling a post between draft and published."""

    status: PostStatus


class AuthorDisplay(BaseModel):
    """Author block shown on a post page, with fallbacks applied."""

    id: str
    username: str
    avatar_url: str


class CategoryDisplay(BaseModel):
    """Category block shown on a post page; empty id when uncategorized."""

    id: str
    name: str


class PostDetail(BaseModel):
    """Denormalized post returned by the detail endpoints."""

    id: uuid.UUID
    title: str
    slug: str
    content: Any = None
    excerpt: str | None
    featured_image: str | None
    status: PostStatus
    published_at: datetime | None
    seo_keywords: str | None
    seo_description: str | None
    allow_comment: bool
    is_top: bool
    created_at: datetime
    updated_at: datetime
    author: AuthorDisplay
    category: CategoryDisplay
    tags: list[TagSummary]
    views: int = 0
    likes: int = 0
    comments_count: int = 0


class PostListResponse(BaseModel):
    """One page of posts plus its navigation block."""

    data: list[PostResponse]
    count: int
    total_pages: int
    pagination: PaginationInfo


class AuthorPostStats(BaseModel):
    """Per-author post counters."""

    total: int
    published: int
    draft: int
