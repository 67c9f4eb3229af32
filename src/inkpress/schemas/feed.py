"""Schemas for the public blog feeds."""
from __future__ import annotations

from pydantic import BaseModel

from inkpress.schemas.category import CategoryResponse, CategoryStat
from inkpress.schemas.common import PaginationInfo
from inkpress.schemas.post import PostResponse
from inkpress.schemas.tag import TagResponse, TagStat


class HomeFeedResponse(BaseModel):
    """Everything the home page renders in one payload."""

    posts: list[PostResponse]
    total: int
    total_pages: int
    pagination: PaginationInfo
    search: str | None
    categories: list[CategoryStat]
    tags: list[TagStat]
    top_post: PostResponse | None


class CategoryFeedResponse(BaseModel):
    """A category header plus its post grid."""

    category: CategoryResponse
    posts: list[PostResponse]
    total: int
    total_pages: int
    pagination: PaginationInfo
    search: str | None


class TagFeedResponse(BaseModel):
    """A tag header plus its post grid."""

    tag: TagResponse
    posts: list[PostResponse]
    total: int
    total_pages: int
    pagination: PaginationInfo
    search: str | None
