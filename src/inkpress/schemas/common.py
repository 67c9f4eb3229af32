"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class PageLink(BaseModel):
    """One numbered link in a pagination bar."""

    number: int
    url: str
    current: bool = False


class PaginationInfo(BaseModel):
    """Navigation block returned alongside every paginated listing."""

    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    page_size: int = Field(..., ge=1)
    has_multiple_pages: bool
    pages: list[PageLink] = Field(default_factory=list)
    previous_url: str | None = None
    next_url: str | None = None


class SlugAvailability(BaseModel):
    """Result of a slug availability check."""

    slug: str
    available: bool


class StatusResponse(BaseModel):
    """Generic acknowledgement payload."""

    status: str
