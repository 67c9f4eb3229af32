"""Tag-related Pydantic schemas."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inkpress.utils.slug import validate_slug


class TagCreate(BaseModel):
    """Schema for creating a tag explicitly."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be empty")
        return value

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str) -> str:
        return validate_slug(value)


class TagUpdate(BaseModel):
    """Partial update for a tag."""

    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = None

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str | None) -> str | None:
        return None if value is None else validate_slug(value)


class TagResponse(BaseModel):
    """Schema for tag information returned by the API."""

    id: uuid.UUID
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TagSummary(BaseModel):
    """Compact tag reference embedded in post payloads."""

    id: uuid.UUID
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class TagStat(BaseModel):
    """Tag with the number of posts carrying it."""

    id: uuid.UUID
    name: str
    slug: str
    count: int


class TagListResponse(BaseModel):
    """One page of tags."""

    data: list[TagResponse]
    count: int


class TagListQuery(BaseModel):
    """Listing options for the tag admin table."""

    page: int = Field(1, ge=1)
    page_size: int = Field(50, ge=1, le=200)
    search_term: str | None = None
    order_by: Literal["name", "slug", "created_at"] = "name"
    order_direction: Literal["asc", "desc"] = "asc"

    model_config = ConfigDict(extra="forbid")
