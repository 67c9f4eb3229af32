"""Category-related Pydantic schemas."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inkpress.utils.slug import validate_slug


class CategoryCreate(BaseModel):
    """Schema for creating a category from the admin console."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str
    description: str | None = None

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


class CategoryUpdate(BaseModel):
    """Partial update for a category."""

    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = None
    description: str | None = None

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str | None) -> str | None:
        return None if value is None else validate_slug(value)


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    id: uuid.UUID
    name: str
    slug: str
    description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryStat(BaseModel):
    """Category with the number of posts filed under it."""

    id: uuid.UUID
    name: str
    slug: str
    count: int


class CategoryListResponse(BaseModel):
    """One page of categories."""

    data: list[CategoryResponse]
    count: int


class CategoryListQuery(BaseModel):
    """Listing options for the category admin table."""

    page: int = Field(1, ge=1)
    page_size: int = Field(50, ge=1, le=200)
    search_term: str | None = None
    order_by: Literal["name", "slug", "created_at"] = "name"
    order_direction: Literal["asc", "desc"] = "asc"

    model_config = ConfigDict(extra="forbid")
