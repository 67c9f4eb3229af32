# src/inkpress/api/v1/endpoints/admin_categories.py
"""Category management endpoints for the admin console."""

from __future__ import annotations

import uuid
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.orm import Session

from inkpress.api.v1.dependencies import AdminSessionDep, SessionDep
from inkpress.models.category import Category
from inkpress.schemas.category import (
    CategoryCreate,
    CategoryListQuery,
    CategoryListResponse,
    CategoryResponse,
    CategoryStat,
    CategoryUpdate,
)
from inkpress.schemas.common import SlugAvailability
from inkpress.services import categories as category_service
from inkpress.services.errors import ConflictError, NotFoundError

router = APIRouter(prefix="/admin/categories", tags=["admin", "categories"])


def _get_category_or_404(db: Session, category_id: uuid.UUID) -> Category:
    try:
        return category_service.get_category(db, category_id)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    db: SessionDep,
    _: AdminSessionDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    search_term: str | None = Query(None),
    order_by: Literal["name", "slug", "created_at"] = Query("name"),
    order_direction: Literal["asc", "desc"] = Query("asc"),
) -> CategoryListResponse:
    """Return one page of categories for the admin table."""
    query = CategoryListQuery(
        page=page,
        page_size=page_size,
        search_term=search_term,
        order_by=order_by,
        order_direction=order_direction,
    )
    rows, count = category_service.list_categories(db, query)
    return CategoryListResponse(
        data=[CategoryResponse.model_validate(category) for category in rows],
        count=count,
    )


@router.get("/all", response_model=list[CategoryResponse])
async def list_all_categories(db: SessionDep, _: AdminSessionDep) -> list[Category]:
    """Return every category ordered by name."""
    return category_service.list_all_categories(db)


@router.get("/stats", response_model=list[CategoryStat])
async def category_stats(db: SessionDep, _: AdminSessionDep) -> list[CategoryStat]:
    """Return each category with its post count, drafts included."""
    return category_service.get_category_stats(db, published_only=False)


@router.get("/slug-availability", response_model=SlugAvailability)
async def check_slug(
    db: SessionDep,
    _: AdminSessionDep,
    slug: str = Query(..., min_length=1),
    exclude_id: uuid.UUID | None = Query(None),
) -> SlugAvailability:
    """Report whether a category slug is free."""
    available = category_service.is_category_slug_available(db, slug, exclude_id)
    return SlugAvailability(slug=slug, available=available)


@router.get("/by-slug/{slug}", response_model=CategoryResponse)
async def get_category_by_slug(slug: str, db: SessionDep, _: AdminSessionDep) -> Category:
    """Return a category by slug."""
    try:
        return category_service.get_category_by_slug(db, slug)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: uuid.UUID, db: SessionDep, _: AdminSessionDep) -> Category:
    return _get_category_or_404(db, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(data: CategoryCreate, db: SessionDep, _: AdminSessionDep) -> Category:
    """Create a category."""
    try:
        return category_service.create_category(db, data)
    except ConflictError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    data: CategoryUpdate,
    db: SessionDep,
    _: AdminSessionDep,
) -> Category:
    """Apply a partial update to a category."""
    category = _get_category_or_404(db, category_id)
    try:
        return category_service.update_category(db, category, data)
    except ConflictError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: uuid.UUID, db: SessionDep, _: AdminSessionDep) -> None:
    """Delete a category; its posts become uncategorized."""
    category_service.delete_category(db, _get_category_or_404(db, category_id))
