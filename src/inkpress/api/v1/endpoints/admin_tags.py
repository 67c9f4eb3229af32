# src/inkpress/api/v1/endpoints/admin_tags.py
"""Tag management endpoints for the admin console."""

from __future__ import annotations

import uuid
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.orm import Session

from inkpress.api.v1.dependencies import AdminSessionDep, SessionDep
from inkpress.models.tag import Tag
from inkpress.schemas.common import SlugAvailability
from inkpress.schemas.tag import (
    TagCreate,
    TagListQuery,
    TagListResponse,
    TagResponse,
    TagStat,
    TagUpdate,
)
from inkpress.services import tags as tag_service
from inkpress.services.errors import ConflictError, NotFoundError

router = APIRouter(prefix="/admin/tags", tags=["admin", "tags"])


def _get_tag_or_404(db: Session, tag_id: uuid.UUID) -> Tag:
    try:
        return tag_service.get_tag(db, tag_id)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err


@router.get("", response_model=TagListResponse)
async def list_tags(
    db: SessionDep,
    _: AdminSessionDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    search_term: str | None = Query(None),
    order_by: Literal["name", "slug", "created_at"] = Query("name"),
    order_direction: Literal["asc", "desc"] = Query("asc"),
) -> TagListResponse:
    """Return one page of tags for the admin table."""
    query = TagListQuery(
        page=page,
        page_size=page_size,
        search_term=search_term,
        order_by=order_by,
        order_direction=order_direction,
    )
    rows, count = tag_service.list_tags(db, query)
    return TagListResponse(data=[TagResponse.model_validate(tag) for tag in rows], count=count)


@router.get("/all", response_model=list[TagResponse])
async def list_all_tags(db: SessionDep, _: AdminSessionDep) -> list[Tag]:
    """Return every tag, for pickers."""
    return tag_service.list_all_tags(db)


@router.get("/stats", response_model=list[TagStat])
async def tag_stats(db: SessionDep, _: AdminSessionDep) -> list[TagStat]:
    """Return each tag with the number of posts carrying it."""
    return tag_service.get_tag_stats(db)


@router.get("/slug-availability", response_model=SlugAvailability)
async def check_slug(
    db: SessionDep,
    _: AdminSessionDep,
    slug: str = Query(..., min_length=1),
    exclude_id: uuid.UUID | None = Query(None),
) -> SlugAvailability:
    """Report whether a tag slug is free."""
    return SlugAvailability(slug=slug, available=tag_service.is_tag_slug_available(db, slug, exclude_id))


@router.get("/by-slug/{slug}", response_model=TagResponse)
async def get_tag_by_slug(slug: str, db: SessionDep, _: AdminSessionDep) -> Tag:
    """Return a tag by slug."""
    try:
        return tag_service.get_tag_by_slug(db, slug)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(tag_id: uuid.UUID, db: SessionDep, _: AdminSessionDep) -> Tag:
    """Return a tag by id."""
    return _get_tag_or_404(db, tag_id)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(data: TagCreate, db: SessionDep, _: AdminSessionDep) -> Tag:
    """Create a tag."""
    try:
        return tag_service.create_tag(db, data)
    except ConflictError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err


@router.patch("/{tag_id}", response_model=TagResponse)
async def update_tag(tag_id: uuid.UUID, data: TagUpdate, db: SessionDep, _: AdminSessionDep) -> Tag:
    """Rename a tag or change its slug."""
    tag = _get_tag_or_404(db, tag_id)
    try:
        return tag_service.update_tag(db, tag, data)
    except ConflictError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(tag_id: uuid.UUID, db: SessionDep, _: AdminSessionDep) -> None:
    """Delete a tag and detach it from every post."""
    tag_service.delete_tag(db, _get_tag_or_404(db, tag_id))
