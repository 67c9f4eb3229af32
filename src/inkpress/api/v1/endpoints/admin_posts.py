# src/inkpress/api/v1/endpoints/admin_posts.py
"""Post management endpoints for the admin console."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inkpress.api.v1.dependencies import AdminSessionDep, SessionDep
from inkpress.models.post import Post
from inkpress.repositories.post_repo import PostRepository
from inkpress.schemas.common import SlugAvailability
from inkpress.schemas.post import (
    AuthorPostStats,
    PostDetail,
    PostListResponse,
    PostQueryParams,
    PostResponse,
    PostStatusUpdate,
    PostSubmit,
)
from inkpress.services import posts as post_service
from inkpress.services.errors import NotFoundError, PermissionDeniedError
from inkpress.services.pagination import build_pagination, total_pages
from inkpress.services.post_detail import get_post_detail
from inkpress.services.post_query import normalize_post_query

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/posts", tags=["admin", "posts"])

LIST_PATH = "/admin/posts"


def _save_failed(db: Session, exc: SQLAlchemyError) -> HTTPException:
    db.rollback()
    logger.error("Failed to save post: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Failed to save post",
    )


def _get_post_or_404(db: Session, post_id: uuid.UUID) -> Post:
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def _detail_or_404(db: Session, post_id: uuid.UUID) -> PostDetail:
    detail = get_post_detail(db, post_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return detail


@router.get("", response_model=PostListResponse)
async def list_posts(request: Request, db: SessionDep, _: AdminSessionDep) -> PostListResponse:
    """List posts with any combination of filters, sorting and paging.

    Query keys follow :class:`PostQueryParams` in snake_case or camelCase;
    unknown keys are rejected with 422.
    """
    try:
        params: PostQueryParams = normalize_post_query(dict(request.query_params))
    except ValidationError as err:
        raise RequestValidationError(err.errors()) from err

    result = PostRepository(db).list_posts(params)
    if not result.ok or result.data is None or result.count is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to load posts",
        )

    return PostListResponse(
        data=[PostResponse.model_validate(post) for post in result.data],
        count=result.count,
        total_pages=total_pages(result.count, params.page_size),
        pagination=build_pagination(
            LIST_PATH,
            current_page=params.page,
            count=result.count,
            page_size=params.page_size,
            search=params.search_term,
        ),
    )


@router.get("/stats", response_model=AuthorPostStats)
async def post_stats(
    db: SessionDep,
    session: AdminSessionDep,
    author_id: uuid.UUID | None = Query(None),
) -> AuthorPostStats:
    """Return post counters for an author (the caller by default)."""
    return post_service.get_author_post_stats(db, author_id or session.user.id)


@router.get("/slug-availability", response_model=SlugAvailability)
async def check_slug(
    db: SessionDep,
    _: AdminSessionDep,
    slug: str = Query(..., min_length=1),
    exclude_id: uuid.UUID | None = Query(None),
) -> SlugAvailability:
    """Report whether a post slug is free."""
    return SlugAvailability(slug=slug, available=post_service.is_slug_available(db, slug, exclude_id))


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(post_id: uuid.UUID, db: SessionDep, _: AdminSessionDep) -> PostDetail:
    """Return any post, drafts included, for the editor."""
    return _detail_or_404(db, post_id)


@router.post("", response_model=PostDetail, status_code=status.HTTP_201_CREATED)
async def create_post(submission: PostSubmit, db: SessionDep, session: AdminSessionDep) -> PostDetail:
    """Create a post authored by the caller, including its tags."""
    try:
        post = post_service.create_post(db, session.user, submission)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except SQLAlchemyError as exc:
        raise _save_failed(db, exc) from exc
    return _detail_or_404(db, post.id)


@router.put("/{post_id}", response_model=PostDetail)
async def update_post(
    post_id: uuid.UUID,
    submission: PostSubmit,
    db: SessionDep,
    session: AdminSessionDep,
) -> PostDetail:
    """Overwrite a post from the editor and replace its tag set."""
    post = _get_post_or_404(db, post_id)
    try:
        post_service.ensure_can_edit(session.user, post)
        post_service.update_post(db, post, submission)
    except PermissionDeniedError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except SQLAlchemyError as exc:
        raise _save_failed(db, exc) from exc
    return _detail_or_404(db, post_id)


@router.patch("/{post_id}/status", response_model=PostResponse)
async def update_post_status(
    post_id: uuid.UUID,
    request: PostStatusUpdate,
    db: SessionDep,
    session: AdminSessionDep,
) -> Post:
    """Publish or unpublish a post."""
    post = _get_post_or_404(db, post_id)
    try:
        post_service.ensure_can_edit(session.user, post)
        return post_service.update_post_status(db, post, request.status)
    except PermissionDeniedError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err
    except SQLAlchemyError as exc:
        raise _save_failed(db, exc) from exc


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: uuid.UUID, db: SessionDep, session: AdminSessionDep) -> None:
    """Hard-delete a post and its tag associations."""
    post = _get_post_or_404(db, post_id)
    try:
        post_service.ensure_can_edit(session.user, post)
        post_service.delete_post(db, post)
    except PermissionDeniedError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err
    except SQLAlchemyError as exc:
        raise _save_failed(db, exc) from exc
