# src/inkpress/api/v1/endpoints/blog.py
"""Public blog feeds and article pages."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from inkpress.api.v1.dependencies import SessionDep
from inkpress.repositories.post_repo import PostPage, PostRepository
from inkpress.schemas.category import CategoryResponse
from inkpress.schemas.feed import CategoryFeedResponse, HomeFeedResponse, TagFeedResponse
from inkpress.schemas.post import PostDetail, PostQueryParams, PostResponse
from inkpress.schemas.tag import TagResponse
from inkpress.services.categories import get_category, get_category_stats
from inkpress.services.errors import NotFoundError
from inkpress.services.pagination import build_pagination, parse_page, total_pages
from inkpress.services.post_detail import get_post_detail, get_post_detail_by_slug
from inkpress.services.post_query import grid_feed_query, site_feed_query
from inkpress.services.tags import get_tag, get_tag_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blog", tags=["blog"])

HOME_PATH = "/blog"


def _load_failed(exc: Exception | None = None) -> HTTPException:
    if exc is not None:
        logger.error("Feed read failed: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Failed to load posts",
    )


def _clean_search(search: str | None) -> str | None:
    if search is None:
        return None
    return search.strip() or None


def _read_page(repo: PostRepository, params: PostQueryParams) -> tuple[list[PostResponse], int]:
    result: PostPage = repo.list_posts(params)
    if not result.ok or result.data is None or result.count is None:
        raise _load_failed()
    return [PostResponse.model_validate(post) for post in result.data], result.count


@router.get("/", response_model=HomeFeedResponse)
async def home_feed(
    db: SessionDep,
    search: str | None = Query(None, max_length=200),
    page: str | None = Query(None),
) -> HomeFeedResponse:
    """Return the home page: a post page, sidebar stats and the pinned post.

    The pinned post is only part of the first page of an unfiltered feed.
    Every read must succeed or the whole response fails.
    """
    current_page = parse_page(page)
    search_term = _clean_search(search)
    params = site_feed_query(current_page, search_term)
    repo = PostRepository(db)

    posts, count = _read_page(repo, params)
    try:
        categories = get_category_stats(db)
        tags = get_tag_stats(db)
        top = repo.get_top_post() if current_page == 1 and search_term is None else None
    except SQLAlchemyError as exc:
        raise _load_failed(exc) from exc

    return HomeFeedResponse(
        posts=posts,
        total=count,
        total_pages=total_pages(count, params.page_size),
        pagination=build_pagination(
            HOME_PATH,
            current_page=current_page,
            count=count,
            page_size=params.page_size,
            search=search_term,
        ),
        search=search_term,
        categories=categories,
        tags=tags,
        top_post=PostResponse.model_validate(top) if top is not None else None,
    )


@router.get("/{post_id}", response_model=PostDetail)
async def read_post(post_id: uuid.UUID, db: SessionDep) -> PostDetail:
    """Return a published post with author, category and tags."""
    try:
        detail = get_post_detail(db, post_id, published_only=True)
    except SQLAlchemyError as exc:
        raise _load_failed(exc) from exc
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return detail


@router.get("/slug/{slug}", response_model=PostDetail)
async def read_post_by_slug(slug: str, db: SessionDep) -> PostDetail:
    """Return a published post looked up by its slug."""
    try:
        detail = get_post_detail_by_slug(db, slug, published_only=True)
    except SQLAlchemyError as exc:
        raise _load_failed(exc) from exc
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return detail


@router.get("/category/{category_id}", response_model=CategoryFeedResponse)
async def category_feed(
    category_id: uuid.UUID,
    db: SessionDep,
    search: str | None = Query(None, max_length=200),
    page: str | None = Query(None),
) -> CategoryFeedResponse:
    """Return a category header and the grid of its published posts."""
    try:
        category = get_category(db, category_id)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err

    current_page = parse_page(page)
    search_term = _clean_search(search)
    params = grid_feed_query(current_page, search_term, category_id=category.id)
    posts, count = _read_page(PostRepository(db), params)

    return CategoryFeedResponse(
        category=CategoryResponse.model_validate(category),
        posts=posts,
        total=count,
        total_pages=total_pages(count, params.page_size),
        pagination=build_pagination(
            f"{HOME_PATH}/category/{category.id}",
            current_page=current_page,
            count=count,
            page_size=params.page_size,
            search=search_term,
        ),
        search=search_term,
    )


@router.get("/tag/{tag_id}", response_model=TagFeedResponse)
async def tag_feed(
    tag_id: uuid.UUID,
    db: SessionDep,
    search: str | None = Query(None, max_length=200),
    page: str | None = Query(None),
) -> TagFeedResponse:
    """Return a tag header and the grid of published posts carrying it."""
    try:
        tag = get_tag(db, tag_id)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err

    current_page = parse_page(page)
    search_term = _clean_search(search)
    params = grid_feed_query(current_page, search_term, tag_id=tag.id)
    posts, count = _read_page(PostRepository(db), params)

    return TagFeedResponse(
        tag=TagResponse.model_validate(tag),
        posts=posts,
        total=count,
        total_pages=total_pages(count, params.page_size),
        pagination=build_pagination(
            f"{HOME_PATH}/tag/{tag.id}",
            current_page=current_page,
            count=count,
            page_size=params.page_size,
            search=search_term,
        ),
        search=search_term,
    )
