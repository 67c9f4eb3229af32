"""Data access helpers for working with posts."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from inkpress.models.post import Post
from inkpress.models.tag import PostTag
from inkpress.schemas.post import PostQueryParams

__all__ = ["PostPage", "PostRepository"]

logger = logging.getLogger(__name__)

_ORDER_COLUMNS = {
    "created_at": Post.created_at,
    "updated_at": Post.updated_at,
    "published_at": Post.published_at,
    "title": Post.title,
}


@dataclass(frozen=True)
class PostPage:
    """One page of posts with the exact size of the filtered set.

    On failure ``data`` and ``count`` are None and ``error`` holds the cause.
    """

    data: list[Post] | None
    count: int | None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Return True when the read succeeded."""
        return self.error is None


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: uuid.UUID) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def get_by_slug(self, slug: str) -> Post | None:
        """Return a post by slug."""
        return self.session.scalars(select(Post).where(Post.slug == slug)).first()

    def list_posts(self, params: PostQueryParams) -> PostPage:
        """Return a filtered, sorted page of posts and the total match count.

        With a tag filter the read goes through ``post_tags`` inner-joined to
        ``posts``; otherwise ``posts`` is queried directly. The same filter
        set, ordering and offset/limit apply to both shapes.
        """
        stmt = self._base_statement(params)
        stmt = self._apply_filters(stmt, params)

        count_stmt = select(func.count()).select_from(stmt.subquery())

        order_column = _ORDER_COLUMNS[params.order_by]
        ordering = order_column.asc() if params.order_direction == "asc" else order_column.desc()
        page_stmt = (
            stmt.options(selectinload(Post.category))
            .order_by(ordering, Post.id)
            .offset(params.offset)
            .limit(params.page_size)
        )

        try:
            count = self.session.scalar(count_stmt) or 0
            # Pages past the end never reach the page query.
            if params.offset >= count:
                posts: list[Post] = []
            else:
                posts = list(self.session.scalars(page_stmt))
        except SQLAlchemyError as exc:
            logger.error("Failed to list posts with %s: %s", params, exc)
            return PostPage(data=None, count=None, error=exc)

        logger.debug(
            "Listed %d posts (total %d) page=%d tag=%s",
            len(posts),
            count,
            params.page,
            params.tag_id,
        )
        return PostPage(data=posts, count=count)

    def count_by_status(self, author_id: uuid.UUID) -> dict[str, int]:
        """Return the number of posts per status for one author."""
        rows = self.session.execute(
            select(Post.status, func.count())
            .where(Post.author_id == author_id)
            .group_by(Post.status)
        ).all()
        return {status: count for status, count in rows}

    def get_top_post(self) -> Post | None:
        """Return the newest published post flagged as pinned."""
        return self.session.scalars(
            select(Post)
            .options(selectinload(Post.category))
            .where(Post.status == "published", Post.is_top.is_(True))
            .order_by(Post.published_at.desc(), Post.id)
            .limit(1)
        ).first()

    @staticmethod
    def _base_statement(params: PostQueryParams) -> Select[tuple[Post]]:
        if params.tag_id is not None:
            return (
                select(Post)
                .join(PostTag, PostTag.post_id == Post.id)
                .where(PostTag.tag_id == params.tag_id)
            )
        return select(Post)

    @staticmethod
    def _apply_filters(stmt: Select[tuple[Post]], params: PostQueryParams) -> Select[tuple[Post]]:
        if params.status != "all":
            stmt = stmt.where(Post.status == params.status)
        if params.author_id is not None:
            stmt = stmt.where(Post.author_id == params.author_id)
        if params.category_id is not None:
            stmt = stmt.where(Post.category_id == params.category_id)
        if params.search_term:
            stmt = stmt.where(Post.title.ilike(f"%{_escape_like(params.search_term)}%", escape="\\"))
        if params.is_top is not None:
            stmt = stmt.where(Post.is_top.is_(params.is_top))
        return stmt


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
