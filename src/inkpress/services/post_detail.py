"""Denormalized single-post reads for the article page and the editor."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

from inkpress.models.post import Post
from inkpress.models.tag import PostTag
from inkpress.repositories.post_repo import PostRepository
from inkpress.schemas.post import AuthorDisplay, CategoryDisplay, PostDetail
from inkpress.schemas.tag import TagSummary
from inkpress.utils.avatar import avatar_or_default, display_username

logger = logging.getLogger(__name__)

UNCATEGORIZED_NAME = "uncategorized"


def load_post_with_relations(db: Session, post_id: uuid.UUID) -> Post | None:
    """Load a post with author, category and tags in one round of queries.

    Author and category are one-to-one joins; tags are a one-to-many
    collection loaded through the association rows.
    """
    stmt = (
        select(Post)
        .options(
            joinedload(Post.author),
            joinedload(Post.category),
            selectinload(Post.tag_links).joinedload(PostTag.tag),
        )
        .where(Post.id == post_id)
    )
    return db.scalars(stmt).unique().first()


def to_post_detail(post: Post) -> PostDetail:
    """Flatten a loaded post into the shape the article page consumes."""
    author = post.author
    username = display_username(author.username, author.email)
    category = (
        CategoryDisplay(id=str(post.category.id), name=post.category.name)
        if post.category is not None
        else CategoryDisplay(id="", name=UNCATEGORIZED_NAME)
    )
    tags = sorted(
        (TagSummary.model_validate(link.tag) for link in post.tag_links),
        key=lambda tag: tag.name,
    )

    return PostDetail(
        id=post.id,
        title=post.title,
        slug=post.slug,
        content=post.content,
        excerpt=post.excerpt,
        featured_image=post.featured_image,
        status=post.status,  # type: ignore[arg-type]
        published_at=post.published_at,
        seo_keywords=post.seo_keywords,
        seo_description=post.seo_description,
        allow_comment=post.allow_comment,
        is_top=post.is_top,
        created_at=post.created_at,
        updated_at=post.updated_at,
        author=AuthorDisplay(
            id=str(author.id),
            username=username,
            avatar_url=avatar_or_default(author.avatar_url),
        ),
        category=category,
        tags=tags,
        # Not tracked anywhere.
        views=0,
        likes=0,
        comments_count=0,
    )


def get_post_detail(
    db: Session,
    post_id: uuid.UUID,
    *,
    published_only: bool = False,
) -> PostDetail | None:
    """Return the denormalized post, or None when it does not exist.

    Args:
        db: Database session.
        post_id: Identifier of the post.
        published_only: Treat drafts as missing (public article page).
    """
    post = load_post_with_relations(db, post_id)
    if post is None or (published_only and not post.is_published):
        logger.info("Post %s not found (published_only=%s)", post_id, published_only)
        return None
    return to_post_detail(post)


def get_post_detail_by_slug(
    db: Session,
    slug: str,
    *,
    published_only: bool = False,
) -> PostDetail | None:
    """Return the denormalized post with ``slug``, or None when missing."""
    post = PostRepository(db).get_by_slug(slug)
    if post is None:
        logger.info("No post with slug %r", slug)
        return None
    return get_post_detail(db, post.id, published_only=published_only)
