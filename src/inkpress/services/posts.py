"""Service-level helpers for authoring posts."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkpress.db.time import epoch_millis, utcnow
from inkpress.models.category import Category
from inkpress.models.post import POST_STATUS_DRAFT, POST_STATUS_PUBLISHED, Post
from inkpress.models.user import User
from inkpress.repositories.post_repo import PostRepository
from inkpress.schemas.post import AuthorPostStats, PostSubmit
from inkpress.services.errors import NotFoundError, PermissionDeniedError
from inkpress.services.tags import create_tags_from_names, set_post_tags
from inkpress.utils.slug import generate_slug

logger = logging.getLogger(__name__)


def is_slug_available(db: Session, slug: str, exclude_id: uuid.UUID | None = None) -> bool:
    """Return True when no other post uses ``slug``."""
    stmt = select(Post.id).where(Post.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Post.id != exclude_id)
    return db.scalars(stmt).first() is None


def unique_slug_for(db: Session, title: str) -> str:
    """Return a free slug for ``title``.

    When the plain slug is taken a millisecond timestamp is appended.
    """
    slug = generate_slug(title)
    if is_slug_available(db, slug):
        return slug
    suffixed = f"{slug}-{epoch_millis()}"
    logger.info("Slug %r taken, using %r", slug, suffixed)
    return suffixed


def resolve_published_at(
    status: str,
    current: datetime | None,
    *,
    now: datetime | None = None,
) -> datetime | None:
    """Return the ``published_at`` a post should carry after a save.

    Publishing stamps the time only when none is recorded yet; an existing
    value is never overwritten, and unpublishing keeps it.
    """
    if status == POST_STATUS_PUBLISHED and current is None:
        return now or utcnow()
    return current


def ensure_can_edit(user: User, post: Post) -> None:
    """Raise unless ``user`` authored ``post`` or is an admin."""
    if post.author_id != user.id and not user.is_admin:
        raise PermissionDeniedError("You can only modify your own posts")


def _require_category(db: Session, category_id: uuid.UUID) -> None:
    if db.get(Category, category_id) is None:
        raise NotFoundError("Category not found")


def apply_post_tags(db: Session, post_id: uuid.UUID, tag_names: list[str]) -> None:
    """Get-or-create tags by name and make them the post's full tag set."""
    tags = create_tags_from_names(db, tag_names)
    set_post_tags(db, post_id, [tag.id for tag in tags])


def create_post(db: Session, author: User, data: PostSubmit) -> Post:
    """Create a post, its missing tags and its tag associations.

    Raises:
        NotFoundError: If the category does not exist.
    """
    _require_category(db, data.category_id)

    post = Post(
        title=data.title,
        slug=unique_slug_for(db, data.title),
        content=data.content,
        excerpt=data.excerpt,
        featured_image=data.featured_image,
        status=data.status,
        author_id=author.id,
        category_id=data.category_id,
        published_at=resolve_published_at(data.status, None),
        seo_keywords=data.seo_keywords,
        seo_description=data.seo_description,
        allow_comment=data.allow_comment,
        is_top=data.is_top,
    )
    db.add(post)
    db.flush()

    apply_post_tags(db, post.id, data.tags)
    db.commit()
    db.refresh(post)
    logger.info("Created post %s (%s) status=%s", post.id, post.slug, post.status)
    return post


def update_post(db: Session, post: Post, data: PostSubmit) -> Post:
    """Overwrite a post with the editor form and replace its tag set.

    The slug is kept so existing links stay valid.
    """
    _require_category(db, data.category_id)

    post.title = data.title
    post.content = data.content
    post.excerpt = data.excerpt
    post.featured_image = data.featured_image
    post.status = data.status
    post.category_id = data.category_id
    post.seo_keywords = data.seo_keywords
    post.seo_description = data.seo_description
    post.allow_comment = data.allow_comment
    post.is_top = data.is_top
    post.published_at = resolve_published_at(data.status, post.published_at)
    db.flush()

    apply_post_tags(db, post.id, data.tags)
    db.commit()
    db.refresh(post)
    logger.info("Updated post %s status=%s", post.id, post.status)
    return post


def update_post_status(db: Session, post: Post, status: str) -> Post:
    """Switch a post between draft and published."""
    post.status = status
    post.published_at = resolve_published_at(status, post.published_at)
    db.commit()
    db.refresh(post)
    logger.info("Post %s is now %s", post.id, status)
    return post


def delete_post(db: Session, post: Post) -> None:
    """Hard-delete a post; its tag associations are removed with it."""
    post_id = post.id
    db.delete(post)
    db.commit()
    logger.info("Deleted post %s", post_id)


def get_author_post_stats(db: Session, author_id: uuid.UUID) -> AuthorPostStats:
    """Return total, published and draft counts for one author."""
    counts = PostRepository(db).count_by_status(author_id)
    published = counts.get(POST_STATUS_PUBLISHED, 0)
    draft = counts.get(POST_STATUS_DRAFT, 0)
    return AuthorPostStats(total=published + draft, published=published, draft=draft)
