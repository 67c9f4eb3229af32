"""Tag management and post/tag association handling."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from inkpress.models.tag import PostTag, Tag
from inkpress.schemas.tag import TagCreate, TagListQuery, TagStat, TagUpdate
from inkpress.services.errors import ConflictError, NotFoundError
from inkpress.utils.slug import SLUG_MAX_LENGTH, tag_slug

logger = logging.getLogger(__name__)

_ORDER_COLUMNS = {"name": Tag.name, "slug": Tag.slug, "created_at": Tag.created_at}


def list_tags(db: Session, query: TagListQuery) -> tuple[list[Tag], int]:
    """Return one page of tags and the total number of matches."""
    stmt = select(Tag)
    if query.search_term and query.search_term.strip():
        stmt = stmt.where(Tag.name.ilike(f"%{query.search_term.strip()}%"))

    count = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
    offset = (query.page - 1) * query.page_size
    if offset >= count:
        return [], count
    column = _ORDER_COLUMNS[query.order_by]
    stmt = (
        stmt.order_by(column.asc() if query.order_direction == "asc" else column.desc())
        .offset(offset)
        .limit(query.page_size)
    )
    return list(db.scalars(stmt)), count


def list_all_tags(db: Session) -> list[Tag]:
    """Return every tag ordered by name."""
    return list(db.scalars(select(Tag).order_by(Tag.name)))


def get_tag(db: Session, tag_id: uuid.UUID) -> Tag:
    """Return a tag or raise :class:`NotFoundError`."""
    tag = db.get(Tag, tag_id)
    if tag is None:
        raise NotFoundError("Tag not found")
    return tag


def get_tag_by_slug(db: Session, slug: str) -> Tag:
    """Return a tag by slug or raise :class:`NotFoundError`."""
    tag = db.scalars(select(Tag).where(Tag.slug == slug)).first()
    if tag is None:
        raise NotFoundError("Tag not found")
    return tag


def is_tag_slug_available(db: Session, slug: str, exclude_id: uuid.UUID | None = None) -> bool:
    """Return True when no other tag uses ``slug``."""
    stmt = select(Tag.id).where(Tag.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Tag.id != exclude_id)
    return db.scalars(stmt).first() is None


def _ensure_unique(db: Session, name: str | None, slug: str | None, exclude_id: uuid.UUID | None) -> None:
    if slug is not None and not is_tag_slug_available(db, slug, exclude_id):
        raise ConflictError("Tag slug already exists")
    if name is not None:
        stmt = select(Tag.id).where(Tag.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Tag.id != exclude_id)
        if db.scalars(stmt).first() is not None:
            raise ConflictError("Tag name already exists")


def create_tag(db: Session, data: TagCreate) -> Tag:
    """Create a tag from the admin form."""
    _ensure_unique(db, data.name, data.slug, None)
    tag = Tag(name=data.name, slug=data.slug)
    db.add(tag)
    db.commit()
    db.refresh(tag)
    logger.info("Created tag %s (%s)", tag.id, tag.slug)
    return tag


def update_tag(db: Session, tag: Tag, data: TagUpdate) -> Tag:
    """Apply a partial update to ``tag``."""
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    _ensure_unique(db, changes.get("name"), changes.get("slug"), tag.id)
    for field, value in changes.items():
        setattr(tag, field, value)
    db.commit()
    db.refresh(tag)
    logger.info("Updated tag %s", tag.id)
    return tag


def delete_tag(db: Session, tag: Tag) -> None:
    """Delete a tag; its associations go with it."""
    db.delete(tag)
    db.commit()
    logger.info("Deleted tag %s", tag.id)


def _clean_names(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    cleaned: list[str] = []
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen.add(name)
            cleaned.append(name)
    return cleaned


def _unique_tag_slug(db: Session, name: str, taken: set[str]) -> str:
    base = tag_slug(name) or "tag"
    slug = base
    suffix = 2
    while slug in taken or not is_tag_slug_available(db, slug):
        tail = f"-{suffix}"
        slug = base[: SLUG_MAX_LENGTH - len(tail)].rstrip("-") + tail
        suffix += 1
    taken.add(slug)
    return slug


def create_tags_from_names(db: Session, names: Sequence[str]) -> list[Tag]:
    """Get-or-create tags by exact name.

    Blank names are dropped and duplicates collapsed. Existing tags are
    reused; only unmatched names are inserted. The result holds one tag per
    distinct submitted name, existing ones first.
    """
    wanted = _clean_names(names)
    if not wanted:
        return []

    existing = list(db.scalars(select(Tag).where(Tag.name.in_(wanted))))
    existing_names = {tag.name for tag in existing}
    missing = [name for name in wanted if name not in existing_names]

    created: list[Tag] = []
    taken: set[str] = set()
    for name in missing:
        tag = Tag(name=name, slug=_unique_tag_slug(db, name, taken))
        db.add(tag)
        created.append(tag)
    if created:
        db.flush()
        logger.info("Created %d new tags: %s", len(created), [tag.name for tag in created])

    return existing + created


def set_post_tags(db: Session, post_id: uuid.UUID, tag_ids: Sequence[uuid.UUID]) -> None:
    """Replace the whole tag set of a post.

    All current associations are removed first, then one row is inserted per
    distinct tag id. An empty sequence leaves the post untagged.
    """
    db.execute(delete(PostTag).where(PostTag.post_id == post_id))
    for tag_id in dict.fromkeys(tag_ids):
        db.add(PostTag(post_id=post_id, tag_id=tag_id))
    db.flush()
    # Drop stale collection state loaded before the bulk delete.
    db.expire_all()
    logger.info("Set %d tags on post %s", len(set(tag_ids)), post_id)


def get_tags_by_post_id(db: Session, post_id: uuid.UUID) -> list[Tag]:
    """Return the tags attached to a post, ordered by name."""
    stmt = (
        select(Tag)
        .join(PostTag, PostTag.tag_id == Tag.id)
        .where(PostTag.post_id == post_id)
        .order_by(Tag.name)
    )
    return list(db.scalars(stmt))


def get_tag_stats(db: Session) -> list[TagStat]:
    """Return every tag with the number of posts carrying it."""
    stmt = (
        select(Tag.id, Tag.name, Tag.slug, func.count(PostTag.post_id))
        .outerjoin(PostTag, PostTag.tag_id == Tag.id)
        .group_by(Tag.id, Tag.name, Tag.slug)
        .order_by(Tag.name)
    )
    return [
        TagStat(id=tag_id, name=name, slug=slug, count=count)
        for tag_id, name, slug, count in db.execute(stmt)
    ]
