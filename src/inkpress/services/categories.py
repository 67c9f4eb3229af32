"""Category management."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from inkpress.models.category import Category
from inkpress.models.post import Post
from inkpress.schemas.category import CategoryCreate, CategoryListQuery, CategoryStat, CategoryUpdate
from inkpress.services.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

_ORDER_COLUMNS = {"name": Category.name, "slug": Category.slug, "created_at": Category.created_at}


def list_categories(db: Session, query: CategoryListQuery) -> tuple[list[Category], int]:
    """Return one page of categories and the total number of matches."""
    stmt = select(Category)
    if query.search_term and query.search_term.strip():
        stmt = stmt.where(Category.name.ilike(f"%{query.search_term.strip()}%"))

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


def list_all_categories(db: Session) -> list[Category]:
    """Return every category ordered by name."""
    return list(db.scalars(select(Category).order_by(Category.name)))


def get_category(db: Session, category_id: uuid.UUID) -> Category:
    """Return a category or raise :class:`NotFoundError`."""
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def get_category_by_slug(db: Session, slug: str) -> Category:
    """Return a category by slug or raise :class:`NotFoundError`."""
    category = db.scalars(select(Category).where(Category.slug == slug)).first()
    if category is None:
        raise NotFoundError("Category not found")
    return category


def is_category_slug_available(
    db: Session,
    slug: str,
    exclude_id: uuid.UUID | None = None,
) -> bool:
    """Return True when no other category uses ``slug``."""
    stmt = select(Category.id).where(Category.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)
    return db.scalars(stmt).first() is None


def create_category(db: Session, data: CategoryCreate) -> Category:
    """Create a category from the admin form."""
    if not is_category_slug_available(db, data.slug):
        raise ConflictError("Category slug already exists")
    category = Category(name=data.name, slug=data.slug, description=data.description)
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Created category %s (%s)", category.id, category.slug)
    return category


def update_category(db: Session, category: Category, data: CategoryUpdate) -> Category:
    """Apply a partial update to ``category``."""
    changes = data.model_dump(exclude_unset=True)
    slug = changes.get("slug")
    if slug is not None and not is_category_slug_available(db, slug, category.id):
        raise ConflictError("Category slug already exists")
    for field, value in changes.items():
        if field in {"name", "slug"} and value is None:
            continue
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    logger.info("Updated category %s", category.id)
    return category


def delete_category(db: Session, category: Category) -> None:
    """Delete a category; its posts stay and become uncategorized."""
    for post in category.posts:
        post.category_id = None
    db.delete(category)
    db.commit()
    logger.info("Deleted category %s", category.id)


def get_category_stats(db: Session, *, published_only: bool = True) -> list[CategoryStat]:
    """Return every category with its post count, ordered by name."""
    join_on = Post.category_id == Category.id
    if published_only:
        join_on = join_on & (Post.status == "published")
    stmt = (
        select(Category.id, Category.name, Category.slug, func.count(Post.id))
        .outerjoin(Post, join_on)
        .group_by(Category.id, Category.name, Category.slug)
        .order_by(Category.name)
    )
    return [
        CategoryStat(id=category_id, name=name, slug=slug, count=count)
        for category_id, name, slug, count in db.execute(stmt)
    ]
