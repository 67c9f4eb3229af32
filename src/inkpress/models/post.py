# src/inkpress/models/post.py
"""SQLAlchemy model for blog posts."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpress.db.session import Base
from inkpress.db.time import utcnow

if TYPE_CHECKING:
    from .category import Category
    from .tag import PostTag
    from .user import User

POST_STATUS_DRAFT = "draft"
POST_STATUS_PUBLISHED = "published"
POST_STATUSES = (POST_STATUS_DRAFT, POST_STATUS_PUBLISHED)


class Post(Base):
    """A blog article owned by its author.

    A published post always carries ``published_at``; the service layer sets
    it on the first transition to published and never overwrites it.
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    # Editor document, stored as-is.
    content: Mapped[Any] = mapped_column(JSON, nullable=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    featured_image: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=POST_STATUS_DRAFT,
        index=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    seo_keywords: Mapped[str | None] = mapped_column(Text, nullable=True)
    seo_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    allow_comment: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Not unique; feeds pick the newest pinned post.
    is_top: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped[User] = relationship("User", back_populates="posts")
    category: Mapped[Category | None] = relationship("Category", back_populates="posts")
    tag_links: Mapped[list[PostTag]] = relationship(
        "PostTag",
        back_populates="post",
        cascade="all, delete-orphan",
    )

    @property
    def is_published(self) -> bool:
        """Return True when the post is publicly visible."""
        return self.status == POST_STATUS_PUBLISHED
