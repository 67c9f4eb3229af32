# src/inkpress/models/tag.py
"""SQLAlchemy models for tags and the post/tag association."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpress.db.session import Base
from inkpress.db.time import utcnow

if TYPE_CHECKING:
    from .post import Post


class Tag(Base):
    """Free-form label attached to posts through ``post_tags``."""

    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
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

    post_links: Mapped[list[PostTag]] = relationship(
        "PostTag",
        back_populates="tag",
        cascade="all, delete-orphan",
    )


class PostTag(Base):
    """Association row linking a post to a tag. Has no lifecycle of its own."""

    __tablename__ = "post_tags"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    post: Mapped[Post] = relationship("Post", back_populates="tag_links")
    tag: Mapped[Tag] = relationship("Tag", back_populates="post_links")
