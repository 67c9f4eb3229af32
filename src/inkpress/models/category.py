# src/inkpress/models/category.py
"""SQLAlchemy model for post categories."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpress.db.session import Base
from inkpress.db.time import utcnow

if TYPE_CHECKING:
    from .post import Post


class Category(Base):
    """A single-valued grouping of posts.

    Deleting a category leaves its posts in place with a null category.
    """

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
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

    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="category",
        passive_deletes=True,
    )
