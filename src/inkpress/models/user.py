# src/inkpress/models/user.py
"""SQLAlchemy models for registered accounts."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpress.db.session import Base
from inkpress.db.time import utcnow

if TYPE_CHECKING:
    from .post import Post

ROLE_ADMIN = "admin"
ROLE_READER = "reader"


class User(Base):
    """An account that can sign in, author posts and hold a role."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    username: Mapped[str | None] = mapped_column(String(64), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default=ROLE_READER)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    # Sign-in is refused until the address is confirmed.
    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    # Embedded in every issued token; bumping it revokes all of them.
    token_version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    posts: Mapped[list[Post]] = relationship("Post", back_populates="author")

    @property
    def is_admin(self) -> bool:
        """Return True when the account holds the admin role."""
        return self.role == ROLE_ADMIN

    @property
    def is_email_verified(self) -> bool:
        """Return True once the email address has been confirmed."""
        return self.email_verified_at is not None
