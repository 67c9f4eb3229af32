"""User lookups and profile updates."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from inkpress.models.user import User
from inkpress.schemas.user import ProfileUpdateRequest, PublicProfile
from inkpress.services.errors import NotFoundError
from inkpress.utils.avatar import avatar_or_default, display_username

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Return the canonical stored form of an email address."""
    return email.strip().lower()


def get_user(db: Session, user_id: uuid.UUID) -> User:
    """Return a user or raise :class:`NotFoundError`."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Return the user registered with ``email``, if any."""
    return db.scalars(
        select(User).where(func.lower(User.email) == normalize_email(email))
    ).first()


def get_user_role(db: Session, user_id: uuid.UUID) -> str | None:
    """Return the role of a user, or None if the user is unknown."""
    return db.scalar(select(User.role).where(User.id == user_id))


def update_profile(db: Session, user: User, data: ProfileUpdateRequest) -> User:
    """Apply username/avatar changes to ``user``."""
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(user, field, value or None)
    db.commit()
    db.refresh(user)
    logger.info("Updated profile of user %s", user.id)
    return user


def public_profile(user: User) -> PublicProfile:
    """Return the author view of ``user`` with display fallbacks applied."""
    return PublicProfile(
        id=user.id,
        username=display_username(user.username, user.email),
        avatar_url=avatar_or_default(user.avatar_url),
    )
