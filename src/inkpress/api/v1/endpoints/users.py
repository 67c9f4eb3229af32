# src/inkpress/api/v1/endpoints/users.py
"""Profile endpoints for signed-in users and public author pages."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException, status

from inkpress.api.v1.dependencies import CurrentUserDep, SessionDep
from inkpress.models import User
from inkpress.schemas.post import AuthorPostStats
from inkpress.schemas.user import ProfileUpdateRequest, PublicProfile, UserResponse
from inkpress.services import users as user_service
from inkpress.services.errors import NotFoundError
from inkpress.services.posts import get_author_post_stats

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep) -> User:
    """Return the account of the signed-in user."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_me(
    request: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Update the signed-in user's username or avatar.

    Args:
        request: Fields to change; omitted fields stay as they are
        current_user: The authenticated user
        db: Database session

    Returns:
        The updated account
    """
    return user_service.update_profile(db, current_user, request)


@router.get("/me/stats", response_model=AuthorPostStats)
async def read_my_stats(current_user: CurrentUserDep, db: SessionDep) -> AuthorPostStats:
    """Return post counters of the signed-in user."""
    return get_author_post_stats(db, current_user.id)


@router.get("/{user_id}", response_model=PublicProfile)
async def read_profile(user_id: uuid.UUID, db: SessionDep) -> PublicProfile:
    """Return the public author view of a user."""
    try:
        user = user_service.get_user(db, user_id)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    return user_service.public_profile(user)
