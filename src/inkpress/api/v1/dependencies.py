"""Shared API dependencies for authentication and common functionality."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inkpress.db.session import get_db
from inkpress.models import User
from inkpress.models.user import ROLE_ADMIN
from inkpress.services.auth import AuthSession, resolve_session
from inkpress.services.errors import AuthenticationError
from inkpress.services.mailer import Mailer, get_mailer
from inkpress.services.storage import MediaStorage, get_storage

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]
StorageDep = Annotated[MediaStorage, Depends(get_storage)]


def get_auth_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> AuthSession:
    """Resolve the bearer token into the caller's session.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        The session of the authenticated user

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired or revoked
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return resolve_session(db, credentials.credentials)
    except AuthenticationError as err:
        logger.info("Rejected bearer token: %s", err)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err


AuthSessionDep = Annotated[AuthSession, Depends(get_auth_session)]


def get_current_user(session: AuthSessionDep) -> User:
    """Return the user behind the current session."""
    return session.user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_role(role: str) -> Callable[[AuthSession], AuthSession]:
    """Build a dependency that only lets users with ``role`` through.

    Args:
        role: Role name the caller must hold

    Returns:
        Dependency callable raising 403 on a role mismatch
    """

    def _check(session: AuthSessionDep) -> AuthSession:
        if not session.has_role(role):
            logger.warning("User %s lacks role %s", session.user.id, role)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return session

    return _check


AdminSessionDep = Annotated[AuthSession, Depends(require_role(ROLE_ADMIN))]
