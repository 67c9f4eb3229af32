"""Email/password authentication, verification and session handling."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import urlencode

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkpress.core.security import (
    TOKEN_ACCESS,
    TOKEN_REFRESH,
    TOKEN_RESET_PASSWORD,
    TOKEN_VERIFY_EMAIL,
    TokenError,
    create_token,
    decode_token,
    hash_password,
    verify_password,
)
from inkpress.core.settings import settings
from inkpress.db.time import utcnow
from inkpress.models.user import ROLE_ADMIN, ROLE_READER, User
from inkpress.schemas.user import TokenPair
from inkpress.services.errors import (
    AuthenticationError,
    ConflictError,
    EmailNotVerifiedError,
)
from inkpress.services.mailer import Mailer, OutgoingMessage
from inkpress.services.users import get_user_by_email, normalize_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """The authenticated identity behind one request.

    Built fresh for every protected call; nothing about it is cached
    between requests.
    """

    user: User
    expires_at: datetime

    @property
    def is_valid(self) -> bool:
        """Return True while the access token has not expired."""
        return datetime.now(UTC) < self.expires_at

    def has_role(self, role: str) -> bool:
        """Return True when the user holds ``role``."""
        return self.user.role == role


def _link(path: str, token: str) -> str:
    return f"{settings.public_base_url}{path}?{urlencode({'token': token})}"


def send_verification_email(user: User, mailer: Mailer) -> None:
    """Email ``user`` a link that confirms their address."""
    token, _ = create_token(user.id, TOKEN_VERIFY_EMAIL, version=user.token_version)
    mailer.send(
        OutgoingMessage(
            to=user.email,
            subject=f"Confirm your {settings.app_name} account",
            body=f"Open this link to confirm your email address:\n{_link('/auth/verify', token)}",
        )
    )
    logger.info("Sent verification email to user %s", user.id)


def register(db: Session, email: str, password: str, mailer: Mailer) -> User:
    """Create an unverified account and send its verification link.

    The configured admin email is granted the admin role; everyone else
    starts as a reader.

    Raises:
        ConflictError: If the email is already registered.
    """
    email = normalize_email(email)
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email already registered")

    role = ROLE_ADMIN if settings.admin_email and normalize_email(settings.admin_email) == email else ROLE_READER
    user = User(email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Email already registered") from err
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, role)

    send_verification_email(user, mailer)
    return user


def verify_email(db: Session, token: str) -> User:
    """Mark the address behind a verification token as confirmed.

    A verification link works once: confirming bumps the token version, so
    the same link cannot be replayed to sign in again.

    Raises:
        AuthenticationError: If the token is invalid, already used or the
            user is gone.
    """
    user = _user_for_token(db, token, TOKEN_VERIFY_EMAIL)
    if user.email_verified_at is not None:
        raise AuthenticationError("Email already confirmed")
    user.email_verified_at = utcnow()
    user.token_version += 1
    db.commit()
    db.refresh(user)
    logger.info("Verified email of user %s", user.id)
    return user


def resend_verification(db: Session, email: str, mailer: Mailer) -> None:
    """Send a new verification link if the account exists and is unverified.

    Unknown or already verified addresses are ignored so the endpoint does not
    reveal which emails are registered.
    """
    user = get_user_by_email(db, email)
    if user is None or user.is_email_verified:
        logger.info("Skipping verification resend for %s", normalize_email(email))
        return
    send_verification_email(user, mailer)


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for a valid email/password pair.

    Raises:
        AuthenticationError: On unknown email or wrong password.
        EmailNotVerifiedError: When the address has not been confirmed.
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Rejected sign-in for %s", normalize_email(email))
        raise AuthenticationError("Invalid email or password")
    if not user.is_email_verified:
        raise EmailNotVerifiedError("Email not confirmed")
    return user


def issue_tokens(user: User) -> TokenPair:
    """Issue a fresh access/refresh token pair for ``user``."""
    access_token, expires_at = create_token(user.id, TOKEN_ACCESS, version=user.token_version)
    refresh_token, _ = create_token(user.id, TOKEN_REFRESH, version=user.token_version)
    return TokenPair(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_at=expires_at,
    )


def refresh_tokens(db: Session, refresh_token: str) -> TokenPair:
    """Exchange a valid refresh token for a new token pair.

    Raises:
        AuthenticationError: If the token is invalid, expired or revoked.
    """
    user = _user_for_token(db, refresh_token, TOKEN_REFRESH)
    return issue_tokens(user)


def logout(db: Session, user: User) -> None:
    """Revoke every token issued to ``user`` so far."""
    user.token_version += 1
    db.commit()
    logger.info("Signed out user %s", user.id)


def request_password_reset(db: Session, email: str, mailer: Mailer) -> None:
    """Email a reset link if the address is registered; silent otherwise."""
    user = get_user_by_email(db, email)
    if user is None:
        logger.info("Password reset requested for unknown email")
        return
    token, _ = create_token(user.id, TOKEN_RESET_PASSWORD, version=user.token_version)
    mailer.send(
        OutgoingMessage(
            to=user.email,
            subject=f"Reset your {settings.app_name} password",
            body=f"Open this link to choose a new password:\n{_link('/auth/reset-password', token)}",
        )
    )
    logger.info("Sent password reset email to user %s", user.id)


def reset_password(db: Session, token: str, new_password: str) -> User:
    """Set a new password and revoke all outstanding tokens.

    A reset token works once: the version bump invalidates it.

    Raises:
        AuthenticationError: If the token is invalid, expired or already used.
    """
    user = _user_for_token(db, token, TOKEN_RESET_PASSWORD)
    user.password_hash = hash_password(new_password)
    user.token_version += 1
    # Following an emailed link proves ownership of the address.
    if user.email_verified_at is None:
        user.email_verified_at = utcnow()
    db.commit()
    db.refresh(user)
    logger.info("Reset password of user %s", user.id)
    return user


def resolve_session(db: Session, access_token: str) -> AuthSession:
    """Turn a bearer token into an :class:`AuthSession`.

    Raises:
        AuthenticationError: If the token is invalid, expired or revoked.
    """
    try:
        claims = decode_token(access_token, TOKEN_ACCESS)
    except TokenError as err:
        raise AuthenticationError(str(err)) from err

    user = db.get(User, claims.subject)
    if user is None:
        raise AuthenticationError("User not found")
    if claims.version != user.token_version:
        raise AuthenticationError("Session has been revoked")
    return AuthSession(user=user, expires_at=claims.expires_at)


def _user_for_token(db: Session, token: str, token_type: str) -> User:
    try:
        claims = decode_token(token, token_type)
    except TokenError as err:
        raise AuthenticationError(str(err)) from err

    user = db.get(User, claims.subject)
    if user is None or claims.version != user.token_version:
        raise AuthenticationError("Token is no longer valid")
    return user
