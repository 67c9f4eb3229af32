"""Password hashing and signed token helpers."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from inkpress.core.settings import settings

TOKEN_ACCESS = "access"
TOKEN_REFRESH = "refresh"
TOKEN_VERIFY_EMAIL = "verify_email"
TOKEN_RESET_PASSWORD = "reset_password"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenError(ValueError):
    """Raised when a token is malformed, expired or of the wrong kind."""


@dataclass(frozen=True)
class TokenClaims:
    """Decoded and type-checked claims of an Inkpress token."""

    subject: uuid.UUID
    token_type: str
    version: int
    expires_at: datetime


def hash_password(password: str) -> str:
    """Return a salted hash suitable for storage."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash."""
    return pwd_context.verify(password, password_hash)


def _lifetime(token_type: str) -> timedelta:
    minutes = {
        TOKEN_ACCESS: settings.access_token_expire_minutes,
        TOKEN_REFRESH: settings.refresh_token_expire_minutes,
        TOKEN_VERIFY_EMAIL: settings.email_verify_expire_minutes,
        TOKEN_RESET_PASSWORD: settings.password_reset_expire_minutes,
    }[token_type]
    return timedelta(minutes=minutes)


def create_token(
    subject: uuid.UUID,
    token_type: str,
    *,
    version: int = 0,
    now: datetime | None = None,
) -> tuple[str, datetime]:
    """Create a signed JWT for ``subject``.

    Args:
        subject: User identifier placed in the ``sub`` claim.
        token_type: One of the ``TOKEN_*`` constants.
        version: The user's current token version; tokens carrying an older
            version are rejected.
        now: Issue time override, used by tests.

    Returns:
        The encoded token and its expiry timestamp.
    """
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + _lifetime(token_type)
    to_encode: dict[str, Any] = {
        "sub": str(subject),
        "typ": token_type,
        "ver": version,
        "iat": issued_at,
        "exp": expires_at,
        "jti": uuid.uuid4().hex,
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt, expires_at


def decode_token(token: str, expected_type: str) -> TokenClaims:
    """Decode ``token`` and ensure it is of ``expected_type``.

    Raises:
        TokenError: If the signature, expiry, subject or type is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise TokenError("Could not validate credentials") from err

    if payload.get("typ") != expected_type:
        raise TokenError("Wrong token type")

    subject = payload.get("sub")
    if subject is None:
        raise TokenError("Could not validate credentials")
    try:
        user_id = uuid.UUID(subject)
    except ValueError as err:
        raise TokenError("Could not validate credentials") from err

    return TokenClaims(
        subject=user_id,
        token_type=expected_type,
        version=int(payload.get("ver", 0)),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )
