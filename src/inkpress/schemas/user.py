"""User and authentication Pydantic schemas."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from inkpress.core.settings import settings


class RegisterRequest(BaseModel):
    """Email/password sign-up form."""

    email: EmailStr
    password: str = Field(..., min_length=settings.password_min_length, max_length=128)
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self) -> RegisterRequest:
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class RegisterResponse(BaseModel):
    """Registration result; the account stays locked until verified."""

    user_id: uuid.UUID
    email: EmailStr
    verification_sent: bool


class LoginRequest(BaseModel):
    """Email/password sign-in form."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenPair(BaseModel):
    """Access and refresh tokens issued on sign-in or refresh."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")
    expires_at: datetime = Field(..., description="Access token expiry (UTC)")


class RefreshRequest(BaseModel):
    """Request to exchange a refresh token for a new token pair."""

    refresh_token: str


class EmailRequest(BaseModel):
    """Request carrying only an email address (resend, password reset)."""

    email: EmailStr


class VerifyEmailRequest(BaseModel):
    """Email verification token submitted from the emailed link."""

    token: str


class PasswordResetConfirm(BaseModel):
    """New password submitted with a reset token."""

    token: str
    password: str = Field(..., min_length=settings.password_min_length, max_length=128)
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self) -> PasswordResetConfirm:
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class UserResponse(BaseModel):
    """Full account information for the signed-in user."""

    id: uuid.UUID
    email: EmailStr
    username: str | None
    avatar_url: str | None
    role: str
    email_verified_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PublicProfile(BaseModel):
    """Author information safe to show to anyone."""

    id: uuid.UUID
    username: str
    avatar_url: str


class ProfileUpdateRequest(BaseModel):
    """Schema for updating user profile information."""

    username: str | None = Field(None, min_length=1, max_length=64)
    avatar_url: str | None = Field(None, max_length=2048)


class SessionResponse(BaseModel):
    """Current authentication session as seen by the server."""

    user: UserResponse
    expires_at: datetime
    is_valid: bool
