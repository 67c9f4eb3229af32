# src/inkpress/api/v1/endpoints/auth.py
"""Authentication endpoints for the Inkpress API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from inkpress.api.v1.dependencies import AuthSessionDep, MailerDep, SessionDep
from inkpress.schemas.common import StatusResponse
from inkpress.schemas.user import (
    EmailRequest,
    LoginRequest,
    PasswordResetConfirm,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    TokenPair,
    UserResponse,
    VerifyEmailRequest,
)
from inkpress.services import auth as auth_service
from inkpress.services.errors import (
    AuthenticationError,
    ConflictError,
    EmailNotVerifiedError,
)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: SessionDep, mailer: MailerDep) -> RegisterResponse:
    """Create an account and email its verification link.

    The account cannot sign in until the link has been followed.
    """
    try:
        user = auth_service.register(db, request.email, request.password, mailer)
    except ConflictError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err
    return RegisterResponse(user_id=user.id, email=user.email, verification_sent=True)


@router.post("/verify", response_model=TokenPair)
async def verify_email(request: VerifyEmailRequest, db: SessionDep) -> TokenPair:
    """Confirm an email address and sign the user in."""
    try:
        user = auth_service.verify_email(db, request.token)
    except AuthenticationError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired verification link",
        ) from err
    return auth_service.issue_tokens(user)


@router.post("/verify/resend", response_model=StatusResponse, status_code=status.HTTP_202_ACCEPTED)
async def resend_verification(request: EmailRequest, db: SessionDep, mailer: MailerDep) -> StatusResponse:
    """Send another verification link; the answer never reveals whether the email exists."""
    auth_service.resend_verification(db, request.email, mailer)
    return StatusResponse(status="sent")


@router.post("/login", response_model=TokenPair)
async def login(request: LoginRequest, db: SessionDep) -> TokenPair:
    """Sign in with email and password.

    Returns:
        A fresh access/refresh token pair

    Raises:
        HTTPException: 401 on bad credentials, 403 while the email is unverified
    """
    try:
        user = auth_service.authenticate(db, request.email, request.password)
    except EmailNotVerifiedError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err
    except AuthenticationError as err:
        raise _unauthorized(str(err)) from err
    return auth_service.issue_tokens(user)


@router.post("/refresh", response_model=TokenPair)
async def refresh(request: RefreshRequest, db: SessionDep) -> TokenPair:
    """Exchange a refresh token for a new token pair."""
    try:
        return auth_service.refresh_tokens(db, request.refresh_token)
    except AuthenticationError as err:
        raise _unauthorized("Invalid or expired refresh token") from err


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(session: AuthSessionDep, db: SessionDep) -> None:
    """Sign out everywhere by revoking all tokens of the current user."""
    auth_service.logout(db, session.user)


@router.get("/session", response_model=SessionResponse)
async def get_session(session: AuthSessionDep) -> SessionResponse:
    """Return the current session and its expiry."""
    return SessionResponse(
        user=UserResponse.model_validate(session.user),
        expires_at=session.expires_at,
        is_valid=session.is_valid,
    )


@router.post("/password-reset", response_model=StatusResponse, status_code=status.HTTP_202_ACCEPTED)
async def request_password_reset(request: EmailRequest, db: SessionDep, mailer: MailerDep) -> StatusResponse:
    """Email a password reset link if the address is registered."""
    auth_service.request_password_reset(db, request.email, mailer)
    return StatusResponse(status="sent")


@router.post("/password-reset/confirm", response_model=StatusResponse)
async def confirm_password_reset(request: PasswordResetConfirm, db: SessionDep) -> StatusResponse:
    """Set a new password using the emailed reset token."""
    try:
        auth_service.reset_password(db, request.token, request.password)
    except AuthenticationError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset link",
        ) from err
    return StatusResponse(status="password_updated")
