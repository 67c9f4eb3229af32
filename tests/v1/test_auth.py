"""Tests for registration, verification, sign-in and session handling."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi import status

from inkpress.core.security import TOKEN_ACCESS, TOKEN_REFRESH, TokenError, create_token, decode_token
from inkpress.services.users import get_user_by_email, get_user_role

from tests.conftest import TEST_PASSWORD, auth_headers, create_user


def _register(client, email: str, password: str = "hunter22", confirm: str | None = None):
    return client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": password, "confirm_password": confirm or password},
    )


def _token_from_mail(message) -> str:
    link = message.body.splitlines()[-1]
    return parse_qs(urlparse(link).query)["token"][0]


def _login(client, email: str, password: str = TEST_PASSWORD):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


def test_token_round_trip_and_type_check() -> None:
    token, expires_at = create_token(uuid.UUID(int=7), TOKEN_ACCESS, version=3)
    claims = decode_token(token, TOKEN_ACCESS)
    assert claims.subject == uuid.UUID(int=7)
    assert claims.version == 3
    assert abs((claims.expires_at - expires_at).total_seconds()) < 1

    with pytest.raises(TokenError):
        decode_token(token, TOKEN_REFRESH)
    with pytest.raises(TokenError):
        decode_token("not-a-jwt", TOKEN_ACCESS)


def test_expired_token_is_rejected() -> None:
    issued = datetime.now(UTC) - timedelta(days=2)
    token, _ = create_token(uuid.UUID(int=1), TOKEN_ACCESS, now=issued)
    with pytest.raises(TokenError):
        decode_token(token, TOKEN_ACCESS)


def test_register_verify_login_flow(client, db_session, mailer) -> None:
    r = _register(client, "New.Writer@inkpress.io")
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["email"] == "new.writer@inkpress.io"
    assert r.json()["verification_sent"] is True

    user = get_user_by_email(db_session, "new.writer@inkpress.io")
    assert user.role == "reader"
    assert user.email_verified_at is None

    r = _login(client, "new.writer@inkpress.io", "hunter22")
    assert r.status_code == status.HTTP_403_FORBIDDEN
    assert r.json()["detail"] == "Email not confirmed"

    assert len(mailer.outbox) == 1
    assert mailer.outbox[0].to == "new.writer@inkpress.io"
    assert "/auth/verify?token=" in mailer.outbox[0].body

    r = client.post("/api/v1/auth/verify", json={"token": _token_from_mail(mailer.outbox[0])})
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["token_type"] == "bearer"

    r = _login(client, "new.writer@inkpress.io", "hunter22")
    assert r.status_code == status.HTTP_200_OK
    tokens = r.json()
    session = client.get(
        "/api/v1/auth/session",
        headers={"Authorization": f"Bearer {tokens['access_token']}"},
    )
    assert session.status_code == status.HTTP_200_OK
    assert session.json()["user"]["email"] == "new.writer@inkpress.io"
    assert session.json()["is_valid"] is True


def test_register_validation(client, mailer) -> None:
    assert _register(client, "short@inkpress.io", "12345").status_code == 422
    assert _register(client, "mismatch@inkpress.io", "hunter22", "hunter23").status_code == 422
    assert _register(client, "not-an-email").status_code == 422
    assert mailer.outbox == []


def test_duplicate_registration_conflicts(client, reader_user, mailer) -> None:
    r = _register(client, "READER@inkpress.io")
    assert r.status_code == status.HTTP_409_CONFLICT


def test_configured_admin_email_gets_admin_role(client, db_session, mailer) -> None:
    r = _register(client, "owner@inkpress.io")
    assert r.status_code == status.HTTP_201_CREATED
    assert get_user_role(db_session, uuid.UUID(r.json()["user_id"])) == "admin"


def test_login_rejects_bad_credentials(client, reader_user) -> None:
    assert _login(client, "reader@inkpress.io", "wrong-password").status_code == 401
    assert _login(client, "nobody@inkpress.io").status_code == 401
    assert _login(client, "reader@inkpress.io").status_code == 200


def test_resend_verification_is_silent_for_unknown_and_verified(client, db_session, reader_user, mailer) -> None:
    create_user(db_session, "pending@inkpress.io", verified=False)

    for email in ("nobody@inkpress.io", "reader@inkpress.io", "pending@inkpress.io"):
        r = client.post("/api/v1/auth/verify/resend", json={"email": email})
        assert r.status_code == status.HTTP_202_ACCEPTED

    assert [message.to for message in mailer.outbox] == ["pending@inkpress.io"]


def test_invalid_verification_token(client) -> None:
    r = client.post("/api/v1/auth/verify", json={"token": "garbage"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_verification_link_works_once(client, mailer) -> None:
    _register(client, "once@inkpress.io")
    token = _token_from_mail(mailer.outbox[0])

    first = client.post("/api/v1/auth/verify", json={"token": token})
    assert first.status_code == status.HTTP_200_OK
    session = client.get(
        "/api/v1/auth/session",
        headers={"Authorization": f"Bearer {first.json()['access_token']}"},
    )
    assert session.status_code == status.HTTP_200_OK

    replay = client.post("/api/v1/auth/verify", json={"token": token})
    assert replay.status_code == status.HTTP_400_BAD_REQUEST


def test_refresh_issues_new_pair(client, reader_user) -> None:
    tokens = _login(client, "reader@inkpress.io").json()
    r = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["access_token"] != tokens["access_token"]

    # An access token cannot be used as a refresh token.
    r = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_logout_revokes_outstanding_tokens(client, reader_user) -> None:
    tokens = _login(client, "reader@inkpress.io").json()
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    assert client.post("/api/v1/auth/logout", headers=headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/auth/session", headers=headers).status_code == status.HTTP_401_UNAUTHORIZED
    r = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_expired_access_token_is_rejected_per_request(client, reader_user) -> None:
    token, _ = create_token(
        reader_user.id,
        TOKEN_ACCESS,
        version=reader_user.token_version,
        now=datetime.now(UTC) - timedelta(days=1),
    )
    r = client.get("/api/v1/auth/session", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_missing_credentials(client) -> None:
    assert client.get("/api/v1/auth/session").status_code == status.HTTP_401_UNAUTHORIZED


def test_password_reset_flow(client, reader_user, mailer) -> None:
    old_headers = auth_headers(reader_user)

    r = client.post("/api/v1/auth/password-reset", json={"email": "reader@inkpress.io"})
    assert r.status_code == status.HTTP_202_ACCEPTED
    r = client.post("/api/v1/auth/password-reset", json={"email": "nobody@inkpress.io"})
    assert r.status_code == status.HTTP_202_ACCEPTED
    assert len(mailer.outbox) == 1
    token = _token_from_mail(mailer.outbox[0])

    payload = {"token": token, "password": "brand-new-pass", "confirm_password": "brand-new-pass"}
    r = client.post("/api/v1/auth/password-reset/confirm", json=payload)
    assert r.status_code == status.HTTP_200_OK

    assert _login(client, "reader@inkpress.io").status_code == 401
    assert _login(client, "reader@inkpress.io", "brand-new-pass").status_code == 200
    assert client.get("/api/v1/auth/session", headers=old_headers).status_code == 401

    # Reset links work once.
    r = client.post("/api/v1/auth/password-reset/confirm", json=payload)
    assert r.status_code == status.HTTP_400_BAD_REQUEST
