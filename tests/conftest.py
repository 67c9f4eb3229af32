# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "inkpress-test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ADMIN_EMAIL", "owner@inkpress.io")
os.environ.setdefault("MEDIA_ROOT", tempfile.mkdtemp(prefix="inkpress-media-"))

from inkpress.core.security import TOKEN_ACCESS, create_token, hash_password
from inkpress.db.session import Base
from inkpress.db.session import get_db as app_get_session
from inkpress.main import app as fastapi_app
from inkpress.models import Category, Post, PostTag, Tag, User
from inkpress.models.user import ROLE_ADMIN, ROLE_READER
from inkpress.services.mailer import RecordingMailer, get_mailer
from inkpress.services.storage import MediaStorage, get_storage

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "s3cret-pass"

_POST_COUNTER = count(1)
_BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def mailer(app: FastAPI) -> Iterator[RecordingMailer]:
    """Capture outgoing mail instead of logging it."""
    recording = RecordingMailer()
    app.dependency_overrides[get_mailer] = lambda: recording
    try:
        yield recording
    finally:
        app.dependency_overrides.pop(get_mailer, None)


@pytest.fixture()
def storage(app: FastAPI, tmp_path: Path) -> Iterator[MediaStorage]:
    """Store uploads in a per-test directory."""
    media = MediaStorage(tmp_path, "/media", max_bytes=1024)
    app.dependency_overrides[get_storage] = lambda: media
    try:
        yield media
    finally:
        app.dependency_overrides.pop(get_storage, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def create_user(
    db: Session,
    email: str,
    *,
    role: str = ROLE_READER,
    username: str | None = None,
    avatar_url: str | None = None,
    verified: bool = True,
    password: str = TEST_PASSWORD,
) -> User:
    user = User(
        email=email,
        username=username,
        avatar_url=avatar_url,
        role=role,
        password_hash=hash_password(password),
        email_verified_at=_BASE_TIME if verified else None,
    )
    db.add(user)
    db.flush()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict[str, str]:
    token, _ = create_token(user.id, TOKEN_ACCESS, version=user.token_version)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    """Create a verified admin."""
    return create_user(db_session, "editor@inkpress.io", role=ROLE_ADMIN, username="editor")


@pytest.fixture()
def reader_user(db_session: Session) -> User:
    """Create a verified reader without a username."""
    return create_user(db_session, "reader@inkpress.io")


@pytest.fixture()
def admin_headers(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture()
def reader_headers(reader_user: User) -> dict[str, str]:
    return auth_headers(reader_user)


@pytest.fixture()
def category(db_session: Session) -> Category:
    category = Category(name="Engineering", slug="engineering", description="Build notes")
    db_session.add(category)
    db_session.flush()
    db_session.refresh(category)
    return category


@pytest.fixture()
def other_category(db_session: Session) -> Category:
    category = Category(name="Travel", slug="travel")
    db_session.add(category)
    db_session.flush()
    db_session.refresh(category)
    return category


@pytest.fixture()
def tag(db_session: Session) -> Tag:
    tag = Tag(name="python", slug="python")
    db_session.add(tag)
    db_session.flush()
    db_session.refresh(tag)
    return tag


@pytest.fixture()
def make_post(db_session: Session, admin_user: User) -> Callable[..., Post]:
    """Return a factory persisting posts with increasing timestamps."""

    def _make_post(
        title: str | None = None,
        *,
        status: str = "published",
        category: Category | None = None,
        tags: list[Tag] | None = None,
        author: User | None = None,
        is_top: bool = False,
        **extra: Any,
    ) -> Post:
        index = next(_POST_COUNTER)
        stamp = _BASE_TIME + timedelta(minutes=index)
        published_at = extra.pop("published_at", stamp if status == "published" else None)
        slug = extra.pop("slug", f"post-{index}")
        post = Post(
            title=title or f"Post {index}",
            slug=slug,
            content={"type": "doc", "content": []},
            status=status,
            author_id=(author.id if author else admin_user.id),
            category_id=category.id if category else None,
            published_at=published_at,
            is_top=is_top,
            created_at=stamp,
            updated_at=stamp,
            **extra,
        )
        db_session.add(post)
        db_session.flush()
        for tag in tags or []:
            db_session.add(PostTag(post_id=post.id, tag_id=tag.id))
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make_post
