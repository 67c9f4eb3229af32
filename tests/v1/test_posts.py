"""Tests for post authoring: slugs, publish timestamps and admin endpoints."""

from __future__ import annotations

import re
from datetime import UTC, datetime

import pytest
from fastapi import status

from inkpress.models import Post
from inkpress.schemas.post import PostSubmit
from inkpress.services.posts import (
    create_post,
    get_author_post_stats,
    is_slug_available,
    resolve_published_at,
    unique_slug_for,
    update_post,
    update_post_status,
)
from inkpress.services.tags import get_tags_by_post_id
from inkpress.utils.slug import generate_slug

STAMP = datetime(2023, 5, 17, 8, 30, tzinfo=UTC)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Hello World", "hello-world"),
        ("  Spaces   everywhere  ", "spaces-everywhere"),
        ("What's new in 3.12?", "whats-new-in-312"),
        ("dash -- runs", "dash-runs"),
        ("!!!", "post"),
    ],
)
def test_generate_slug(title: str, expected: str) -> None:
    assert generate_slug(title) == expected


def test_publishing_without_timestamp_sets_one() -> None:
    now = datetime(2024, 2, 2, tzinfo=UTC)
    assert resolve_published_at("published", None, now=now) == now


def test_existing_timestamp_is_never_overwritten() -> None:
    assert resolve_published_at("published", STAMP) == STAMP
    assert resolve_published_at("draft", STAMP) == STAMP


def test_draft_without_timestamp_stays_unset() -> None:
    assert resolve_published_at("draft", None) is None


def test_taken_slug_gets_timestamp_suffix(db_session, make_post) -> None:
    make_post("Hello World", slug="hello-world")
    assert not is_slug_available(db_session, "hello-world")
    slug = unique_slug_for(db_session, "Hello World")
    assert re.fullmatch(r"hello-world-\d{13}", slug)


def test_slug_availability_can_exclude_own_post(db_session, make_post) -> None:
    post = make_post("Mine", slug="mine")
    assert is_slug_available(db_session, "mine", exclude_id=post.id)


def test_create_post_draft_then_publish(db_session, admin_user, category) -> None:
    submission = PostSubmit(title="First draft", category_id=category.id, tags=["a", "b"])
    post = create_post(db_session, admin_user, submission)
    assert post.slug == "first-draft"
    assert post.status == "draft"
    assert post.published_at is None
    assert [tag.name for tag in get_tags_by_post_id(db_session, post.id)] == ["a", "b"]

    published = update_post(
        db_session,
        post,
        submission.model_copy(update={"status": "published", "tags": []}),
    )
    assert published.published_at is not None
    assert published.slug == "first-draft"
    assert get_tags_by_post_id(db_session, post.id) == []


def test_resaving_published_post_keeps_published_at(db_session, make_post, category) -> None:
    post = make_post("Old news", category=category, published_at=STAMP)
    original = post.published_at

    submission = PostSubmit(title="Old news, revised", category_id=category.id, status="published")
    updated = update_post(db_session, post, submission)
    assert updated.published_at == original
    assert updated.title == "Old news, revised"


def test_unpublish_and_republish_keeps_first_timestamp(db_session, make_post) -> None:
    post = make_post("Toggle", published_at=STAMP)
    original = post.published_at
    update_post_status(db_session, post, "draft")
    assert post.published_at == original
    update_post_status(db_session, post, "published")
    assert post.published_at == original


def test_author_post_stats(db_session, admin_user, make_post) -> None:
    make_post()
    make_post()
    make_post(status="draft")
    stats = get_author_post_stats(db_session, admin_user.id)
    assert (stats.total, stats.published, stats.draft) == (3, 2, 1)


def _payload(category_id, **overrides):
    payload = {
        "title": "Writing with FastAPI",
        "content": {"type": "doc", "content": [{"type": "paragraph"}]},
        "excerpt": "A short intro",
        "status": "published",
        "category_id": str(category_id),
        "tags": ["python", " web ", "python"],
        "seo_keywords": "fastapi,python",
        "allow_comment": True,
        "is_top": False,
    }
    payload.update(overrides)
    return payload


def test_admin_create_post(client, admin_headers, category, tag) -> None:
    r = client.post("/api/v1/admin/posts", json=_payload(category.id), headers=admin_headers)
    assert r.status_code == status.HTTP_201_CREATED
    data = r.json()
    assert data["slug"] == "writing-with-fastapi"
    assert data["published_at"] is not None
    assert data["category"] == {"id": str(category.id), "name": "Engineering"}
    assert [t["name"] for t in data["tags"]] == ["python", "web"]
    assert next(t for t in data["tags"] if t["name"] == "python")["id"] == str(tag.id)
    assert data["content"] == {"type": "doc", "content": [{"type": "paragraph"}]}

    again = client.post("/api/v1/admin/posts", json=_payload(category.id), headers=admin_headers)
    assert again.status_code == status.HTTP_201_CREATED
    assert again.json()["slug"].startswith("writing-with-fastapi-")


def test_admin_create_post_validation(client, admin_headers, category) -> None:
    r = client.post("/api/v1/admin/posts", json=_payload(category.id, title="   "), headers=admin_headers)
    assert r.status_code == 422

    payload = _payload(category.id)
    del payload["category_id"]
    r = client.post("/api/v1/admin/posts", json=payload, headers=admin_headers)
    assert r.status_code == 422

    r = client.post(
        "/api/v1/admin/posts",
        json=_payload(category.id, tags=["x" * 101]),
        headers=admin_headers,
    )
    assert r.status_code == 422

    r = client.post(
        "/api/v1/admin/posts",
        json=_payload("00000000-0000-0000-0000-000000000000"),
        headers=admin_headers,
    )
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_admin_update_post_replaces_tags(client, admin_headers, category, make_post, tag) -> None:
    post = make_post("Before", category=category, tags=[tag], published_at=STAMP)
    r = client.put(
        f"/api/v1/admin/posts/{post.id}",
        json=_payload(category.id, title="After", tags=["fresh"]),
        headers=admin_headers,
    )
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["title"] == "After"
    assert data["slug"] == post.slug
    assert [t["name"] for t in data["tags"]] == ["fresh"]
    assert data["published_at"].startswith("2023-05-17T08:30:00")


def test_admin_status_toggle(client, admin_headers, make_post) -> None:
    post = make_post("Draft", status="draft")
    r = client.patch(f"/api/v1/admin/posts/{post.id}/status", json={"status": "published"}, headers=admin_headers)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["status"] == "published"
    assert r.json()["published_at"] is not None

    r = client.patch(f"/api/v1/admin/posts/{post.id}/status", json={"status": "archived"}, headers=admin_headers)
    assert r.status_code == 422


def test_admin_get_post_includes_drafts(client, admin_headers, make_post) -> None:
    post = make_post("Secret", status="draft")
    r = client.get(f"/api/v1/admin/posts/{post.id}", headers=admin_headers)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["status"] == "draft"


def test_admin_delete_post_cascades_tags(client, admin_headers, db_session, make_post, tag) -> None:
    post = make_post(tags=[tag])
    post_id = post.id
    r = client.delete(f"/api/v1/admin/posts/{post_id}", headers=admin_headers)
    assert r.status_code == status.HTTP_204_NO_CONTENT
    assert db_session.get(Post, post_id) is None
    assert get_tags_by_post_id(db_session, post_id) == []
    assert client.delete(f"/api/v1/admin/posts/{post_id}", headers=admin_headers).status_code == 404


def test_admin_list_posts_filters_and_paginates(client, admin_headers, make_post, category) -> None:
    for index in range(7):
        make_post(f"Go tip {index}", category=category)
    make_post("Rust tip")
    make_post("Go draft", status="draft")

    r = client.get(
        "/api/v1/admin/posts",
        params={"status": "published", "searchTerm": "go", "pageSize": 3, "page": 2},
        headers=admin_headers,
    )
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["count"] == 7
    assert data["total_pages"] == 3
    assert len(data["data"]) == 3
    assert data["pagination"]["previous_url"] == "/admin/posts?search=go"
    assert data["pagination"]["next_url"] == "/admin/posts?search=go&page=3"


def test_admin_list_posts_rejects_unknown_parameters(client, admin_headers) -> None:
    r = client.get("/api/v1/admin/posts", params={"colour": "blue"}, headers=admin_headers)
    assert r.status_code == 422


def test_admin_post_stats_and_slug_check(client, admin_headers, make_post) -> None:
    make_post(slug="taken")
    make_post(status="draft")
    r = client.get("/api/v1/admin/posts/stats", headers=admin_headers)
    assert r.json() == {"total": 2, "published": 1, "draft": 1}

    r = client.get("/api/v1/admin/posts/slug-availability", params={"slug": "taken"}, headers=admin_headers)
    assert r.json() == {"slug": "taken", "available": False}


def test_post_admin_requires_admin(client, reader_headers, category) -> None:
    r = client.post("/api/v1/admin/posts", json=_payload(category.id), headers=reader_headers)
    assert r.status_code == status.HTTP_403_FORBIDDEN
