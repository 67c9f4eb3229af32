"""Tests for category services and admin endpoints."""

from __future__ import annotations

from fastapi import status

from inkpress.models import Post
from inkpress.services.categories import get_category_stats


def test_category_stats_published_only_by_default(db_session, make_post, category, other_category) -> None:
    make_post(category=category)
    make_post(category=category, status="draft")

    public = {stat.slug: stat.count for stat in get_category_stats(db_session)}
    everything = {stat.slug: stat.count for stat in get_category_stats(db_session, published_only=False)}
    assert public == {"engineering": 1, "travel": 0}
    assert everything == {"engineering": 2, "travel": 0}


def test_admin_category_crud(client, admin_headers) -> None:
    r = client.post(
        "/api/v1/admin/categories",
        json={"name": "Design", "slug": "design", "description": "Visual things"},
        headers=admin_headers,
    )
    assert r.status_code == status.HTTP_201_CREATED
    category_id = r.json()["id"]

    r = client.post("/api/v1/admin/categories", json={"name": "Dup", "slug": "design"}, headers=admin_headers)
    assert r.status_code == status.HTTP_409_CONFLICT

    r = client.patch(
        f"/api/v1/admin/categories/{category_id}",
        json={"description": None},
        headers=admin_headers,
    )
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["description"] is None
    assert r.json()["name"] == "Design"

    r = client.get("/api/v1/admin/categories/all", headers=admin_headers)
    assert [c["slug"] for c in r.json()] == ["design"]

    r = client.get("/api/v1/admin/categories/by-slug/design", headers=admin_headers)
    assert r.json()["id"] == category_id

    r = client.get("/api/v1/admin/categories/slug-availability", params={"slug": "fresh"}, headers=admin_headers)
    assert r.json() == {"slug": "fresh", "available": True}


def test_category_slug_update_conflict(client, admin_headers, category, other_category) -> None:
    r = client.patch(
        f"/api/v1/admin/categories/{other_category.id}",
        json={"slug": "engineering"},
        headers=admin_headers,
    )
    assert r.status_code == status.HTTP_409_CONFLICT

    r = client.patch(
        f"/api/v1/admin/categories/{other_category.id}",
        json={"slug": "Not Valid"},
        headers=admin_headers,
    )
    assert r.status_code == 422


def test_admin_category_listing_and_stats(client, admin_headers, make_post, category, other_category) -> None:
    make_post(category=category, status="draft")

    r = client.get(
        "/api/v1/admin/categories",
        params={"order_by": "name", "order_direction": "desc", "page_size": 1},
        headers=admin_headers,
    )
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["count"] == 2
    assert [c["name"] for c in r.json()["data"]] == ["Travel"]

    stats = client.get("/api/v1/admin/categories/stats", headers=admin_headers).json()
    assert {s["slug"]: s["count"] for s in stats} == {"engineering": 1, "travel": 0}


def test_deleting_category_keeps_posts(client, admin_headers, db_session, make_post, category) -> None:
    post = make_post(category=category)
    r = client.delete(f"/api/v1/admin/categories/{category.id}", headers=admin_headers)
    assert r.status_code == status.HTTP_204_NO_CONTENT

    db_session.expire_all()
    kept = db_session.get(Post, post.id)
    assert kept is not None
    assert kept.category_id is None

    detail = client.get(f"/api/v1/blog/{post.id}").json()
    assert detail["category"] == {"id": "", "name": "uncategorized"}
