"""Normalization of loosely-typed post listing requests."""
from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from inkpress.core.settings import settings
from inkpress.schemas.post import PostQueryParams


def normalize_post_query(raw: Mapping[str, Any] | None = None, **overrides: Any) -> PostQueryParams:
    """Validate a raw filter mapping into :class:`PostQueryParams`.

    Keys may be snake_case or camelCase. Keys whose value is None are dropped
    so that callers can forward optional inputs untouched and still get the
    defaults.

    Raises:
        pydantic.ValidationError: On unknown keys, non-positive paging values
            or unsupported sort/status values.
    """
    merged: dict[str, Any] = dict(raw or {})
    merged.update(overrides)
    cleaned = {key: value for key, value in merged.items() if value is not None}
    return PostQueryParams.model_validate(cleaned)


def site_feed_query(page: int = 1, search: str | None = None) -> PostQueryParams:
    """Parameters of the public home feed: published posts, newest first."""
    return normalize_post_query(
        page=page,
        page_size=settings.feed_page_size,
        status="published",
        search_term=search,
        order_by="published_at",
        order_direction="desc",
    )


def grid_feed_query(
    page: int = 1,
    search: str | None = None,
    *,
    category_id: uuid.UUID | None = None,
    tag_id: uuid.UUID | None = None,
) -> PostQueryParams:
    """Parameters of the category and tag grids: published posts, newest first."""
    return normalize_post_query(
        page=page,
        page_size=settings.grid_page_size,
        status="published",
        search_term=search,
        order_by="published_at",
        order_direction="desc",
        category_id=category_id,
        tag_id=tag_id,
    )
