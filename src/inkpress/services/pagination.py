"""Pagination math and link generation shared by every paginated feed.

The home, category and tag feeds all render the same navigation bar. Links
must be stable: a link to page 1 is byte-for-byte the bare listing path, so
caches and crawlers see one URL per page.
"""
from __future__ import annotations

import math
from urllib.parse import urlencode

from inkpress.core.settings import settings
from inkpress.schemas.common import PageLink, PaginationInfo


def total_pages(count: int, page_size: int) -> int:
    """Return ``ceil(count / page_size)``; zero when there is nothing to show."""
    if page_size < 1:
        raise ValueError("page_size must be positive")
    return math.ceil(max(count, 0) / page_size)


def page_window(current_page: int, pages_total: int, size: int | None = None) -> list[int]:
    """Return the page numbers to show around ``current_page``.

    Exactly ``min(size, pages_total)`` consecutive numbers are returned. The
    window is centred on the current page and shifted at either end so it
    never leaves ``[1, pages_total]``.
    """
    size = size or settings.pagination_window
    if pages_total < 1:
        return []
    shown = min(size, pages_total)
    current = min(max(current_page, 1), pages_total)
    start = current - shown // 2
    start = max(1, min(start, pages_total - shown + 1))
    return list(range(start, start + shown))


def page_link(base_path: str, page: int, search: str | None = None) -> str:
    """Build the URL of one listing page.

    ``search`` is only included when non-empty and ``page`` only when above 1.
    """
    params: dict[str, str] = {}
    if search:
        params["search"] = search
    if page > 1:
        params["page"] = str(page)
    query = urlencode(params)
    return f"{base_path}?{query}" if query else base_path


def parse_page(raw: str | int | None) -> int:
    """Read a ``page`` query value back into a normalized page number.

    Missing, malformed or non-positive values mean page 1.
    """
    if raw is None or raw == "":
        return 1
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def build_pagination(
    base_path: str,
    *,
    current_page: int,
    count: int,
    page_size: int,
    search: str | None = None,
) -> PaginationInfo:
    """Return the navigation block for one page of a listing.

    ``current_page`` may exceed the page count (the listing is then empty);
    links are computed against the last real page so none points past it,
    and "previous" leads back to that last page.
    """
    pages_total = total_pages(count, page_size)
    anchor = min(current_page, pages_total) if pages_total else 1
    numbers = page_window(anchor, pages_total)

    if current_page > pages_total >= 1:
        previous_url: str | None = page_link(base_path, pages_total, search)
    elif anchor > 1:
        previous_url = page_link(base_path, anchor - 1, search)
    else:
        previous_url = None
    next_url = page_link(base_path, anchor + 1, search) if anchor < pages_total else None

    return PaginationInfo(
        current_page=current_page,
        total_pages=pages_total,
        total=count,
        page_size=page_size,
        has_multiple_pages=pages_total > 1,
        pages=[
            PageLink(
                number=number,
                url=page_link(base_path, number, search),
                current=number == current_page,
            )
            for number in numbers
        ],
        previous_url=previous_url,
        next_url=next_url,
    )
