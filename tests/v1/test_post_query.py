"""Tests for listing parameter normalization and the post query composer."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from inkpress.repositories.post_repo import PostRepository
from inkpress.services.post_query import grid_feed_query, normalize_post_query, site_feed_query


def test_defaults_apply_when_nothing_is_given() -> None:
    params = normalize_post_query()
    assert params.page == 1
    assert params.page_size == 10
    assert params.status == "all"
    assert params.order_by == "created_at"
    assert params.order_direction == "desc"
    assert params.tag_id is None and params.category_id is None
    assert params.search_term is None
    assert params.offset == 0


def test_camel_case_keys_and_string_values_are_accepted() -> None:
    params = normalize_post_query(
        {"page": "3", "pageSize": "5", "orderBy": "title", "orderDirection": "asc", "isTop": "true"}
    )
    assert params.page == 3
    assert params.page_size == 5
    assert params.offset == 10
    assert params.order_by == "title"
    assert params.order_direction == "asc"
    assert params.is_top is True


def test_none_values_fall_back_to_defaults() -> None:
    params = normalize_post_query(page=None, search_term=None, status=None)
    assert params.page == 1
    assert params.status == "all"


@pytest.mark.parametrize("term", ["", "   ", None])
def test_blank_search_means_no_search(term: str | None) -> None:
    assert normalize_post_query(search_term=term).search_term is None


@pytest.mark.parametrize(
    "raw",
    [
        {"page": 0},
        {"page_size": 0},
        {"page_size": 1000},
        {"status": "archived"},
        {"order_by": "views"},
        {"order_direction": "sideways"},
        {"unexpected": "value"},
    ],
)
def test_invalid_input_is_rejected(raw: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        normalize_post_query(raw)


def test_feed_presets() -> None:
    site = site_feed_query(2, "go")
    assert (site.page, site.page_size, site.status, site.order_by) == (2, 10, "published", "published_at")
    assert site.search_term == "go"

    grid = grid_feed_query(1, "", tag_id=None)
    assert grid.page_size == 12
    assert grid.search_term is None


def test_page_sizes_and_totals(db_session, make_post) -> None:
    for _ in range(23):
        make_post()
    repo = PostRepository(db_session)

    sizes = []
    for page in range(1, 4):
        result = repo.list_posts(normalize_post_query(page=page, page_size=10))
        assert result.ok
        assert result.count == 23
        sizes.append(len(result.data))
    assert sizes == [10, 10, 3]
    assert math.ceil(23 / 10) == 3


def test_page_beyond_range_is_empty_not_an_error(db_session, make_post) -> None:
    for _ in range(3):
        make_post()
    result = PostRepository(db_session).list_posts(normalize_post_query(page=5, page_size=2))
    assert result.ok
    assert result.data == []
    assert result.count == 3


def test_huge_page_number_is_empty_not_an_error(db_session, make_post) -> None:
    make_post()
    result = PostRepository(db_session).list_posts(normalize_post_query(page=10**19))
    assert result.ok
    assert result.data == []
    assert result.count == 1


def test_search_is_case_insensitive_title_substring(db_session, make_post) -> None:
    intro = make_post("Intro to Go")
    concurrency = make_post("Go concurrency")
    make_post("Rust basics")

    result = PostRepository(db_session).list_posts(
        normalize_post_query(search_term="go", order_by="title", order_direction="desc")
    )
    assert [post.id for post in result.data] == [intro.id, concurrency.id]
    assert result.count == 2


def test_empty_search_matches_omitting_it(db_session, make_post) -> None:
    for title in ("Alpha", "Beta", "Gamma"):
        make_post(title)
    repo = PostRepository(db_session)

    with_empty = repo.list_posts(normalize_post_query(search_term=""))
    without = repo.list_posts(normalize_post_query())
    assert [post.id for post in with_empty.data] == [post.id for post in without.data]
    assert with_empty.count == without.count == 3


def test_like_wildcards_match_literally(db_session, make_post) -> None:
    make_post("100% coverage")
    make_post("1000 reasons")
    result = PostRepository(db_session).list_posts(normalize_post_query(search_term="100%"))
    assert [post.title for post in result.data] == ["100% coverage"]


def test_filters_are_conjunctive(db_session, make_post, category, other_category, reader_user) -> None:
    match = make_post("Match", category=category)
    make_post("Draft in category", category=category, status="draft")
    make_post("Other category", category=other_category)
    make_post("Other author", category=category, author=reader_user)

    result = PostRepository(db_session).list_posts(
        normalize_post_query(status="published", category_id=category.id, author_id=match.author_id)
    )
    assert [post.id for post in result.data] == [match.id]
    assert result.data[0].category.name == "Engineering"


def test_is_top_filter(db_session, make_post) -> None:
    pinned = make_post("Pinned", is_top=True)
    make_post("Regular")
    result = PostRepository(db_session).list_posts(normalize_post_query(is_top=True))
    assert [post.id for post in result.data] == [pinned.id]


def test_tag_filter_reads_through_association(db_session, make_post, tag, category) -> None:
    tagged_old = make_post("Tagged go intro", tags=[tag], category=category)
    tagged_new = make_post("Tagged rust", tags=[tag])
    make_post("Untagged go")
    make_post("Tagged draft", tags=[tag], status="draft")

    repo = PostRepository(db_session)
    result = repo.list_posts(
        normalize_post_query(tag_id=tag.id, status="published", order_by="published_at")
    )
    assert [post.id for post in result.data] == [tagged_new.id, tagged_old.id]
    assert result.count == 2

    searched = repo.list_posts(normalize_post_query(tag_id=tag.id, search_term="GO"))
    assert [post.id for post in searched.data] == [tagged_old.id]


def test_ordering_is_stable_and_directional(db_session, make_post) -> None:
    first = make_post("B")
    second = make_post("A")
    repo = PostRepository(db_session)

    asc = repo.list_posts(normalize_post_query(order_by="created_at", order_direction="asc"))
    desc = repo.list_posts(normalize_post_query(order_by="created_at", order_direction="desc"))
    by_title = repo.list_posts(normalize_post_query(order_by="title", order_direction="asc"))

    assert [post.id for post in asc.data] == [first.id, second.id]
    assert [post.id for post in desc.data] == [second.id, first.id]
    assert [post.title for post in by_title.data] == ["A", "B"]


def test_database_errors_are_returned_not_raised(db_session, monkeypatch) -> None:
    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is unavailable"))

    monkeypatch.setattr(db_session, "scalar", _boom)
    result = PostRepository(db_session).list_posts(normalize_post_query())
    assert not result.ok
    assert result.data is None
    assert result.count is None
    assert isinstance(result.error, OperationalError)
