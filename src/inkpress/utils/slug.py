"""Slug generation and validation helpers."""
from __future__ import annotations

import re

SLUG_PATTERN = re.compile(r"^[a-z0-9\-]+$")
SLUG_MAX_LENGTH = 50

_NON_WORD = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-+")
_TAG_NON_SLUG = re.compile(r"[^a-z0-9\-]")


def generate_slug(title: str, fallback: str = "post") -> str:
    """Derive a URL-safe slug from a post title.

    Punctuation is dropped, whitespace becomes ``-`` and hyphen runs are
    collapsed. Titles with no usable characters fall back to ``fallback``.
    """
    slug = _NON_WORD.sub("", (title or "").lower().strip())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug).strip("-")
    return slug or fallback


def tag_slug(name: str) -> str:
    """Derive the slug for a tag created implicitly from its name."""
    slug = _WHITESPACE.sub("-", name.strip().lower())
    slug = _TAG_NON_SLUG.sub("", slug)
    slug = _HYPHEN_RUNS.sub("-", slug).strip("-")
    return slug[:SLUG_MAX_LENGTH]


def validate_slug(slug: str) -> str:
    """Return ``slug`` if it satisfies the admin form rules.

    Raises:
        ValueError: If the slug is empty, too long or contains other than
            lowercase letters, digits and hyphens.
    """
    if not slug or not slug.strip():
        raise ValueError("Slug must not be empty")
    if len(slug) > SLUG_MAX_LENGTH:
        raise ValueError(f"Slug must be at most {SLUG_MAX_LENGTH} characters")
    if not SLUG_PATTERN.match(slug):
        raise ValueError("Slug may only contain lowercase letters, digits and hyphens")
    return slug
