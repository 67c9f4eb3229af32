"""Display fallbacks for author names and avatars."""
from __future__ import annotations

from inkpress.core.settings import settings

ANONYMOUS_USERNAME = "anonymous user"


def display_username(username: str | None, email: str | None) -> str:
    """Return the name shown for an author.

    Falls back from the explicit username to the local part of the email
    address and finally to a fixed placeholder.
    """
    if username:
        return username
    if email:
        return email.split("@")[0]
    return ANONYMOUS_USERNAME


def avatar_or_default(avatar_url: str | None) -> str:
    """Return the stored avatar URL or the configured default asset."""
    return avatar_url or settings.default_avatar_url
