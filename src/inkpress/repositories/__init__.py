"""Repository classes wrapping SQLAlchemy access."""

from .post_repo import PostPage, PostRepository

__all__ = ["PostPage", "PostRepository"]
