"""Exceptions raised by the service layer.

Endpoints translate these into HTTP responses; services never raise
``HTTPException`` themselves.
"""
from __future__ import annotations


class ServiceError(Exception):
    """Base class for service-layer failures."""


class NotFoundError(ServiceError, LookupError):
    """A referenced row does not exist."""


class ConflictError(ServiceError, ValueError):
    """A unique value (slug, email) is already taken."""


class PermissionDeniedError(ServiceError, PermissionError):
    """The caller may not touch the requested row."""


class AuthenticationError(ServiceError):
    """Credentials or tokens were rejected."""


class EmailNotVerifiedError(AuthenticationError):
    """Sign-in attempted before the email address was confirmed."""


class StorageError(ServiceError, ValueError):
    """An upload was rejected by the media store."""
