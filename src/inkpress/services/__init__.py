# src/inkpress/services/__init__.py
"""Business logic services for the Inkpress application."""

from .errors import (
    AuthenticationError,
    ConflictError,
    EmailNotVerifiedError,
    NotFoundError,
    PermissionDeniedError,
    ServiceError,
    StorageError,
)
from .mailer import Mailer, RecordingMailer, get_mailer
from .storage import MediaStorage, get_storage

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "EmailNotVerifiedError",
    "NotFoundError",
    "PermissionDeniedError",
    "ServiceError",
    "StorageError",
    "Mailer",
    "RecordingMailer",
    "get_mailer",
    "MediaStorage",
    "get_storage",
]
