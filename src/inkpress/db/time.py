# src/inkpress/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def epoch_millis() -> int:
    """Return the current UTC time in milliseconds since the epoch."""
    return int(utcnow().timestamp() * 1000)
