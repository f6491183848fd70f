"""Datetime utilities for timezone-aware UTC timestamps."""
from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def utcnow_ms() -> int:
    """Return the current UTC time as whole milliseconds since the epoch."""
    return int(utcnow().timestamp() * 1000)


def from_ms(timestamp_ms: int) -> datetime:
    """Convert milliseconds since the epoch to a timezone-aware UTC datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000, UTC)
