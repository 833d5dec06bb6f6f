"""Time helpers."""
from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_epoch(value: datetime) -> int:
    """Whole seconds since the Unix epoch."""

    return int(value.timestamp())


def format_local_time(value: datetime) -> str:
    """Render ``value`` in UTC as ``YYYY-MM-DDTHH:MM:SS`` without offset or fraction."""

    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S")


def is_daytime(value: datetime) -> bool:
    """Return ``True`` between 06:00 and 18:59 in the server's local zone."""

    hour = value.astimezone().hour
    return 6 <= hour <= 18
