"""UTC time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_ms(value: datetime | None = None) -> int:
    """Return milliseconds since the epoch for ``value`` (default: now)."""
    return int((value or utc_now()).timestamp() * 1000)
