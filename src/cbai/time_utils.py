"""Shared date/time utilities used across the application."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now_iso() -> str:
    """Return a millisecond-precision UTC timestamp with explicit ``Z`` marker.

    Format: ``2026-01-15T12:34:56.789Z``
    """
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def utc_now_ms() -> int:
    """Return milliseconds since the Unix epoch."""
    return (datetime.now(timezone.utc) - _EPOCH) // timedelta(milliseconds=1)
