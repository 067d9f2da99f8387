"""General utility helpers shared across modules."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def to_utc_aware(value: datetime) -> datetime:
    """Return ``value`` as a UTC-aware datetime (naive values are taken as UTC)."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def coerce_datetime(value: Any) -> datetime | None:
    """Parse ISO strings, epoch seconds or datetimes into UTC datetimes."""

    if isinstance(value, datetime):
        return to_utc_aware(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return coerce_datetime(int(stripped))
        parsed = parse_iso_datetime(stripped)
        return to_utc_aware(parsed) if parsed is not None else None
    return None


def format_date(value: datetime) -> str:
    """Format a datetime for feed rows (``YYYY-MM-DD HH:MM UTC``)."""

    return to_utc_aware(value).strftime("%Y-%m-%d %H:%M UTC")
