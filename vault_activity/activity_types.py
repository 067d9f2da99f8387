"""Utilities for classifying vault activity types and view selections."""

from __future__ import annotations

from typing import Any

from .errors import InvalidViewStateError
from .models import ActivityFilter, ActivityType, SortBy

__all__ = [
    "normalize_label",
    "parse_activity_type",
    "parse_activity_filter",
    "parse_sort_by",
]

# Singular spellings the API and users tend to send.
_TYPE_ALIASES = {
    "mint": ActivityType.MINTING,
    "sale": ActivityType.SALES,
    "transfer": ActivityType.TRANSFERS,
}


def normalize_label(value: Any) -> str | None:
    """Return a lowercase, space-separated label or ``None`` when missing.

    Labels arrive as ``"Latest First"``, ``"latest-first"`` or
    ``"latest_first"`` depending on the caller. Normalising once keeps
    downstream comparisons cheap and deterministic.
    """

    if value is None:
        return None
    normalized = " ".join(
        str(value).strip().lower().replace("-", " ").replace("_", " ").split()
    )
    return normalized or None


def parse_activity_type(value: Any) -> ActivityType | None:
    """Return the :class:`ActivityType` for ``value`` or ``None`` if unknown."""

    normalized = normalize_label(value)
    if normalized is None:
        return None
    try:
        return ActivityType(normalized)
    except ValueError:
        return _TYPE_ALIASES.get(normalized)


def parse_activity_filter(value: Any) -> ActivityFilter:
    """Parse a user supplied filter label.

    ``None``, ``"all"`` and ``"all activity"`` map to the no-filter value.

    Raises:
        InvalidViewStateError: if the label names no known filter.
    """

    normalized = normalize_label(value)
    if normalized in (None, "all"):
        return ActivityFilter.ALL
    try:
        return ActivityFilter(normalized)
    except ValueError:
        activity_type = _TYPE_ALIASES.get(normalized or "")
        for candidate in ActivityFilter:
            if activity_type is not None and candidate.activity_type is activity_type:
                return candidate
    raise InvalidViewStateError(f"Unknown activity filter: {value!r}")


def parse_sort_by(value: Any) -> SortBy:
    """Parse a user supplied sort label (``latest first`` when missing)."""

    normalized = normalize_label(value)
    if normalized is None:
        return SortBy.LATEST_FIRST
    for candidate in SortBy:
        if normalized in (candidate.value, candidate.value.split()[0]):
            return candidate
    raise InvalidViewStateError(f"Unknown sort order: {value!r}")
