from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from .utils import to_utc_aware


class ActivityType(str, Enum):
    MINTING = "minting"
    SALES = "sales"
    TRANSFERS = "transfers"


class ActivityFilter(str, Enum):
    ALL = "all activity"
    MINTING = "minting"
    SALES = "sales"

    @property
    def activity_type(self) -> ActivityType | None:
        """Activity type retained by this filter, ``None`` for no filtering."""
        if self is ActivityFilter.MINTING:
            return ActivityType.MINTING
        if self is ActivityFilter.SALES:
            return ActivityType.SALES
        return None


class SortBy(str, Enum):
    LATEST_FIRST = "latest first"
    OLDEST_FIRST = "oldest first"


@dataclass(frozen=True, slots=True)
class Activity:
    type: ActivityType
    date: datetime
    # Extra fields from the API (amounts, tx hashes, ...). Never interpreted.
    payload: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Naive and aware datetimes cannot be compared; keep everything in UTC.
        object.__setattr__(self, "date", to_utc_aware(self.date))


@dataclass(frozen=True, slots=True)
class ViewState:
    activity_filter: ActivityFilter = ActivityFilter.ALL
    sort_by: SortBy = SortBy.LATEST_FIRST
    page: int = 1

    def with_page(self, page: int) -> ViewState:
        return replace(self, page=page)


__all__ = ["Activity", "ActivityType", "ActivityFilter", "SortBy", "ViewState"]
