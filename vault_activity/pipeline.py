"""Filter / sort / paginate helpers for the vault activity feed.

Pure transformation: given the raw activity list and a view state it produces
the page to display. Kept free of I/O and state so every stage is testable on
its own; ``ActivityFeed`` (in ``feed``) wires it to a live activity source.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from .config import PAGE_SIZE
from .models import Activity, ActivityFilter, SortBy, ViewState


def filter_activities(
    activities: Sequence[Activity], activity_filter: ActivityFilter
) -> List[Activity]:
    """Return the activities matching ``activity_filter`` in input order.

    The no-filter value (or anything not bound to an activity type) keeps
    every element.
    """

    activity_type = getattr(activity_filter, "activity_type", None)
    if activity_type is None:
        return list(activities)
    return [act for act in activities if act.type == activity_type]


def sort_activities(
    activities: Sequence[Activity], sort_by: SortBy
) -> List[Activity]:
    """Return a new list ordered by date according to ``sort_by``.

    ``sorted`` is stable in both directions, so activities sharing a date keep
    their incoming relative order. Unknown orders leave the sequence as is.
    """

    if sort_by == SortBy.LATEST_FIRST:
        return sorted(activities, key=lambda act: act.date, reverse=True)
    if sort_by == SortBy.OLDEST_FIRST:
        return sorted(activities, key=lambda act: act.date)
    return list(activities)


def total_pages(result_count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages needed for ``result_count`` items (0 when empty)."""

    return math.ceil(max(0, result_count) / page_size)


def reconcile_page(page: int, result_count: int, page_size: int = PAGE_SIZE) -> int:
    """Clamp ``page`` into ``[1, max(1, total_pages)]``.

    Pages already in range come back untouched. A page past the end moves to
    the last page, or to 1 when there are no results.
    """

    max_page = total_pages(result_count, page_size)
    if page > max_page:
        return max(max_page, 1)
    if page < 1:
        return 1
    return page


def paginate(
    activities: Sequence[Activity], page: int, page_size: int = PAGE_SIZE
) -> List[Activity]:
    """Return the ``page``-th slice of ``page_size`` items (1-based).

    Out-of-range pages yield an empty list rather than an error.
    """

    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(activities[start : start + page_size])


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Output of one filter -> sort -> reconcile -> paginate pass."""

    paginated_activities: List[Activity]
    total_pages: int
    result_count: int
    view_state: ViewState

    @property
    def page(self) -> int:
        return self.view_state.page


def run_pipeline(
    activities: Sequence[Activity],
    view_state: ViewState,
    page_size: int = PAGE_SIZE,
) -> PipelineResult:
    """Run the full pipeline over ``activities`` for ``view_state``.

    The returned ``view_state`` carries the corrected page; callers holding
    their own copy should adopt it.
    """

    ordered = sort_activities(
        filter_activities(activities, view_state.activity_filter),
        view_state.sort_by,
    )
    return build_result(ordered, view_state, page_size)


def build_result(
    ordered: Sequence[Activity], view_state: ViewState, page_size: int = PAGE_SIZE
) -> PipelineResult:
    """Reconcile the page against ``ordered`` and slice it."""

    count = len(ordered)
    page = reconcile_page(view_state.page, count, page_size)
    if page != view_state.page:
        view_state = view_state.with_page(page)
    return PipelineResult(
        paginated_activities=paginate(ordered, page, page_size),
        total_pages=total_pages(count, page_size),
        result_count=count,
        view_state=view_state,
    )


__all__ = [
    "filter_activities",
    "sort_activities",
    "total_pages",
    "reconcile_page",
    "paginate",
    "PipelineResult",
    "run_pipeline",
    "build_result",
]
