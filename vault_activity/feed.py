"""Stateful activity feed.

``ActivityFeed`` owns the user's view state (filter, sort order, page) and
derives the visible page from the live activity source on every change. The
heavy lifting lives in :mod:`vault_activity.pipeline`; this module only adds
the last-input short-circuit, page correction bookkeeping and change
notification.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
import logging
from threading import RLock
from typing import Callable, List, Optional, Tuple

from cachetools import LRUCache

from .config import PAGE_SIZE
from .models import Activity, ActivityFilter, SortBy, ViewState
from .pipeline import build_result, filter_activities, sort_activities
from .source import ActivitySnapshot, ActivitySource

LOGGER = logging.getLogger(__name__)

_OrderedKey = Tuple[int, ActivityFilter, SortBy]
FeedListener = Callable[["FeedView"], None]


class FeedStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True, slots=True)
class FeedView:
    """Everything the presentation layer needs for one render."""

    paginated_activities: Tuple[Activity, ...]
    total_pages: int
    result_count: int
    loading: bool
    view_state: ViewState
    # Order in which views were derived; later views supersede earlier ones.
    sequence: int = field(default=0, compare=False)

    @property
    def page(self) -> int:
        return self.view_state.page

    @property
    def status(self) -> FeedStatus:
        if self.loading:
            return FeedStatus.LOADING
        if self.result_count == 0:
            return FeedStatus.EMPTY
        return FeedStatus.POPULATED


class _Subscription:
    __slots__ = ("listener", "delivered")

    def __init__(self, listener: FeedListener) -> None:
        self.listener = listener
        self.delivered = 0


class ActivityFeed:
    def __init__(
        self,
        source: ActivitySource,
        view_state: Optional[ViewState] = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self._source = source
        self._state = view_state or ViewState()
        self._page_size = page_size
        # Only the most recent (revision, filter, sort) ordering is kept.
        self._ordered_cache: LRUCache[_OrderedKey, Tuple[Activity, ...]] = LRUCache(
            maxsize=1
        )
        self._lock = RLock()
        self._subscriptions: List[_Subscription] = []
        self._last_view: FeedView | None = None
        self._sequence = 0
        self._unwatch: Callable[[], None] | None = None

    @property
    def view_state(self) -> ViewState:
        with self._lock:
            return self._state

    @property
    def page_size(self) -> int:
        return self._page_size

    # -- user actions -------------------------------------------------
    def set_filter(self, activity_filter: ActivityFilter) -> FeedView:
        return self._apply(lambda state: replace(state, activity_filter=activity_filter))

    def set_sort_by(self, sort_by: SortBy) -> FeedView:
        return self._apply(lambda state: replace(state, sort_by=sort_by))

    def set_page(self, page: int) -> FeedView:
        return self._apply(lambda state: state.with_page(int(page)))

    def next_page(self) -> FeedView:
        """Advance one page; the last page stays put."""
        return self._apply(lambda state: state.with_page(state.page + 1))

    def previous_page(self) -> FeedView:
        """Go back one page; the first page stays put."""
        return self._apply(lambda state: state.with_page(state.page - 1))

    # -- observers ----------------------------------------------------
    def subscribe(self, listener: FeedListener) -> Callable[[], None]:
        """Call ``listener`` whenever the derived view changes.

        A listener never receives a view older than one it has already seen,
        and views superseded before delivery are skipped.
        """

        subscription = _Subscription(listener)
        with self._lock:
            self._subscriptions.append(subscription)

        def _unsubscribe() -> None:
            with self._lock:
                if subscription in self._subscriptions:
                    self._subscriptions.remove(subscription)

        return _unsubscribe

    def watch_source(self) -> None:
        """Recompute the view every time the source publishes a snapshot."""

        with self._lock:
            if self._unwatch is None:
                self._unwatch = self._source.subscribe(lambda _snapshot: self.view())

    def unwatch_source(self) -> None:
        with self._lock:
            if self._unwatch is not None:
                self._unwatch()
                self._unwatch = None

    # -- derivation ---------------------------------------------------
    def view(self) -> FeedView:
        """Derive the current page from the latest source snapshot."""

        with self._lock:
            view, pending = self._derive()
        self._deliver(view, pending)
        return view

    def _apply(self, change: Callable[[ViewState], ViewState]) -> FeedView:
        with self._lock:
            self._state = change(self._state)
            view, pending = self._derive()
        self._deliver(view, pending)
        return view

    def _derive(self) -> Tuple[FeedView, List[_Subscription]]:
        # Caller holds self._lock.
        snapshot = self._source.snapshot()
        ordered = self._ordered(snapshot, self._state)
        result = build_result(ordered, self._state, self._page_size)
        if result.view_state != self._state:
            LOGGER.debug(
                "Page %d out of range for %d results; corrected to %d",
                self._state.page,
                result.result_count,
                result.page,
            )
            self._state = result.view_state
        view = FeedView(
            paginated_activities=tuple(result.paginated_activities),
            total_pages=result.total_pages,
            result_count=result.result_count,
            loading=snapshot.loading,
            view_state=self._state,
        )
        if self._last_view is not None and view == self._last_view:
            return self._last_view, []
        self._sequence += 1
        view = replace(view, sequence=self._sequence)
        self._last_view = view
        return view, list(self._subscriptions)

    def _deliver(self, view: FeedView, pending: List[_Subscription]) -> None:
        for subscription in pending:
            with self._lock:
                if view.sequence < self._sequence:
                    # A newer view exists; its own delivery reaches everyone.
                    return
                if view.sequence <= subscription.delivered:
                    continue
                subscription.delivered = view.sequence
            subscription.listener(view)

    def _ordered(
        self, snapshot: ActivitySnapshot, state: ViewState
    ) -> Tuple[Activity, ...]:
        key: _OrderedKey = (snapshot.revision, state.activity_filter, state.sort_by)
        cached = self._ordered_cache.get(key)
        if cached is not None:
            return cached
        ordered = tuple(
            sort_activities(
                filter_activities(snapshot.activities, state.activity_filter),
                state.sort_by,
            )
        )
        self._ordered_cache[key] = ordered
        return ordered


__all__ = ["ActivityFeed", "FeedView", "FeedStatus"]
