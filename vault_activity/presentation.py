"""Rendering observers for the activity feed.

None of this feeds back into the pipeline: layouts only receive the page
slice, and the loading indicator only reads the ``loading`` flag.
"""

from __future__ import annotations

from enum import Enum
import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import pandas as pd

from .config import (
    DESKTOP_MIN_WIDTH,
    EMPTY_FEED_MESSAGE,
    LOADING_TEXT_FRAMES,
    LOADING_TEXT_INTERVAL_MS,
)
from .feed import ActivityFeed, FeedStatus, FeedView
from .models import Activity, ActivityType
from .utils import format_date

LOGGER = logging.getLogger(__name__)

_ACTION_LABELS = {
    ActivityType.MINTING: "Minted Contracts",
    ActivityType.SALES: "Sold Contracts",
    ActivityType.TRANSFERS: "Transfer",
}

# Payload fields worth a column in the desktop table, in display order.
DESKTOP_PAYLOAD_COLUMNS = ("amount", "premium", "strike_price", "expiry", "txhash")


class Layout(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"


def select_layout(width: int, breakpoint: int = DESKTOP_MIN_WIDTH) -> Layout:
    return Layout.DESKTOP if width > breakpoint else Layout.MOBILE


class LoadingTextAnimation:
    """Cycles through ``frames`` every ``interval_ms`` while loading."""

    def __init__(
        self,
        frames: Sequence[str] = LOADING_TEXT_FRAMES,
        interval_ms: int = LOADING_TEXT_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not frames:
            raise ValueError("LoadingTextAnimation needs at least one frame")
        self.frames = tuple(frames)
        self.interval_ms = max(1, interval_ms)
        self._clock = clock
        self._started_at: float | None = None

    def frame_at(self, elapsed_ms: float) -> str:
        index = int(max(0.0, elapsed_ms) // self.interval_ms) % len(self.frames)
        return self.frames[index]

    def text(self, loading: bool) -> str:
        """Current frame; restarts from the first frame after loading ends."""

        if not loading:
            self._started_at = None
            return self.frames[0]
        now = self._clock()
        if self._started_at is None:
            self._started_at = now
        return self.frame_at((now - self._started_at) * 1000.0)


def pagination_text(view: FeedView, loading_text: str) -> str:
    if view.status is FeedStatus.LOADING:
        return loading_text
    if view.status is FeedStatus.EMPTY:
        return EMPTY_FEED_MESSAGE
    return f"Page {view.page} of {view.total_pages}"


def _action_label(activity: Activity) -> str:
    return _ACTION_LABELS.get(activity.type, str(activity.type.value).title())


def activities_frame(activities: Sequence[Activity]) -> pd.DataFrame:
    """Tabulate ``activities`` for the desktop layout."""

    columns = [
        column
        for column in DESKTOP_PAYLOAD_COLUMNS
        if any(column in activity.payload for activity in activities)
    ]
    rows: List[Dict[str, Any]] = []
    for activity in activities:
        row: Dict[str, Any] = {
            "Action": _action_label(activity),
            "Date": format_date(activity.date),
        }
        for column in columns:
            row[column.replace("_", " ").title()] = activity.payload.get(column, "")
        rows.append(row)
    return pd.DataFrame(rows)


def render_desktop(activities: Sequence[Activity]) -> str:
    frame = activities_frame(activities)
    if frame.empty:
        return ""
    return frame.to_string(index=False)


def render_mobile(activities: Sequence[Activity]) -> str:
    lines = []
    for activity in activities:
        amount = activity.payload.get("amount")
        suffix = f" · {amount}" if amount is not None else ""
        lines.append(f"{_action_label(activity)} · {format_date(activity.date)}{suffix}")
    return "\n".join(lines)


def render_page(view: FeedView, width: int) -> str:
    if select_layout(width) is Layout.DESKTOP:
        return render_desktop(view.paginated_activities)
    return render_mobile(view.paginated_activities)


class FeedRenderer:
    """Re-renders an :class:`ActivityFeed` whenever its view changes.

    While attached and the feed is loading, the last view is also redrawn
    every animation interval so the loading text keeps moving.
    """

    def __init__(
        self,
        feed: ActivityFeed,
        width: int,
        output: Callable[[str], None] = print,
        animation: Optional[LoadingTextAnimation] = None,
    ) -> None:
        self.width = width
        self._feed = feed
        self._output = output
        self._animation = animation or LoadingTextAnimation()
        self._unsubscribe: Callable[[], None] | None = None
        self._tick_lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._last_view: FeedView | None = None

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._feed.subscribe(self.render)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        with self._tick_lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def compose(self, view: FeedView) -> str:
        footer = pagination_text(view, self._animation.text(view.loading))
        body = render_page(view, self.width)
        return f"{body}\n\n{footer}" if body else footer

    def render(self, view: FeedView) -> None:
        LOGGER.debug(
            "Rendering %s layout page=%d status=%s",
            select_layout(self.width).value,
            view.page,
            view.status.value,
        )
        with self._tick_lock:
            self._last_view = view
        self._output(self.compose(view))
        self._schedule_tick()

    def _schedule_tick(self) -> None:
        with self._tick_lock:
            view = self._last_view
            if (
                self._unsubscribe is None
                or view is None
                or not view.loading
                or self._timer is not None
            ):
                return
            self._timer = threading.Timer(
                self._animation.interval_ms / 1000.0, self._tick
            )
            self._timer.daemon = True
            self._timer.start()

    def _tick(self) -> None:
        with self._tick_lock:
            self._timer = None
            view = self._last_view
            if self._unsubscribe is None or view is None or not view.loading:
                return
        self._output(self.compose(view))
        self._schedule_tick()


__all__ = [
    "Layout",
    "select_layout",
    "LoadingTextAnimation",
    "pagination_text",
    "activities_frame",
    "render_desktop",
    "render_mobile",
    "render_page",
    "FeedRenderer",
]
