"""Tests for layout selection, loading text and page rendering."""

from __future__ import annotations

import threading
import time
from typing import List

from vault_activity.config import EMPTY_FEED_MESSAGE
from vault_activity.feed import ActivityFeed
from vault_activity.models import ActivityType, ViewState
from vault_activity.presentation import (
    FeedRenderer,
    Layout,
    LoadingTextAnimation,
    activities_frame,
    pagination_text,
    render_desktop,
    render_mobile,
    select_layout,
)
from vault_activity.source import ActivitySource

from conftest import make_activity, make_feed_activities


class _FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_select_layout_breakpoint() -> None:
    assert select_layout(1024, breakpoint=768) is Layout.DESKTOP
    assert select_layout(768, breakpoint=768) is Layout.MOBILE
    assert select_layout(375, breakpoint=768) is Layout.MOBILE


def test_loading_animation_cycles_frames() -> None:
    clock = _FakeClock()
    animation = LoadingTextAnimation(interval_ms=250, clock=clock)
    assert animation.text(True) == "Loading"
    clock.now += 0.25
    assert animation.text(True) == "Loading ."
    clock.now += 0.5
    assert animation.text(True) == "Loading ..."
    clock.now += 0.25
    assert animation.text(True) == "Loading"
    assert animation.text(False) == "Loading"
    clock.now += 0.3
    assert animation.text(True) == "Loading"


def test_pagination_text_for_each_status() -> None:
    source = ActivitySource()
    feed = ActivityFeed(source)
    assert pagination_text(feed.view(), "Loading ..") == "Loading .."

    source.publish([])
    assert pagination_text(feed.view(), "Loading") == EMPTY_FEED_MESSAGE

    source.publish(make_feed_activities())
    assert pagination_text(feed.set_page(2), "Loading") == "Page 2 of 3"


def test_activities_frame_columns() -> None:
    frame = activities_frame(
        [
            make_activity(ActivityType.MINTING, 0, amount=5, txhash="0xabc"),
            make_activity(ActivityType.SALES, 1, premium=0.2),
        ]
    )
    assert list(frame["Action"]) == ["Minted Contracts", "Sold Contracts"]
    assert {"Date", "Amount", "Txhash", "Premium"} <= set(frame.columns)


def test_render_desktop_and_mobile() -> None:
    activities = [make_activity(ActivityType.SALES, 0, amount=3)]
    assert "Sold Contracts" in render_desktop(activities)
    assert render_desktop([]) == ""
    assert render_mobile(activities) == "Sold Contracts · 2021-06-01 12:00 UTC · 3"


def test_feed_renderer_outputs_on_change() -> None:
    source = ActivitySource(make_feed_activities())
    feed = ActivityFeed(source, view_state=ViewState(page=3))
    out: List[str] = []
    renderer = FeedRenderer(feed, width=375, output=out.append)
    renderer.attach()

    feed.view()
    assert len(out) == 1
    assert out[0].splitlines()[0].startswith("Sold Contracts")
    assert out[0].endswith("Page 3 of 3")

    renderer.detach()
    feed.set_page(1)
    assert len(out) == 1


def test_feed_renderer_animates_loading_text_until_loaded() -> None:
    source = ActivitySource()
    feed = ActivityFeed(source)
    out: List[str] = []
    advanced = threading.Event()

    def collect(text: str) -> None:
        out.append(text)
        if text.endswith("Loading ."):
            advanced.set()

    renderer = FeedRenderer(
        feed, width=375, output=collect, animation=LoadingTextAnimation(interval_ms=10)
    )
    renderer.attach()
    feed.view()
    assert out[0] == "Loading"
    assert advanced.wait(timeout=5)

    source.publish(make_feed_activities())
    feed.view()
    assert any(text.endswith("Page 1 of 3") for text in out)

    time.sleep(0.05)
    rendered = len(out)
    time.sleep(0.05)
    assert len(out) == rendered
    renderer.detach()


def test_feed_renderer_stops_ticking_when_detached() -> None:
    feed = ActivityFeed(ActivitySource())
    out: List[str] = []
    renderer = FeedRenderer(
        feed, width=375, output=out.append, animation=LoadingTextAnimation(interval_ms=10)
    )
    renderer.attach()
    feed.view()
    renderer.detach()

    time.sleep(0.05)
    rendered = len(out)
    time.sleep(0.05)
    assert len(out) == rendered
