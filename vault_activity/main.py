"""Command line entry point: print one page of a vault's activity feed."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .activity_types import parse_activity_filter, parse_sort_by
from .api import load_activities_file
from .config import DESKTOP_MIN_WIDTH, VAULT_OPTIONS
from .errors import ActivityFetchError, InvalidViewStateError
from .feed import ActivityFeed
from .models import ViewState
from .presentation import FeedRenderer
from .source import ActivitySource, VaultActivitySource

LOGGER = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show vault activity")
    parser.add_argument(
        "--vault",
        default=VAULT_OPTIONS[0],
        help=f"Vault to load (default: {VAULT_OPTIONS[0]})",
    )
    parser.add_argument(
        "--input",
        help="Read activities from a JSON file instead of the activity API",
    )
    parser.add_argument(
        "--filter",
        default="all activity",
        help="all activity, minting or sales (default: all activity)",
    )
    parser.add_argument(
        "--sort",
        default="latest first",
        help="latest first or oldest first (default: latest first)",
    )
    parser.add_argument("--page", type=int, default=1, help="Page to show (1-based)")
    parser.add_argument(
        "--width",
        type=int,
        default=DESKTOP_MIN_WIDTH + 1,
        help="Viewport width in pixels; selects the desktop or mobile layout",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _build_source(args: argparse.Namespace) -> ActivitySource:
    if args.input:
        return ActivitySource(load_activities_file(args.input))
    source = VaultActivitySource(args.vault)
    source.refresh()
    return source


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    _setup_logging(args.verbose)

    try:
        view_state = ViewState(
            activity_filter=parse_activity_filter(args.filter),
            sort_by=parse_sort_by(args.sort),
            page=args.page,
        )
    except InvalidViewStateError as exc:
        LOGGER.error("%s", exc)
        return 2

    try:
        source = _build_source(args)
    except ActivityFetchError as exc:
        LOGGER.error("Failed to load activities: %s", exc)
        return 1

    snapshot = source.snapshot()
    if snapshot.last_error:
        LOGGER.warning("Showing last known activity: %s", snapshot.last_error)

    feed = ActivityFeed(source, view_state=view_state)
    renderer = FeedRenderer(feed, width=args.width)
    view = feed.view()
    if view.page != args.page:
        LOGGER.info("Requested page %d is out of range; showing page %d", args.page, view.page)
    renderer.render(view)
    return 0
