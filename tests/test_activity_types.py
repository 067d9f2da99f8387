"""Tests for activity type and view selection parsing helpers."""

from __future__ import annotations

import pytest

from vault_activity.activity_types import (
    normalize_label,
    parse_activity_filter,
    parse_activity_type,
    parse_sort_by,
)
from vault_activity.errors import InvalidViewStateError
from vault_activity.models import ActivityFilter, ActivityType, SortBy


def test_normalize_label_handles_separators_and_case() -> None:
    assert normalize_label("  Latest-First ") == "latest first"
    assert normalize_label("oldest_first") == "oldest first"
    assert normalize_label("   ") is None
    assert normalize_label(None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("minting", ActivityType.MINTING),
        ("Mint", ActivityType.MINTING),
        ("SALES", ActivityType.SALES),
        ("transfer", ActivityType.TRANSFERS),
        ("airdrop", None),
        (None, None),
    ],
)
def test_parse_activity_type(raw, expected) -> None:
    assert parse_activity_type(raw) is expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, ActivityFilter.ALL),
        ("all", ActivityFilter.ALL),
        ("All Activity", ActivityFilter.ALL),
        ("minting", ActivityFilter.MINTING),
        ("sale", ActivityFilter.SALES),
    ],
)
def test_parse_activity_filter(raw, expected) -> None:
    assert parse_activity_filter(raw) is expected


def test_parse_activity_filter_rejects_unknown() -> None:
    with pytest.raises(InvalidViewStateError):
        parse_activity_filter("transfers")


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, SortBy.LATEST_FIRST),
        ("latest-first", SortBy.LATEST_FIRST),
        ("Oldest First", SortBy.OLDEST_FIRST),
        ("oldest", SortBy.OLDEST_FIRST),
    ],
)
def test_parse_sort_by(raw, expected) -> None:
    assert parse_sort_by(raw) is expected


def test_parse_sort_by_rejects_unknown() -> None:
    with pytest.raises(InvalidViewStateError):
        parse_sort_by("random")


def test_filter_bound_types() -> None:
    assert ActivityFilter.ALL.activity_type is None
    assert ActivityFilter.MINTING.activity_type is ActivityType.MINTING
    assert ActivityFilter.SALES.activity_type is ActivityType.SALES
