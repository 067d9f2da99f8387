"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable activity factories for the
pipeline, feed and presentation tests.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from vault_activity.models import Activity, ActivityType


BASE_DATE = datetime(2021, 6, 1, 12, 0, tzinfo=timezone.utc)


# --- Factory helpers -------------------------------------------------
def make_activity(activity_type=ActivityType.SALES, day=0, **payload):
    return Activity(
        type=activity_type,
        date=BASE_DATE + timedelta(days=day),
        payload=payload,
    )


def make_feed_activities():
    """13 activities, one per day; days 2 and 9 are mints, the rest sales."""
    activities = []
    for day in range(13):
        activity_type = ActivityType.MINTING if day in (2, 9) else ActivityType.SALES
        activities.append(make_activity(activity_type, day, id=f"act-{day}"))
    return activities


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def feed_activities():
    return make_feed_activities()


@pytest.fixture
def activity_rows():
    return [
        {"type": "minting", "date": "2021-06-01T12:00:00Z", "amount": 10, "txhash": "0x1"},
        {"type": "sales", "timestamp": 1622635200, "premium": 0.4, "txhash": "0x2"},
        {"type": "Sale", "date": "2021-06-03T12:00:00", "amount": 3},
    ]
