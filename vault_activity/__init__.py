"""Vault activity feed package."""

from .errors import ActivityFetchError, InvalidViewStateError, VaultActivityError
from .feed import ActivityFeed, FeedStatus, FeedView
from .models import Activity, ActivityFilter, ActivityType, SortBy, ViewState
from .pipeline import (
    filter_activities,
    paginate,
    reconcile_page,
    run_pipeline,
    sort_activities,
    total_pages,
)
from .source import ActivitySnapshot, ActivitySource, VaultActivitySource

__all__ = [
    "Activity",
    "ActivityFilter",
    "ActivityType",
    "SortBy",
    "ViewState",
    "ActivityFeed",
    "FeedStatus",
    "FeedView",
    "ActivitySnapshot",
    "ActivitySource",
    "VaultActivitySource",
    "filter_activities",
    "sort_activities",
    "reconcile_page",
    "paginate",
    "total_pages",
    "run_pipeline",
    "VaultActivityError",
    "ActivityFetchError",
    "InvalidViewStateError",
]
