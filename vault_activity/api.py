"""HTTP access to the vault activity API.

Fetches the raw activity rows for one vault and normalises them into
:class:`~vault_activity.models.Activity` records. Malformed rows are skipped
with a warning rather than failing the whole refresh.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

import requests
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .activity_types import parse_activity_type
from .config import (
    ACTIVITY_BACKOFF_MAX_SECONDS,
    ACTIVITY_MAX_RETRIES,
    HTTP_POOL_CONNECTIONS,
    HTTP_POOL_MAXSIZE,
    REQUEST_TIMEOUT,
    VAULT_ACTIVITY_API_URL,
)
from .errors import ActivityFetchError
from .models import Activity
from .utils import coerce_datetime

LOGGER = logging.getLogger(__name__)

_DATE_KEYS = ("date", "timestamp")


def _build_retry() -> Retry:
    return Retry(
        total=3,
        backoff_factor=1.0,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=["GET"],
    )


def create_session() -> Session:
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=HTTP_POOL_CONNECTIONS,
        pool_maxsize=HTTP_POOL_MAXSIZE,
        max_retries=_build_retry(),
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Accept-Encoding": "gzip, deflate",
            "Accept": "application/json",
        }
    )
    return session


_DEFAULT_SESSION = create_session()


def get_default_session() -> Session:
    """Return the shared activity API session."""

    return _DEFAULT_SESSION


def activity_url(vault_option: str, base_url: str = VAULT_ACTIVITY_API_URL) -> str:
    return f"{base_url.rstrip('/')}/vaults/{vault_option}/activity"


def parse_activity(row: Mapping[str, Any]) -> Activity | None:
    """Build an :class:`Activity` from one API row, ``None`` if unusable."""

    activity_type = parse_activity_type(row.get("type"))
    if activity_type is None:
        return None
    date = None
    for key in _DATE_KEYS:
        if row.get(key) is not None:
            date = coerce_datetime(row.get(key))
            break
    if date is None:
        return None
    payload = {
        key: value for key, value in row.items() if key != "type" and key not in _DATE_KEYS
    }
    return Activity(type=activity_type, date=date, payload=payload)


def parse_activities(rows: Iterable[Any]) -> List[Activity]:
    """Parse API rows, dropping the ones that cannot be interpreted."""

    activities: List[Activity] = []
    skipped = 0
    for row in rows:
        activity = parse_activity(row) if isinstance(row, Mapping) else None
        if activity is None:
            skipped += 1
            continue
        activities.append(activity)
    if skipped:
        LOGGER.warning("Skipped %d malformed activity rows", skipped)
    return activities


def _extract_rows(data: Any) -> List[Any] | None:
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping) and isinstance(data.get("activities"), list):
        return data["activities"]
    return None


def fetch_vault_activities(
    vault_option: str,
    *,
    session: Optional[Session] = None,
    timeout: int = REQUEST_TIMEOUT,
    base_url: str = VAULT_ACTIVITY_API_URL,
) -> List[Activity]:
    """GET the activity list for ``vault_option`` with retry/backoff.

    Raises:
        ActivityFetchError: when the API stays unreachable, keeps answering
            with errors or returns a payload that is not an activity list.
    """

    session = session or get_default_session()
    url = activity_url(vault_option, base_url)
    attempts = 0
    backoff = 1.0
    while True:
        attempts += 1
        try:
            resp = session.get(url, timeout=timeout)
        except requests.RequestException as exc:
            if attempts < ACTIVITY_MAX_RETRIES:
                _log_retry(vault_option, attempts, backoff, exc.__class__.__name__)
                time.sleep(backoff)
                backoff = min(backoff * 2, ACTIVITY_BACKOFF_MAX_SECONDS)
                continue
            raise ActivityFetchError(
                f"Activity request for {vault_option} failed after {attempts} attempts: {exc}"
            ) from exc

        is_html = "text/html" in (resp.headers.get("Content-Type", "").lower())
        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            if attempts < ACTIVITY_MAX_RETRIES and (
                500 <= resp.status_code < 600 or is_html
            ):
                _log_retry(vault_option, attempts, backoff, f"status={resp.status_code}")
                time.sleep(backoff)
                backoff = min(backoff * 2, ACTIVITY_BACKOFF_MAX_SECONDS)
                continue
            raise ActivityFetchError(
                f"Activity request for {vault_option} returned HTTP {resp.status_code}"
            ) from exc

        try:
            data = resp.json()
        except ValueError as exc:
            if attempts < ACTIVITY_MAX_RETRIES:
                _log_retry(vault_option, attempts, backoff, "non-JSON response")
                time.sleep(backoff)
                backoff = min(backoff * 2, ACTIVITY_BACKOFF_MAX_SECONDS)
                continue
            raise ActivityFetchError(
                f"Non-JSON activity response for {vault_option} after {attempts} attempts"
            ) from exc

        rows = _extract_rows(data)
        if rows is None:
            raise ActivityFetchError(
                f"Unexpected activity payload for {vault_option}: {type(data).__name__}"
            )
        activities = parse_activities(rows)
        LOGGER.debug(
            "Fetched %d activities for vault=%s (attempts=%d)",
            len(activities),
            vault_option,
            attempts,
        )
        return activities


def load_activities_file(path: str | Path) -> List[Activity]:
    """Read activities from a JSON file using the API payload shape."""

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ActivityFetchError(f"Cannot read activities from {path}: {exc}") from exc
    rows = _extract_rows(data)
    if rows is None:
        raise ActivityFetchError(f"{path} does not contain an activity list")
    return parse_activities(rows)


def _log_retry(vault_option: str, attempt: int, backoff: float, reason: str) -> None:
    LOGGER.warning(
        "Activity fetch error vault=%s attempt=%s err=%s; backoff %.1fs",
        vault_option,
        attempt,
        reason,
        backoff,
    )


__all__ = [
    "create_session",
    "get_default_session",
    "activity_url",
    "parse_activity",
    "parse_activities",
    "fetch_vault_activities",
    "load_activities_file",
]
