"""Activity source: the latest ``{activities, loading}`` snapshot for a vault.

The source owns the raw activity list and replaces it wholesale on every
refresh. Consumers only ever see immutable :class:`ActivitySnapshot` values,
so a refresh running on a background thread can never mutate a list a feed
is in the middle of reading.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
import logging
import threading
from typing import Callable, Iterable, List, Optional, Tuple

from .api import fetch_vault_activities
from .config import ACTIVITY_POLL_INTERVAL_SECONDS
from .errors import ActivityFetchError
from .models import Activity

LOGGER = logging.getLogger(__name__)

ActivityFetcher = Callable[[str], List[Activity]]
SnapshotListener = Callable[["ActivitySnapshot"], None]


@dataclass(frozen=True, slots=True)
class ActivitySnapshot:
    activities: Tuple[Activity, ...] = ()
    loading: bool = True
    # Bumped whenever ``activities`` is replaced.
    revision: int = 0
    last_error: str | None = None
    fetched_at: datetime | None = None


class ActivitySource:
    """Thread-safe holder for the current activity snapshot."""

    def __init__(self, activities: Optional[Iterable[Activity]] = None) -> None:
        self._lock = threading.Lock()
        self._listeners: List[SnapshotListener] = []
        self._snapshot = ActivitySnapshot()
        if activities is not None:
            self.publish(activities)

    def snapshot(self) -> ActivitySnapshot:
        with self._lock:
            return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot; returns an unsubscribe."""

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def begin_loading(self) -> ActivitySnapshot:
        return self._update(lambda snap: replace(snap, loading=True))

    def publish(self, activities: Iterable[Activity]) -> ActivitySnapshot:
        """Replace the activity list and clear the loading flag."""

        new_activities = tuple(activities)
        return self._update(
            lambda snap: ActivitySnapshot(
                activities=new_activities,
                loading=False,
                revision=snap.revision + 1,
                last_error=None,
                fetched_at=datetime.now(timezone.utc),
            )
        )

    def fail(self, exc: BaseException) -> ActivitySnapshot:
        """Record a failed refresh, keeping the last known activities."""

        return self._update(
            lambda snap: replace(snap, loading=False, last_error=str(exc))
        )

    def _update(
        self, change: Callable[[ActivitySnapshot], ActivitySnapshot]
    ) -> ActivitySnapshot:
        with self._lock:
            self._snapshot = change(self._snapshot)
            snapshot = self._snapshot
            listeners = list(self._listeners)
        for listener in listeners:
            listener(snapshot)
        return snapshot


class VaultActivitySource(ActivitySource):
    """Activity source backed by the vault activity API."""

    def __init__(
        self,
        vault_option: str,
        fetcher: Optional[ActivityFetcher] = None,
    ) -> None:
        super().__init__()
        self.vault_option = vault_option
        self._fetcher = fetcher or fetch_vault_activities
        self._refresh_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._poll_thread: threading.Thread | None = None

    def refresh(self) -> ActivitySnapshot:
        """Fetch the activity list once and publish it.

        Fetch failures are logged and recorded on the snapshot; the previous
        activities stay visible.
        """

        with self._refresh_lock:
            self.begin_loading()
            try:
                activities = self._fetcher(self.vault_option)
            except ActivityFetchError as exc:
                LOGGER.warning(
                    "Activity refresh failed for vault=%s: %s", self.vault_option, exc
                )
                return self.fail(exc)
            snapshot = self.publish(activities)
            LOGGER.info(
                "Loaded %d activities for vault=%s (revision %d)",
                len(snapshot.activities),
                self.vault_option,
                snapshot.revision,
            )
            return snapshot

    def refresh_in_background(self) -> threading.Thread:
        thread = threading.Thread(
            target=self._safe_refresh,
            name=f"vault-activity-{self.vault_option}",
            daemon=True,
        )
        thread.start()
        return thread

    def start_polling(
        self, interval: float = ACTIVITY_POLL_INTERVAL_SECONDS
    ) -> threading.Thread:
        """Refresh now and then every ``interval`` seconds until stopped."""

        if self._poll_thread is not None and self._poll_thread.is_alive():
            return self._poll_thread
        self._stop_event.clear()

        def _loop() -> None:
            self._safe_refresh()
            while not self._stop_event.wait(max(0.0, interval)):
                self._safe_refresh()

        self._poll_thread = threading.Thread(
            target=_loop, name=f"vault-activity-poll-{self.vault_option}", daemon=True
        )
        self._poll_thread.start()
        return self._poll_thread

    def stop_polling(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        thread = self._poll_thread
        if thread is not None:
            thread.join(timeout)
        self._poll_thread = None

    def _safe_refresh(self) -> None:
        try:
            self.refresh()
        except Exception as exc:  # pragma: no cover - defensive logging
            LOGGER.error(
                "Unexpected error refreshing vault=%s: %s",
                self.vault_option,
                exc,
                exc_info=True,
            )
            self.fail(exc)


__all__ = ["ActivitySnapshot", "ActivitySource", "VaultActivitySource"]
