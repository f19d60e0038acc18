"""
Snapshot feed.

Subscribers register interest in a mess (optionally a single month) and get
called with freshly computed stats whenever that month's data changes.
A failing subscriber is logged and skipped; it never breaks the write that
triggered the publish or the other subscribers.

Example::

    from apps.settlement.feed import feed, SnapshotFilter

    unsubscribe = feed.subscribe(SnapshotFilter(mess_id='AB12CD'), print)
    ...
    unsubscribe()
"""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Optional

from .calculator import MonthStats
from .periods import Period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotFilter:
    mess_id: str
    period: Optional[Period] = None

    def matches(self, period: Period) -> bool:
        return self.period is None or self.period == period


@dataclass(frozen=True)
class SnapshotUpdate:
    mess_id: str
    period: Period
    stats: Optional[MonthStats]


Callback = Callable[[SnapshotUpdate], None]


class SnapshotFeed:
    def __init__(self):
        self._subscribers = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, snapshot_filter: SnapshotFilter, callback: Callback) -> Callable[[], None]:
        """Register ``callback``; returns a function that removes it again."""
        entry = (snapshot_filter, callback)
        with self._lock:
            self._subscribers[snapshot_filter.mess_id].append(entry)

        def unsubscribe():
            self.unsubscribe(snapshot_filter, callback)

        return unsubscribe

    def unsubscribe(self, snapshot_filter: SnapshotFilter, callback: Callback) -> None:
        with self._lock:
            entries = self._subscribers.get(snapshot_filter.mess_id, [])
            if (snapshot_filter, callback) in entries:
                entries.remove((snapshot_filter, callback))
            if not entries:
                self._subscribers.pop(snapshot_filter.mess_id, None)

    def has_subscribers(self, mess_id: str, period: Optional[Period] = None) -> bool:
        with self._lock:
            entries = list(self._subscribers.get(mess_id, ()))
        if period is None:
            return bool(entries)
        return any(f.matches(period) for f, _ in entries)

    def publish(self, update: SnapshotUpdate) -> int:
        """Deliver ``update`` to matching subscribers; returns how many got it."""
        with self._lock:
            entries = list(self._subscribers.get(update.mess_id, ()))

        delivered = 0
        for snapshot_filter, callback in entries:
            if not snapshot_filter.matches(update.period):
                continue
            try:
                callback(update)
                delivered += 1
            except Exception:
                logger.exception(
                    "Snapshot subscriber %r failed for mess %s %s",
                    callback, update.mess_id, update.period
                )
        return delivered

    def clear(self) -> None:
        with self._lock:
            self._subscribers.clear()


feed = SnapshotFeed()
