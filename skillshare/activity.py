"""Activity log — bounded, newest-first trace of user operations."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from skillshare.models import ActivityLogEntry

DEFAULT_LIMIT = 10


def _display_time() -> str:
    return datetime.now().strftime("%H:%M:%S")


class ActivityLog:
    """In-memory log of the most recent operations. Not persisted."""

    def __init__(self, limit: int = DEFAULT_LIMIT, clock: Callable[[], str] = _display_time):
        self.limit = limit
        self._clock = clock
        self._entries: list[ActivityLogEntry] = []

    @property
    def entries(self) -> tuple[ActivityLogEntry, ...]:
        return tuple(self._entries)

    def record(self, text: str) -> ActivityLogEntry:
        entry = ActivityLogEntry(timestamp=self._clock(), text=text)
        self._entries = [entry, *self._entries][: self.limit]
        return entry

    def __len__(self) -> int:
        return len(self._entries)
