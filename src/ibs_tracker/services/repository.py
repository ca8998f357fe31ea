"""Log entry repository."""

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional
from uuid import uuid4

from ..models.log import LOG_LIST_ADAPTER, LogEntry, LogType
from ..utils.config import Settings, get_settings
from ..utils.dates import is_same_local_day, now_ms, to_local_datetime
from ..utils.exceptions import EntryNotFoundError, EntryTypeMismatchError
from .store import KeyValueStore, PersistedValue

logger = logging.getLogger(__name__)


def sort_desc(entries: Iterable[LogEntry]) -> list[LogEntry]:
    """Newest first."""
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)


def sort_asc(entries: Iterable[LogEntry]) -> list[LogEntry]:
    """Oldest first."""
    return sorted(entries, key=lambda e: e.timestamp)


class LogRepository:
    """
    CRUD operations over the persisted log collection.

    Every mutation replaces the whole persisted collection, so a write either
    lands completely or not at all.
    """

    def __init__(
        self,
        logs: PersistedValue[list[LogEntry]],
        clock: Callable[[], int] = now_ms,
    ):
        self._logs = logs
        self.clock = clock

    @classmethod
    def from_store(
        cls,
        store: KeyValueStore,
        settings: Optional[Settings] = None,
        clock: Callable[[], int] = now_ms,
    ) -> "LogRepository":
        """Create a repository over the log collection key of a store."""
        settings = settings or get_settings()
        logs = PersistedValue(store, settings.logs_key, [], LOG_LIST_ADAPTER)
        return cls(logs, clock=clock)

    def reload(self) -> None:
        """Re-read the collection from the store."""
        self._logs.reload()

    def all(self) -> list[LogEntry]:
        """All entries in storage order."""
        return list(self._logs.value)

    def sorted_desc(self) -> list[LogEntry]:
        return sort_desc(self._logs.value)

    def sorted_asc(self) -> list[LogEntry]:
        return sort_asc(self._logs.value)

    def get(self, entry_id: str) -> Optional[LogEntry]:
        """Get an entry by id."""
        for entry in self._logs.value:
            if entry.id == entry_id:
                return entry
        return None

    def _new_id(self) -> str:
        taken = {entry.id for entry in self._logs.value}
        new_id = str(uuid4())
        while new_id in taken:
            new_id = str(uuid4())
        return new_id

    def create(self, draft: LogEntry) -> LogEntry:
        """
        Add a new entry.

        The draft's id and timestamp are always replaced with a fresh id and
        the current time.
        """
        entry = draft.model_copy(update={"id": self._new_id(), "timestamp": self.clock()})
        self._logs.set(lambda logs: sort_desc([*logs, entry]))
        logger.debug("Created %s entry %s", entry.type, entry.id)
        return entry

    def update(self, entry: LogEntry) -> LogEntry:
        """Replace the stored entry that has the same id."""
        current = self.get(entry.id)
        if current is None:
            raise EntryNotFoundError(f"No entry with id {entry.id!r}")
        if current.type != entry.type:
            raise EntryTypeMismatchError(
                f"Entry {entry.id!r} is a {current.type} entry, not {entry.type}"
            )

        self._logs.set(
            lambda logs: sort_desc(entry if log.id == entry.id else log for log in logs)
        )
        logger.debug("Updated %s entry %s", entry.type, entry.id)
        return entry

    def delete(self, entry_id: str) -> bool:
        """Delete an entry by id. Unknown ids are ignored."""
        logs = self._logs.value
        remaining = [log for log in logs if log.id != entry_id]
        if len(remaining) == len(logs):
            return False

        self._logs.set(remaining)
        logger.debug("Deleted entry %s", entry_id)
        return True

    def query(self, predicate: Callable[[LogEntry], bool]) -> list[LogEntry]:
        """Entries matching a predicate, newest first."""
        return [entry for entry in self.sorted_desc() if predicate(entry)]

    def latest(self, entry_type: LogType) -> Optional[LogEntry]:
        """The most recent entry of a type."""
        matches = self.query(lambda e: e.type == entry_type)
        return matches[0] if matches else None

    def stress_logged_today(self, now: Optional[datetime] = None) -> bool:
        """Whether the most recent stress entry falls on today's local date."""
        now = now or to_local_datetime(self.clock())
        last_stress = self.latest("stress")
        if last_stress is None:
            return False
        return is_same_local_day(last_stress.timestamp, now)
