"""Daily stress reminder."""

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from ..utils.config import Settings, get_settings
from ..utils.dates import format_day_marker
from .repository import LogRepository
from .store import KeyValueStore, PersistedValue

logger = logging.getLogger(__name__)

REMINDER_TITLE = "IBS Tracker Reminder"
REMINDER_BODY = "Don't forget to log your stress level for today!"

Notifier = Callable[[str, str], None]


def log_notifier(title: str, body: str) -> None:
    logger.info("%s: %s", title, body)


class ReminderService:
    """
    Reminds the user once per day, in the evening, to log their stress level.

    The date of the last reminder is persisted so restarts don't repeat it.
    """

    def __init__(
        self,
        repository: LogRepository,
        marker: PersistedValue[Optional[str]],
        settings: Optional[Settings] = None,
        notifier: Notifier = log_notifier,
    ):
        self.repository = repository
        self.marker = marker
        self.settings = settings or get_settings()
        self.notifier = notifier

    @classmethod
    def from_store(
        cls,
        store: KeyValueStore,
        repository: LogRepository,
        settings: Optional[Settings] = None,
        notifier: Notifier = log_notifier,
    ) -> "ReminderService":
        settings = settings or get_settings()
        marker = PersistedValue(store, settings.notification_key, None)
        return cls(repository, marker, settings=settings, notifier=notifier)

    def tick(self, now: Optional[datetime] = None) -> bool:
        """Run one check. Returns whether a reminder was sent."""
        now = now or datetime.now()
        today = format_day_marker(now)

        # Entries and the marker may have been written by another process
        self.repository.reload()
        self.marker.reload()

        logged_today = self.repository.stress_logged_today(now)

        if not logged_today and self.marker.value and self.marker.value != today:
            logger.info("Day changed, resetting stress reminder marker")
            self.marker.set(None)

        if not self.settings.notifications_enabled:
            return False
        if now.hour < self.settings.reminder_hour or logged_today:
            return False
        if self.marker.value == today:
            return False

        self.notifier(REMINDER_TITLE, REMINDER_BODY)
        self.marker.set(today)
        logger.info("Sent stress reminder for %s", today)
        return True

    def watch(
        self,
        max_ticks: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Tick every `reminder_interval_minutes` until interrupted."""
        interval = self.settings.reminder_interval_minutes * 60
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            self.tick()
            ticks += 1
            if max_ticks is None or ticks < max_ticks:
                sleep(interval)
