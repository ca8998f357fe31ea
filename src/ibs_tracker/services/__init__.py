"""Business logic services."""

from .charting import build_chart_data, has_enough_data
from .export import export_filename, export_json, write_export
from .logbook import Logbook
from .reminders import ReminderService
from .repository import LogRepository
from .store import KeyValueStore, PersistedValue

__all__ = [
    "KeyValueStore",
    "PersistedValue",
    "LogRepository",
    "Logbook",
    "ReminderService",
    "build_chart_data",
    "has_enough_data",
    "export_json",
    "export_filename",
    "write_export",
]
