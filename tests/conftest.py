"""Shared fixtures."""

from datetime import datetime

import pytest

from ibs_tracker.services.repository import LogRepository
from ibs_tracker.services.store import KeyValueStore
from ibs_tracker.utils.config import get_settings
from ibs_tracker.utils.dates import to_timestamp


def ms(*args) -> int:
    """Epoch milliseconds for a local datetime."""
    return to_timestamp(datetime(*args))


class FakeClock:
    """Controllable replacement for now_ms."""

    def __init__(self, timestamp: int):
        self.timestamp = timestamp

    def __call__(self) -> int:
        return self.timestamp

    def set(self, *args) -> None:
        self.timestamp = ms(*args)


@pytest.fixture()
def settings(tmp_path, monkeypatch):
    monkeypatch.setenv("IBS_TRACKER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("IBS_TRACKER_EXPORT_DIR", str(tmp_path / "exports"))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture()
def store(settings):
    with KeyValueStore(settings.store_path) as kv:
        yield kv


@pytest.fixture()
def clock():
    return FakeClock(ms(2024, 1, 1, 9, 0))


@pytest.fixture()
def repository(store, settings, clock):
    return LogRepository.from_store(store, settings=settings, clock=clock)
