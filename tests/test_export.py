"""Tests for JSON export."""

import json
from datetime import datetime, timezone

import pytest

from conftest import ms

from ibs_tracker.models import IntakeLog, StressLog, SymptomLog
from ibs_tracker.services.export import export_filename, export_json, write_export
from ibs_tracker.utils.exceptions import EmptyExportError


@pytest.fixture()
def entries():
    return [
        StressLog(id="c", timestamp=ms(2024, 1, 3, 9, 0), level=2),
        IntakeLog(id="a", timestamp=ms(2024, 1, 1, 9, 0), item="Coffee", quantity="1 cup"),
        SymptomLog(id="b", timestamp=ms(2024, 1, 2, 9, 0), cramps_severity=4, urgency=True),
    ]


def test_empty_export_raises():
    with pytest.raises(EmptyExportError, match="No data to export"):
        export_json([])


def test_empty_export_writes_nothing(tmp_path):
    with pytest.raises(EmptyExportError):
        write_export([], tmp_path / "out", "ibs_tracker_data")
    assert not (tmp_path / "out").exists()


def test_entries_oldest_first(entries):
    records = json.loads(export_json(entries))

    assert [r["id"] for r in records] == ["a", "b", "c"]
    timestamps = [r["timestamp"] for r in records]
    assert timestamps == sorted(timestamps)


def test_stable_field_order(entries):
    records = json.loads(export_json(entries))

    assert list(records[0]) == ["id", "timestamp", "type", "item", "quantity"]
    assert list(records[1]) == ["id", "timestamp", "type", "crampsSeverity", "urgency"]
    assert list(records[2]) == ["id", "timestamp", "type", "level"]


def test_pretty_printed(entries):
    payload = export_json(entries)
    assert payload.startswith("[\n  {\n    \"id\"")


def test_export_does_not_reorder_input(entries):
    before = list(entries)
    export_json(entries)
    assert entries == before


def test_filename_uses_utc_date():
    moment = datetime(2024, 3, 5, 23, 30, tzinfo=timezone.utc)
    assert export_filename("ibs_tracker_data", moment) == "ibs_tracker_data_2024-03-05.json"


def test_write_export(tmp_path, entries):
    moment = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)

    path = write_export(entries, tmp_path, "ibs_tracker_data", moment)

    assert path == tmp_path / "ibs_tracker_data_2024-03-05.json"
    assert json.loads(path.read_text(encoding="utf-8"))[0]["item"] == "Coffee"


def test_export_leaves_store_untouched(repository, tmp_path):
    repository.create(IntakeLog(item="Tea"))
    before = repository.all()

    write_export(repository.all(), tmp_path, "ibs_tracker_data")

    assert repository.all() == before
