"""Tests for data models."""

import pytest
from pydantic import ValidationError

from ibs_tracker.models import (
    LOG_LIST_ADAPTER,
    BristolType,
    IntakeLog,
    StressLog,
    SymptomLog,
)
from ibs_tracker.models.log import MODEL_BY_TYPE, LogEntryBase


class TestSymptomLog:
    """Tests for the SymptomLog model."""

    def test_create_symptom(self):
        """Test basic symptom creation."""
        symptom = SymptomLog(
            bowel_movement=BristolType.TYPE4,
            cramps_severity=3,
        )
        assert symptom.type == "symptom"
        assert symptom.bowel_movement == BristolType.TYPE4
        assert symptom.cramps_severity == 3
        assert symptom.bloating_severity is None
        assert symptom.id
        assert isinstance(symptom.timestamp, int)

    def test_record_uses_camel_case_and_omits_unset(self):
        """Test the stored JSON shape."""
        symptom = SymptomLog(id="abc", timestamp=1000, cramps_severity=2, urgency=True)
        assert symptom.to_record() == {
            "id": "abc",
            "timestamp": 1000,
            "type": "symptom",
            "crampsSeverity": 2,
            "urgency": True,
        }

    def test_severity_out_of_range(self):
        """Severities are limited to 0-5."""
        with pytest.raises(ValidationError):
            SymptomLog(cramps_severity=6)

    def test_summary(self):
        """Test human-readable summary."""
        symptom = SymptomLog(
            bowel_movement=BristolType.TYPE6,
            cramps_severity=0,
            bloating_severity=4,
            urgency=True,
        )
        assert symptom.summary() == "BM: Type 6 | Cramps: 0/5 | Bloating: 4/5 | Urgency"

    def test_bristol_description(self):
        """Test Bristol scale labels."""
        assert BristolType.TYPE1.label == "Type 1"
        assert BristolType.TYPE7.description.startswith("Type 7 - Watery")


class TestIntakeLog:
    """Tests for the IntakeLog model."""

    def test_empty_item_rejected(self):
        with pytest.raises(ValidationError):
            IntakeLog(item="")

    def test_summary_with_quantity(self):
        assert IntakeLog(item="Coffee", quantity="1 cup").summary() == "Coffee (1 cup)"
        assert IntakeLog(item="Toast").summary() == "Toast"


class TestStressLog:
    """Tests for the StressLog model."""

    def test_level_required(self):
        with pytest.raises(ValidationError):
            StressLog()

    @pytest.mark.parametrize("level", [-1, 6])
    def test_level_bounds(self, level):
        with pytest.raises(ValidationError):
            StressLog(level=level)

    def test_fractional_timestamp_rejected(self):
        """Timestamps must be whole milliseconds."""
        with pytest.raises(ValidationError):
            StressLog(level=1, timestamp=1.5)


class TestLogEntryUnion:
    """Tests for parsing stored collections."""

    def test_parses_each_variant(self):
        records = [
            {"id": "1", "timestamp": 1, "type": "symptom", "bloatingSeverity": 2},
            {"id": "2", "timestamp": 2, "type": "intake", "item": "Tea"},
            {"id": "3", "timestamp": 3, "type": "stress", "level": 4, "notes": "work"},
        ]
        entries = LOG_LIST_ADAPTER.validate_python(records)

        assert isinstance(entries[0], SymptomLog)
        assert entries[0].bloating_severity == 2
        assert isinstance(entries[1], IntakeLog)
        assert isinstance(entries[2], StressLog)
        assert entries[2].notes == "work"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            LOG_LIST_ADAPTER.validate_python([{"id": "1", "timestamp": 1, "type": "sleep"}])

    def test_dump_round_trip(self):
        entries = [StressLog(id="s", timestamp=5, level=2)]
        dumped = LOG_LIST_ADAPTER.dump_python(entries, mode="json", by_alias=True, exclude_none=True)
        assert dumped == [{"id": "s", "timestamp": 5, "type": "stress", "level": 2}]
        assert LOG_LIST_ADAPTER.validate_python(dumped) == entries

    @pytest.mark.parametrize("log_type", ["symptom", "intake", "stress"])
    def test_every_type_has_summary(self, log_type):
        model = MODEL_BY_TYPE[log_type]
        assert model.summary is not LogEntryBase.summary
