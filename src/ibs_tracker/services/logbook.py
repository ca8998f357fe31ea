"""Save handlers shared by the CLI and web forms.

Forms submit raw field values. A submission that carries an entry id edits
that entry; otherwise a new entry is created.
"""

from typing import Any, Optional, Union

from pydantic import ValidationError

from ..models.log import BristolType, IntakeLog, LogEntry, StressLog, SymptomLog
from ..utils.dates import parse_input_timestamp
from ..utils.exceptions import (
    EntryNotFoundError,
    EntryValidationError,
    StressAlreadyLoggedError,
)
from .repository import LogRepository


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class Logbook:
    """Validates form submissions and routes them to the repository."""

    def __init__(self, repository: LogRepository):
        self.repository = repository

    def save_symptom(
        self,
        *,
        entry_id: Optional[str] = None,
        when: Optional[str] = None,
        bowel_movement: Optional[Union[BristolType, str]] = None,
        cramps_severity: int = 0,
        bloating_severity: int = 0,
        urgency: bool = False,
        notes: Optional[str] = None,
    ) -> SymptomLog:
        """Create or edit a symptom entry. Zero severities count as not recorded."""
        fields = {
            "bowel_movement": bowel_movement or None,
            "cramps_severity": cramps_severity if cramps_severity and cramps_severity > 0 else None,
            "bloating_severity": bloating_severity if bloating_severity and bloating_severity > 0 else None,
            "urgency": True if urgency else None,
            "notes": _clean_text(notes),
        }
        return self._save(SymptomLog, entry_id, when, fields)

    def save_intake(
        self,
        *,
        item: Optional[str],
        entry_id: Optional[str] = None,
        when: Optional[str] = None,
        quantity: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> IntakeLog:
        """Create or edit an intake entry. The item must not be blank."""
        item = _clean_text(item)
        if not item:
            raise EntryValidationError("Please enter the food or drink item.")

        fields = {
            "item": item,
            "quantity": _clean_text(quantity),
            "notes": _clean_text(notes),
        }
        return self._save(IntakeLog, entry_id, when, fields)

    def save_stress(
        self,
        *,
        level: int,
        entry_id: Optional[str] = None,
        when: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> StressLog:
        """
        Create or edit a stress entry.

        Only one stress entry can be created per local calendar day; editing
        an existing one is always allowed.
        """
        if not entry_id and self.repository.stress_logged_today():
            raise StressAlreadyLoggedError("You have already logged your stress level for today.")

        fields = {"level": level, "notes": _clean_text(notes)}
        return self._save(StressLog, entry_id, when, fields)

    def delete(self, entry_id: str) -> bool:
        return self.repository.delete(entry_id)

    def _save(
        self,
        model: type,
        entry_id: Optional[str],
        when: Optional[str],
        fields: dict[str, Any],
    ) -> LogEntry:
        if not entry_id:
            return self.repository.create(self._build(model, fields))

        existing = self.repository.get(entry_id)
        if existing is None:
            raise EntryNotFoundError(f"No entry with id {entry_id!r}")

        # An omitted date/time keeps the stored one
        timestamp = parse_input_timestamp(when) if when is not None else existing.timestamp
        entry = self._build(model, {"id": entry_id, "timestamp": timestamp, **fields})
        return self.repository.update(entry)

    @staticmethod
    def _build(model: type, fields: dict[str, Any]) -> LogEntry:
        try:
            return model(**fields)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            raise EntryValidationError(problems) from exc
