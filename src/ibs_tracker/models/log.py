"""Log entry models."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from ..utils.dates import now_ms, to_local_datetime

LogType = Literal["symptom", "intake", "stress"]
LOG_TYPES: tuple[str, ...] = ("symptom", "intake", "stress")

SEVERITY_LEVELS = list(range(6))  # 0-5 scale


class BristolType(str, Enum):
    """Bristol stool scale categories."""
    TYPE1 = "type1"
    TYPE2 = "type2"
    TYPE3 = "type3"
    TYPE4 = "type4"
    TYPE5 = "type5"
    TYPE6 = "type6"
    TYPE7 = "type7"

    @property
    def label(self) -> str:
        """Short label, e.g. 'Type 4'."""
        return self.value.replace("type", "Type ")

    @property
    def description(self) -> str:
        """Descriptive label shown in forms."""
        return BRISTOL_DESCRIPTIONS[self]


BRISTOL_DESCRIPTIONS: dict[BristolType, str] = {
    BristolType.TYPE1: "Type 1 - Separate hard lumps, like nuts (hard to pass)",
    BristolType.TYPE2: "Type 2 - Sausage-shaped, but lumpy",
    BristolType.TYPE3: "Type 3 - Like a sausage but with cracks on its surface",
    BristolType.TYPE4: "Type 4 - Like a sausage or snake, smooth and soft",
    BristolType.TYPE5: "Type 5 - Soft blobs with clear-cut edges (passed easily)",
    BristolType.TYPE6: "Type 6 - Fluffy pieces with ragged edges, a mushy stool",
    BristolType.TYPE7: "Type 7 - Watery, no solid pieces (entirely liquid)",
}


class LogEntryBase(BaseModel):
    """Fields shared by every log entry."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: int = Field(default_factory=now_ms)  # epoch milliseconds

    @property
    def logged_at(self) -> datetime:
        """Local datetime of the entry."""
        return to_local_datetime(self.timestamp)

    def to_record(self) -> dict:
        """JSON-ready dict with camelCase keys and unset fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def summary(self) -> str:
        """One-line description of the entry. Each entry type overrides this."""
        raise NotImplementedError


class SymptomLog(LogEntryBase):
    """Bowel movement, cramps, bloating and urgency."""

    type: Literal["symptom"] = "symptom"
    bowel_movement: Optional[BristolType] = None
    cramps_severity: Optional[int] = Field(default=None, ge=0, le=5)
    bloating_severity: Optional[int] = Field(default=None, ge=0, le=5)
    urgency: Optional[bool] = None
    notes: Optional[str] = None

    def summary(self) -> str:
        parts = []
        if self.bowel_movement:
            parts.append(f"BM: {self.bowel_movement.label}")
        if self.cramps_severity is not None:
            parts.append(f"Cramps: {self.cramps_severity}/5")
        if self.bloating_severity is not None:
            parts.append(f"Bloating: {self.bloating_severity}/5")
        if self.urgency:
            parts.append("Urgency")
        return " | ".join(parts)


class IntakeLog(LogEntryBase):
    """A food or drink item."""

    type: Literal["intake"] = "intake"
    item: str = Field(min_length=1)
    quantity: Optional[str] = None
    notes: Optional[str] = None

    def summary(self) -> str:
        if self.quantity:
            return f"{self.item} ({self.quantity})"
        return self.item


class StressLog(LogEntryBase):
    """Daily stress level."""

    type: Literal["stress"] = "stress"
    level: int = Field(ge=0, le=5)
    notes: Optional[str] = None

    def summary(self) -> str:
        return f"Stress Level: {self.level}/5"


LogEntry = Annotated[
    Union[SymptomLog, IntakeLog, StressLog],
    Field(discriminator="type"),
]

LOG_LIST_ADAPTER: TypeAdapter[list[LogEntry]] = TypeAdapter(list[LogEntry])

MODEL_BY_TYPE: dict[str, type[LogEntryBase]] = {
    "symptom": SymptomLog,
    "intake": IntakeLog,
    "stress": StressLog,
}
