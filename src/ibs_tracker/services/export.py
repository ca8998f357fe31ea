"""JSON export of the full log collection."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from ..models.log import LogEntry
from ..utils.exceptions import EmptyExportError
from .repository import sort_asc


def export_json(entries: Sequence[LogEntry]) -> str:
    """
    Serialize entries as a pretty-printed JSON array, oldest first.

    Raises:
        EmptyExportError: if there are no entries.
    """
    if not entries:
        raise EmptyExportError("No data to export.")

    records = [entry.to_record() for entry in sort_asc(entries)]
    return json.dumps(records, indent=2, ensure_ascii=False)


def export_filename(prefix: str, moment: Optional[datetime] = None) -> str:
    """File name for an export made at `moment`, dated in UTC."""
    moment = moment or datetime.now(timezone.utc)
    return f"{prefix}_{moment.astimezone(timezone.utc):%Y-%m-%d}.json"


def write_export(
    entries: Sequence[LogEntry],
    directory: Path,
    prefix: str,
    moment: Optional[datetime] = None,
) -> Path:
    """Write the export file into `directory` and return its path."""
    payload = export_json(entries)

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(prefix, moment)
    path.write_text(payload, encoding="utf-8")
    return path
