"""Shared helpers for web routes."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from ..services.store import KeyValueStore
from ..utils.config import get_settings
from ..utils.dates import format_display, format_for_input, format_short_date

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.filters["display_time"] = format_display
templates.env.filters["input_time"] = format_for_input
templates.env.filters["short_date"] = format_short_date


def open_store() -> KeyValueStore:
    """Get storage instance."""
    return KeyValueStore(get_settings().store_path)
