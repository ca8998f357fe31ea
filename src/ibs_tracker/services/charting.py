"""Daily chart aggregation for symptom and stress trends."""

from typing import Iterable, Optional, Sequence

import pandas as pd

from ..models.chart import ChartDataPoint
from ..models.log import LogEntry
from ..utils.dates import format_date_string

CHANNELS = ("cramps", "bloating", "stress")

# A line needs at least two days
MIN_CHART_POINTS = 2


def _entry_to_row(entry: LogEntry) -> dict:
    """Convert a log entry to a flat dictionary for the DataFrame."""
    row = {
        "timestamp": entry.timestamp,
        "date": format_date_string(entry.timestamp),
        "cramps": None,
        "bloating": None,
        "stress": None,
    }

    if entry.type == "symptom":
        row["cramps"] = entry.cramps_severity
        row["bloating"] = entry.bloating_severity
    elif entry.type == "stress":
        row["stress"] = entry.level

    return row


def build_dataframe(entries: Iterable[LogEntry]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per entry, oldest first.

    Channels an entry does not record are NaN.
    """
    rows = [_entry_to_row(entry) for entry in entries]
    df = pd.DataFrame(rows, columns=["timestamp", "date", *CHANNELS])
    df[list(CHANNELS)] = df[list(CHANNELS)].astype("float64")
    return df.sort_values("timestamp", kind="stable").reset_index(drop=True)


def _channel_value(value) -> Optional[int]:
    if pd.isna(value):
        return None
    return int(value)


def build_chart_data(entries: Iterable[LogEntry]) -> list[ChartDataPoint]:
    """
    Aggregate entries into one point per local calendar date, ascending.

    Cramps and bloating take the day's maximum recorded severity. Stress
    takes the day's last stress level in timestamp order. A channel with
    nothing recorded that day stays None; zero is a real value.
    """
    df = build_dataframe(entries)
    if df.empty:
        return []

    # max and last both skip NaN, so non-contributing entries are ignored
    daily = df.groupby("date", sort=True).agg(
        cramps=("cramps", "max"),
        bloating=("bloating", "max"),
        stress=("stress", "last"),
    )

    return [
        ChartDataPoint(
            date=str(day),
            cramps=_channel_value(row["cramps"]),
            bloating=_channel_value(row["bloating"]),
            stress=_channel_value(row["stress"]),
        )
        for day, row in daily.iterrows()
    ]


def has_enough_data(points: Sequence[ChartDataPoint]) -> bool:
    """Whether there are enough days to draw a trend line."""
    return len(points) >= MIN_CHART_POINTS


def sparkline(values: Sequence[Optional[int]], vmin: float = 0.0, vmax: float = 5.0) -> str:
    """Render values as block characters. None renders as a blank."""
    blocks = "▁▂▃▄▅▆▇█"
    span = max(1e-9, vmax - vmin)
    out = []
    for v in values:
        if v is None:
            out.append(" ")
            continue
        x = (v - vmin) / span
        idx = int(round(x * (len(blocks) - 1)))
        idx = max(0, min(len(blocks) - 1, idx))
        out.append(blocks[idx])
    return "".join(out)
