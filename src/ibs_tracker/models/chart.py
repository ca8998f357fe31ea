"""Chart data models."""

from typing import Optional

from pydantic import BaseModel


class ChartDataPoint(BaseModel):
    """One day of chart data. A None channel means nothing was recorded."""

    date: str  # YYYY-MM-DD
    cramps: Optional[int] = None
    bloating: Optional[int] = None
    stress: Optional[int] = None
