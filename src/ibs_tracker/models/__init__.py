"""Data models for the IBS tracker."""

from .chart import ChartDataPoint
from .log import (
    LOG_LIST_ADAPTER,
    LOG_TYPES,
    BristolType,
    IntakeLog,
    LogEntry,
    StressLog,
    SymptomLog,
)

__all__ = [
    "LogEntry",
    "SymptomLog",
    "IntakeLog",
    "StressLog",
    "BristolType",
    "ChartDataPoint",
    "LOG_LIST_ADAPTER",
    "LOG_TYPES",
]
