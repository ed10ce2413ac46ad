"""Enumerations for domain models."""

from datetime import timedelta
from enum import Enum


class TimeWindow(str, Enum):
    """Lookback windows for portfolio performance."""

    DAY = "24h"
    WEEK = "7d"
    MONTH = "30d"

    @property
    def offset(self) -> timedelta:
        """Length of the lookback window."""
        return _WINDOW_OFFSETS[self]


_WINDOW_OFFSETS = {
    TimeWindow.DAY: timedelta(hours=24),
    TimeWindow.WEEK: timedelta(days=7),
    TimeWindow.MONTH: timedelta(days=30),
}

# Report order
PERFORMANCE_WINDOWS = (TimeWindow.DAY, TimeWindow.WEEK, TimeWindow.MONTH)
