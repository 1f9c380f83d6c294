"""Time Processors

Slot parsing, calendar helpers and interval extraction for forecast queries.
"""

from .calendar_helpers import DAY, HOUR, is_today, is_tomorrow, start_of_day
from .clock import FrozenClock, SystemClock
from .interval_extractor import FORECAST_DAYS_LIMIT, IntervalExtractor, Limits, TimeInterval
from .time_slots import (
    Grain,
    InstantTimeSlot,
    TimeIntervalSlot,
    TimeSlot,
    parse_time_slot,
    parse_time_slots
)

__all__ = [
    "DAY",
    "HOUR",
    "FORECAST_DAYS_LIMIT",
    "is_today",
    "is_tomorrow",
    "start_of_day",
    "FrozenClock",
    "SystemClock",
    "IntervalExtractor",
    "Limits",
    "TimeInterval",
    "Grain",
    "InstantTimeSlot",
    "TimeIntervalSlot",
    "TimeSlot",
    "parse_time_slot",
    "parse_time_slots"
]
