"""Data Processing Module

Processors that turn NLU time slots into forecast intervals.
"""

from .core.interval_extractor import IntervalExtractor, TimeInterval
from .core.time_slots import parse_time_slot, parse_time_slots

__all__ = [
    "IntervalExtractor",
    "TimeInterval",
    "parse_time_slot",
    "parse_time_slots"
]
