"""Interval Extractor for Weather Forecast Queries

Turns the time slots of an utterance into the merged, chronologically sorted
intervals a forecast lookup has to cover, and reports whether any of them
reaches outside the supported forecast window.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from operator import attrgetter
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple, Union

from ...core.logging_manager import LoggingManager
from .calendar_helpers import DAY, HOUR, start_of_day, to_utc
from .clock import FrozenClock, SystemClock
from .time_slots import Grain, InstantTimeSlot, TimeIntervalSlot, TimeSlot

if TYPE_CHECKING:
    from ...core.config_manager import AppConfig

FORECAST_DAYS_LIMIT = 5

Clock = Union[SystemClock, FrozenClock]

GRAIN_EXTENSIONS = {
    Grain.WEEK: DAY * 7,
    Grain.DAY: DAY,
    Grain.HOUR: HOUR,
}


@dataclass(frozen=True)
class TimeInterval:
    """A closed time interval in UTC, optionally tagged with the text it came from."""
    start: datetime
    end: datetime
    raw_value: Optional[str] = None

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: 'TimeInterval') -> bool:
        # Touching intervals overlap
        return self.start <= other.end and self.end >= other.start

    def contains(self, moment: datetime) -> bool:
        return self.start <= to_utc(moment) <= self.end

    def union(self, other: 'TimeInterval') -> 'TimeInterval':
        """Smallest interval covering both; keeps this interval's raw value."""
        return replace(self, start=min(self.start, other.start), end=max(self.end, other.end))


@dataclass(frozen=True)
class Limits:
    """Supported query window."""
    min: datetime
    max: datetime

    def contains(self, interval: TimeInterval) -> bool:
        return (self.min <= interval.start <= self.max
                and self.min <= interval.end <= self.max)


class IntervalExtractor:
    """Computes forecast intervals from NLU time slots."""

    def __init__(self, clock: Optional[Clock] = None, forecast_days: int = FORECAST_DAYS_LIMIT):
        """Initialize the extractor.

        Args:
            clock: Current-time provider, the system clock by default
            forecast_days: Number of days the forecast source covers
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.clock = clock or SystemClock()
        self.forecast_horizon = timedelta(days=forecast_days)

    @classmethod
    def from_config(cls, config: 'AppConfig', clock: Optional[Clock] = None) -> 'IntervalExtractor':
        """Build an extractor from the forecast section of the configuration."""
        return cls(
            clock=clock or SystemClock(config.forecast.timezone),
            forecast_days=config.forecast.days,
        )

    def get_limits(self) -> Limits:
        """Supported window: start of today up to horizon plus one day later."""
        today = start_of_day(self.clock.now())
        return Limits(min=today, max=today + self.forecast_horizon + DAY)

    def extract_time_intervals(self, time_slots: Sequence[TimeSlot]) -> Tuple[List[TimeInterval], bool]:
        """Merge the slots into sorted intervals.

        Each slot is merged into the first accumulated interval it overlaps,
        if any; merged intervals are not merged again with each other.

        Args:
            time_slots: Slots in the order the NLU engine emitted them

        Returns:
            Tuple of the intervals sorted by start and the truncated flag,
            set when any interval reaches outside the supported window
        """
        now = self.clock.now()
        today = start_of_day(now)

        # No time slots specified, use the current day
        if not time_slots:
            return [TimeInterval(start=today, end=today + DAY)], False

        limits = Limits(min=today, max=today + self.forecast_horizon + DAY)

        intervals: List[TimeInterval] = []
        truncated = False

        for time_slot in time_slots:
            candidate = self._candidate_interval(time_slot, now)
            self.logger.debug(f"Slot {time_slot.raw_value!r} -> {candidate.start} .. {candidate.end}")

            if not limits.contains(candidate):
                truncated = True

            self._merge(intervals, candidate)

        intervals.sort(key=attrgetter('start'))

        if truncated:
            self.logger.info(f"Requested range exceeds the forecast window ending {limits.max}")

        return intervals, truncated

    def extract_time_interval(self, time_slots: Sequence[TimeSlot]) -> Optional[Tuple[TimeInterval, bool]]:
        """First interval of ``extract_time_intervals`` with the truncated flag.

        Returns None when there is no interval, which cannot happen for real
        input: an empty slot list yields the current day and every slot adds
        or widens an interval.
        """
        intervals, truncated = self.extract_time_intervals(time_slots)
        if intervals:
            return intervals[0], truncated
        return None

    def _candidate_interval(self, time_slot: TimeSlot, now: datetime) -> TimeInterval:
        if isinstance(time_slot, InstantTimeSlot):
            start = to_utc(time_slot.value)
            end = start + GRAIN_EXTENSIONS.get(time_slot.grain, timedelta(0))
        elif isinstance(time_slot, TimeIntervalSlot):
            start = to_utc(time_slot.start or now)
            end = to_utc(time_slot.end or now)
            if start > end:
                start, end = end, start
        else:
            raise TypeError(f"Unsupported time slot: {time_slot!r}")

        return TimeInterval(start=start, end=end, raw_value=time_slot.raw_value)

    def _merge(self, intervals: List[TimeInterval], candidate: TimeInterval):
        for index, interval in enumerate(intervals):
            if interval.overlaps(candidate):
                intervals[index] = interval.union(candidate)
                return
        intervals.append(candidate)
