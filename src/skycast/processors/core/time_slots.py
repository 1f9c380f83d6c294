"""Time Slots recognised by the NLU engine

The NLU engine tags every time expression either as an instant (a point in
time with a grain) or as an explicit interval. Both variants are modelled as
frozen dataclasses; ``TimeSlot`` is their union.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from dateutil import parser

from ...core.error_handler import SlotParseError
from .calendar_helpers import to_utc

INSTANT_TIME_KIND = "InstantTime"
TIME_INTERVAL_KIND = "TimeInterval"


class Grain(Enum):
    """Precision of a recognised time expression, coarsest first."""
    YEAR = "Year"
    QUARTER = "Quarter"
    MONTH = "Month"
    WEEK = "Week"
    DAY = "Day"
    HOUR = "Hour"
    MINUTE = "Minute"
    SECOND = "Second"

    @classmethod
    def parse(cls, raw: Union[str, int, 'Grain']) -> 'Grain':
        """Resolve a grain from its name (any case) or its ordinal.

        Raises:
            SlotParseError: If the grain is unknown
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, int) and not isinstance(raw, bool):
            members = list(cls)
            if 0 <= raw < len(members):
                return members[raw]
        elif isinstance(raw, str):
            for member in cls:
                if member.value.lower() == raw.strip().lower():
                    return member
        raise SlotParseError(f"Unknown grain: {raw!r}")


@dataclass(frozen=True)
class InstantTimeSlot:
    """A single point in time ("tomorrow morning")."""
    value: datetime
    grain: Grain
    precision: Optional[str] = None
    raw_value: Optional[str] = None


@dataclass(frozen=True)
class TimeIntervalSlot:
    """An explicit range ("between Monday and Friday"); either end may be open."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    raw_value: Optional[str] = None


TimeSlot = Union[InstantTimeSlot, TimeIntervalSlot]


def _parse_timestamp(raw: Any, default_timezone: Optional[tzinfo],
                     payload: Dict[str, Any]) -> Optional[datetime]:
    if raw is None or raw == "":
        return None

    if isinstance(raw, datetime):
        moment = raw
    elif isinstance(raw, str):
        try:
            moment = parser.parse(raw)
        except (ValueError, OverflowError) as e:
            raise SlotParseError(f"Invalid timestamp {raw!r}: {e}", payload) from e
    else:
        raise SlotParseError(f"Invalid timestamp {raw!r}", payload)

    if moment.tzinfo is None and default_timezone is not None:
        moment = moment.replace(tzinfo=default_timezone)
    return to_utc(moment)


def parse_time_slot(payload: Dict[str, Any],
                    default_timezone: Optional[tzinfo] = None) -> TimeSlot:
    """Build a TimeSlot from an NLU slot payload.

    Accepts the full slot (``{"rawValue": ..., "value": {"kind": ...}}``).
    Timestamps without an offset are read in ``default_timezone`` or, when
    that is not given, in the local timezone.

    Args:
        payload: Slot dictionary as emitted by the NLU engine
        default_timezone: Timezone for naive timestamps

    Returns:
        InstantTimeSlot or TimeIntervalSlot with UTC timestamps

    Raises:
        SlotParseError: If the payload is not a time slot or is malformed
    """
    value = payload.get("value") if isinstance(payload, dict) else None
    if not isinstance(value, dict):
        raise SlotParseError("Slot payload has no value object", payload)

    raw_value = payload.get("rawValue")
    kind = value.get("kind")

    if kind == INSTANT_TIME_KIND:
        instant = _parse_timestamp(value.get("value"), default_timezone, payload)
        if instant is None:
            raise SlotParseError("Instant time slot has no value", payload)
        if "grain" not in value:
            raise SlotParseError("Instant time slot has no grain", payload)
        return InstantTimeSlot(
            value=instant,
            grain=Grain.parse(value["grain"]),
            precision=value.get("precision"),
            raw_value=raw_value,
        )

    if kind == TIME_INTERVAL_KIND:
        return TimeIntervalSlot(
            start=_parse_timestamp(value.get("from"), default_timezone, payload),
            end=_parse_timestamp(value.get("to"), default_timezone, payload),
            raw_value=raw_value,
        )

    raise SlotParseError(f"Unsupported slot kind: {kind!r}", payload)


def parse_time_slots(payloads: Iterable[Dict[str, Any]],
                     default_timezone: Optional[tzinfo] = None) -> List[TimeSlot]:
    """Parse slot payloads, keeping the order the NLU engine emitted them in."""
    return [parse_time_slot(payload, default_timezone) for payload in payloads]
