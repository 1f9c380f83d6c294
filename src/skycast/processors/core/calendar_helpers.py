"""Calendar day boundaries in the user's local timezone.

All arithmetic is done on UTC datetimes so that a "day" is always 24 absolute
hours, including on daylight-saving transitions.
"""

from datetime import datetime, timedelta

from dateutil.tz import resolve_imaginary, tzlocal, tzutc

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)

UTC = tzutc()


def to_utc(moment: datetime) -> datetime:
    """Convert to UTC, reading naive datetimes in the local timezone."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tzlocal())
    return moment.astimezone(UTC)


def start_of_day(now: datetime) -> datetime:
    """Local midnight of the day containing ``now``, as a UTC datetime.

    The local timezone is the one ``now`` carries. Where the clock skips
    midnight for daylight saving, the day starts at the first existing time.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=tzlocal())
    midnight = resolve_imaginary(now.replace(hour=0, minute=0, second=0, microsecond=0))
    return midnight.astimezone(UTC)


def _within(moment: datetime, day_start: datetime) -> bool:
    moment = to_utc(moment)
    return day_start <= moment <= day_start + DAY


def is_today(moment: datetime, now: datetime) -> bool:
    """True if ``moment`` falls on the same local day as ``now`` (both midnights inclusive)."""
    return _within(moment, start_of_day(now))


def is_tomorrow(moment: datetime, now: datetime) -> bool:
    """True if ``moment`` falls on the local day after ``now`` (both midnights inclusive)."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=tzlocal())
    local_zone = now.tzinfo
    tomorrow = (to_utc(now) + DAY).astimezone(local_zone)
    return _within(moment, start_of_day(tomorrow))
