"""Current-time providers.

The interval extractor never reads the global clock directly; it asks the
clock it was given. ``FrozenClock`` pins "now" for tests and replays.
"""

from datetime import datetime
from typing import Optional

from dateutil.tz import gettz, tzlocal

from ...core.error_handler import ConfigurationError


class SystemClock:
    """Wall clock in a named IANA timezone, or the machine's local zone."""

    def __init__(self, timezone: Optional[str] = None):
        if timezone is None:
            self.tz = tzlocal()
        else:
            self.tz = gettz(timezone)
            if self.tz is None:
                raise ConfigurationError(f"Unknown timezone: {timezone}")
        self.timezone_name = timezone

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FrozenClock:
    """Clock that always reports the same moment."""

    def __init__(self, moment: datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=tzlocal())
        self.moment = moment

    def now(self) -> datetime:
        return self.moment
