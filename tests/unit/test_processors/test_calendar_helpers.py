"""
Unit tests for calendar day helpers and clocks.
"""

import pytest
from datetime import datetime, timedelta

from dateutil.tz import gettz, tzutc

from skycast.core.error_handler import ConfigurationError
from skycast.processors.core.calendar_helpers import is_today, is_tomorrow, start_of_day
from skycast.processors.core.clock import FrozenClock, SystemClock

NEW_YORK = gettz("America/New_York")
TOKYO = gettz("Asia/Tokyo")
SANTIAGO = gettz("America/Santiago")
UTC = tzutc()


class TestStartOfDay:

    @pytest.mark.unit
    def test_local_midnight_in_utc(self, frozen_now, start_of_today):
        result = start_of_day(frozen_now)

        assert result == start_of_today
        assert result.utcoffset() == timedelta(0)

    @pytest.mark.unit
    def test_depends_on_timezone_of_now(self, frozen_now):
        """11:43 UTC is already 20:43 in Tokyo"""
        assert start_of_day(frozen_now.astimezone(TOKYO)) == datetime(2019, 2, 21, 15, tzinfo=UTC)

    @pytest.mark.unit
    def test_skipped_midnight_starts_at_first_existing_time(self):
        """Santiago clocks jumped from 23:59 to 01:00 on 2019-09-08"""
        now = datetime(2019, 9, 8, 12, tzinfo=SANTIAGO)

        assert start_of_day(now) == datetime(2019, 9, 8, 4, tzinfo=UTC)


class TestIsToday:

    @pytest.mark.unit
    def test_midnights_are_inclusive(self, frozen_now):
        assert is_today(datetime(2019, 2, 22, 0, 0, tzinfo=NEW_YORK), frozen_now)
        assert is_today(datetime(2019, 2, 23, 0, 0, tzinfo=NEW_YORK), frozen_now)

    @pytest.mark.unit
    def test_outside_today(self, frozen_now):
        assert not is_today(datetime(2019, 2, 21, 23, 59, 59, tzinfo=NEW_YORK), frozen_now)
        assert not is_today(datetime(2019, 2, 23, 0, 0, 1, tzinfo=NEW_YORK), frozen_now)

    @pytest.mark.unit
    def test_compares_absolute_instants(self, frozen_now):
        # 03:00 UTC on the 22nd is still the 21st in New York
        assert not is_today(datetime(2019, 2, 22, 3, tzinfo=UTC), frozen_now)
        assert is_today(datetime(2019, 2, 22, 6, tzinfo=UTC), frozen_now)

    @pytest.mark.unit
    def test_previous_evening_excluded_when_midnight_is_skipped(self):
        now = datetime(2019, 9, 8, 12, tzinfo=SANTIAGO)

        assert not is_today(datetime(2019, 9, 7, 23, 30, tzinfo=SANTIAGO), now)
        assert is_today(datetime(2019, 9, 8, 1, 0, tzinfo=SANTIAGO), now)


class TestIsTomorrow:

    @pytest.mark.unit
    def test_midnights_are_inclusive(self, frozen_now):
        assert is_tomorrow(datetime(2019, 2, 23, 0, 0, tzinfo=NEW_YORK), frozen_now)
        assert is_tomorrow(datetime(2019, 2, 24, 0, 0, tzinfo=NEW_YORK), frozen_now)

    @pytest.mark.unit
    def test_outside_tomorrow(self, frozen_now):
        assert not is_tomorrow(datetime(2019, 2, 22, 18, tzinfo=NEW_YORK), frozen_now)
        assert not is_tomorrow(datetime(2019, 2, 24, 0, 0, 1, tzinfo=NEW_YORK), frozen_now)

    @pytest.mark.unit
    def test_tomorrow_is_24_hours_on_dst_change(self):
        now = datetime(2019, 3, 9, 12, tzinfo=NEW_YORK)

        assert is_tomorrow(datetime(2019, 3, 10, 12, tzinfo=NEW_YORK), now)
        assert not is_tomorrow(datetime(2019, 3, 9, 23, 45, tzinfo=NEW_YORK), now)
        # Clocks jump forward on the 10th, so the window ends at 01:00 local
        assert is_tomorrow(datetime(2019, 3, 11, 0, 30, tzinfo=NEW_YORK), now)
        assert not is_tomorrow(datetime(2019, 3, 11, 1, 30, tzinfo=NEW_YORK), now)


class TestClocks:

    @pytest.mark.unit
    def test_frozen_clock(self, frozen_now):
        clock = FrozenClock(frozen_now)

        assert clock.now() is frozen_now

    @pytest.mark.unit
    def test_system_clock_in_named_zone(self):
        clock = SystemClock("Asia/Tokyo")
        now = clock.now()

        assert now.utcoffset() == timedelta(hours=9)
        assert abs(now - datetime.now(UTC)) < timedelta(minutes=1)

    @pytest.mark.unit
    def test_system_clock_rejects_unknown_zone(self):
        with pytest.raises(ConfigurationError):
            SystemClock("Mars/Olympus_Mons")
