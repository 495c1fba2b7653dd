"""Tests for sleeplog.analytics.circular -- circular mean of clock times."""

from datetime import datetime, timedelta, timezone

import pytest

from sleeplog.analytics.circular import (
    TimeOfDay,
    average_time_of_day,
    time_of_day_spread,
)


def at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2024, 1, day, hour, minute)


class TestTimeOfDay:
    def test_minutes(self):
        assert TimeOfDay(7, 30).minutes == 450

    def test_from_minutes_wraps(self):
        assert TimeOfDay.from_minutes(1440) == TimeOfDay(0, 0)
        assert TimeOfDay.from_minutes(1441) == TimeOfDay(0, 1)

    def test_str(self):
        assert str(TimeOfDay(0, 5)) == "00:05"
        assert str(TimeOfDay(23, 59)) == "23:59"


class TestAverageTimeOfDay:
    def test_empty_is_none(self):
        assert average_time_of_day([]) is None

    def test_single_value(self):
        assert average_time_of_day([at(6, 45)]) == TimeOfDay(6, 45)

    def test_wraps_midnight(self):
        # Linear mean would give 12:00
        assert average_time_of_day([at(23, 30), at(0, 30, day=2)]) == TimeOfDay(0, 0)

    def test_ten_pm_and_two_am(self):
        assert average_time_of_day([at(22), at(2, day=2)]) == TimeOfDay(0, 0)

    def test_same_side_of_clock(self):
        assert average_time_of_day([at(6), at(8)]) == TimeOfDay(7, 0)

    def test_late_evening(self):
        assert average_time_of_day([at(22), at(23)]) == TimeOfDay(22, 30)

    def test_opposite_times_are_zero(self):
        # Mean vector has zero length -> defined as 00:00
        assert average_time_of_day([at(0), at(12)]) == TimeOfDay(0, 0)

    def test_evenly_spread_are_zero(self):
        assert average_time_of_day([at(0), at(8), at(16)]) == TimeOfDay(0, 0)

    def test_date_is_ignored(self):
        a = average_time_of_day([at(23, day=1), at(1, day=20)])
        b = average_time_of_day([at(23, day=5), at(1, day=6)])
        assert a == b == TimeOfDay(0, 0)

    def test_timezone_offset_is_ignored(self):
        tz = timezone(timedelta(hours=9))
        aware = [datetime(2024, 1, 1, 22, 0, tzinfo=tz), datetime(2024, 1, 2, 2, 0, tzinfo=tz)]
        assert average_time_of_day(aware) == TimeOfDay(0, 0)

    @pytest.mark.parametrize("shift_min", [0, 45, 180, 600, 1000])
    def test_rotation_invariance(self, shift_min):
        times = [at(22, 10), at(23, 40), at(1, 5, day=2), at(0, 20, day=2)]
        base = average_time_of_day(times)
        shifted = [t + timedelta(minutes=shift_min) for t in times]
        result = average_time_of_day(shifted)
        unrotated = (result.minutes - shift_min) % 1440
        diff = min(abs(unrotated - base.minutes), 1440 - abs(unrotated - base.minutes))
        assert diff <= 1

    def test_result_in_range(self):
        result = average_time_of_day([at(23, 59), at(23, 58)])
        assert 0 <= result.minutes < 1440


class TestTimeOfDaySpread:
    def test_empty_is_none(self):
        assert time_of_day_spread([]) is None

    def test_identical_times_have_no_spread(self):
        assert time_of_day_spread([at(23), at(23, day=2)]) == pytest.approx(0.0, abs=0.1)

    def test_wider_schedule_has_more_spread(self):
        tight = time_of_day_spread([at(23), at(23, 10), at(22, 50)])
        loose = time_of_day_spread([at(21), at(1, day=2), at(23)])
        assert loose > tight

    def test_spread_across_midnight(self):
        # 23:30 and 00:30 are as close as 11:30 and 12:30
        wrap = time_of_day_spread([at(23, 30), at(0, 30)])
        noon = time_of_day_spread([at(11, 30), at(12, 30)])
        assert wrap == pytest.approx(noon, abs=0.1)

    def test_opposite_times_have_no_spread_value(self):
        assert time_of_day_spread([at(23), at(11)]) is None

    def test_nearly_opposite_times_have_no_spread_value(self):
        # Mean vector length ~0.002: circular std would be ~800 min
        assert time_of_day_spread([at(0), at(12, 1)]) is None

    @pytest.mark.parametrize("hours", [(23, 0), (22, 2), (21, 23, 1), (20, 4)])
    def test_spread_never_exceeds_half_a_day(self, hours):
        spread = time_of_day_spread([at(h) for h in hours])
        assert spread is None or 0.0 <= spread <= 720.0
