"""Tests for sleeplog.formatting -- display strings."""

from sleeplog.analytics.aggregate import Period, summarize
from sleeplog.analytics.circular import TimeOfDay
from sleeplog.formatting import (
    format_average_score,
    format_duration,
    format_stage_duration,
    format_summary,
    format_time_of_day,
)
from sleeplog.models import SleepStage

from tests.conftest import NOW, night


class TestFormatDuration:
    def test_hours_and_minutes(self):
        assert format_duration(8 * 3600 + 12 * 60 + 30) == "8h 12m"

    def test_minutes_only(self):
        assert format_duration(45 * 60) == "0h 45m"

    def test_under_a_minute(self):
        assert format_duration(42) == "42s"
        assert format_duration(0) == "0s"


class TestFormatStageDuration:
    def test_over_an_hour(self):
        assert format_stage_duration(3900) == "1h 5m"

    def test_under_an_hour(self):
        assert format_stage_duration(45 * 60) == "45m"


class TestFormatTimeOfDay:
    def test_midnight(self):
        assert format_time_of_day(TimeOfDay(0, 5)) == "12:05 AM"

    def test_noon(self):
        assert format_time_of_day(TimeOfDay(12, 0)) == "12:00 PM"

    def test_evening(self):
        assert format_time_of_day(TimeOfDay(22, 30)) == "10:30 PM"

    def test_morning(self):
        assert format_time_of_day(TimeOfDay(7, 9)) == "7:09 AM"

    def test_none_is_placeholder(self):
        assert format_time_of_day(None) == "-"


class TestFormatAverageScore:
    def test_label_and_value(self):
        assert format_average_score(80) == "good (80)"
        assert format_average_score(86) == "excellent (86)"


class TestFormatSummary:
    def test_summary_lines(self):
        records = [night(1, stages=[(SleepStage.DEEP, 75)]), night(2)]
        text = format_summary(summarize(records, Period.WEEK, now=NOW))
        assert "2 nights" in text
        assert "excellent (100)" in text
        assert "8h 0m / night" in text
        assert "11:00 PM" in text
        assert "1h 15m" in text

    def test_empty_summary(self):
        text = format_summary(summarize([], Period.WEEK, now=NOW))
        assert "Score:      -" in text
        assert "Bedtime:    -" in text

    def test_irregular_schedule_shows_placeholder(self):
        records = [night(2, hour=23), night(1, hour=11)]
        text = format_summary(summarize(records, Period.WEEK, now=NOW))
        assert "Regularity: -" in text
        assert "±" not in text
