"""Tests for core next-occurrence logic."""

import logging
from datetime import date, datetime, time, timedelta

import pytest

from cadence.core.occurrence import (
    end_of_day,
    is_past_end,
    next_occurrence,
    next_weekday_occurrence,
    shift_months,
    upcoming_occurrences,
)
from cadence.core.pattern import RecurrencePattern, RecurrenceType


# 2024-01-15 is a Monday
@pytest.fixture
def monday():
    return date(2024, 1, 15)


@pytest.fixture
def saturday():
    return date(2024, 1, 13)


def weekly(days=(), interval=1, **kwargs) -> RecurrencePattern:
    return RecurrencePattern(type=RecurrenceType.WEEKLY, interval=interval, days_of_week=days, **kwargs)


class TestOnce:
    def test_once_terminates(self, monday):
        assert next_occurrence(monday, RecurrencePattern(type=RecurrenceType.ONCE)) is None

    def test_once_ignores_dates(self, monday):
        pattern = RecurrencePattern(
            type=RecurrenceType.ONCE,
            start_date=monday,
            end_date=monday + timedelta(days=30),
        )
        assert next_occurrence(monday, pattern) is None


class TestDaily:
    @pytest.mark.parametrize("interval", [1, 2, 3, 7, 30, 365])
    def test_adds_interval_days(self, monday, interval):
        pattern = RecurrencePattern(type=RecurrenceType.DAILY, interval=interval)
        assert next_occurrence(monday, pattern) == monday + timedelta(days=interval)

    def test_crosses_year_boundary(self):
        pattern = RecurrencePattern(type=RecurrenceType.DAILY)
        assert next_occurrence(date(2023, 12, 31), pattern) == date(2024, 1, 1)

    @pytest.mark.parametrize("interval", [0, -1, -7])
    def test_degenerate_interval_treated_as_one(self, monday, interval):
        pattern = RecurrencePattern(type=RecurrenceType.DAILY, interval=interval)
        assert next_occurrence(monday, pattern) == monday + timedelta(days=1)


class TestWeeklyWithoutDays:
    def test_same_weekday_next_week(self, monday):
        assert next_occurrence(monday, weekly()) == date(2024, 1, 22)

    def test_interval_skips_weeks(self, monday):
        assert next_occurrence(monday, weekly(interval=3)) == monday + timedelta(days=21)


class TestWeeklyWithDays:
    def test_monday_to_wednesday(self, monday):
        assert next_occurrence(monday, weekly((1, 3, 5))) == date(2024, 1, 17)

    def test_saturday_wraps_to_monday(self, saturday):
        assert next_occurrence(saturday, weekly((1, 3, 5))) == date(2024, 1, 15)

    def test_friday_wraps_to_monday(self):
        assert next_occurrence(date(2024, 1, 19), weekly((1, 3, 5))) == date(2024, 1, 22)

    def test_interval_only_affects_wrap(self, monday):
        assert next_occurrence(monday, weekly((1, 3, 5), interval=2)) == date(2024, 1, 17)

    def test_interval_two_wraps_nine_days(self, saturday):
        result = next_occurrence(saturday, weekly((1, 3, 5), interval=2))
        assert result == saturday + timedelta(days=9)
        assert result == date(2024, 1, 22)

    def test_single_day_matching_anchor_wraps_full_week(self):
        sunday = date(2024, 1, 14)
        assert next_occurrence(sunday, weekly((0,))) == date(2024, 1, 21)

    def test_sunday_is_start_of_week(self, saturday):
        # Saturday -> Sunday is a wrap, one day later
        assert next_occurrence(saturday, weekly((0, 6))) == date(2024, 1, 14)

    def test_duplicates_do_not_change_result(self, saturday):
        assert next_occurrence(saturday, weekly((5, 1, 3, 1, 5))) == next_occurrence(
            saturday, weekly((1, 3, 5))
        )

    def test_unsorted_days(self, monday):
        assert next_weekday_occurrence(monday, (5, 3), 1) == date(2024, 1, 17)


class TestMonthly:
    def test_same_day_next_month(self):
        pattern = RecurrencePattern(type=RecurrenceType.MONTHLY)
        assert next_occurrence(date(2024, 1, 15), pattern) == date(2024, 2, 15)

    def test_interval(self):
        pattern = RecurrencePattern(type=RecurrenceType.MONTHLY, interval=3)
        assert next_occurrence(date(2024, 11, 30), pattern) == date(2025, 2, 28)

    @pytest.mark.parametrize(
        "anchor,expected",
        [
            (date(2024, 1, 31), date(2024, 2, 29)),
            (date(2023, 1, 31), date(2023, 2, 28)),
            (date(2024, 3, 31), date(2024, 4, 30)),
            (date(2024, 12, 31), date(2025, 1, 31)),
        ],
    )
    def test_month_end_clamps(self, anchor, expected):
        pattern = RecurrencePattern(type=RecurrenceType.MONTHLY)
        assert next_occurrence(anchor, pattern) == expected

    def test_leap_day_yearly_step_clamps(self):
        assert shift_months(date(2024, 2, 29), 12) == date(2025, 2, 28)

    def test_clamped_chain_does_not_recover_day(self):
        pattern = RecurrencePattern(type=RecurrenceType.MONTHLY)
        assert upcoming_occurrences(date(2024, 1, 31), pattern, 3) == [
            date(2024, 2, 29),
            date(2024, 3, 29),
            date(2024, 4, 29),
        ]


class TestEndDate:
    def test_candidate_after_end_terminates(self, monday):
        pattern = RecurrencePattern(
            type=RecurrenceType.DAILY,
            end_date=monday + timedelta(days=1) - timedelta(days=10),
        )
        assert next_occurrence(monday, pattern) is None

    def test_end_date_is_inclusive(self, monday):
        pattern = RecurrencePattern(type=RecurrenceType.DAILY, end_date=monday + timedelta(days=1))
        assert next_occurrence(monday, pattern) == monday + timedelta(days=1)

    def test_weekly_wrap_past_end(self, saturday):
        pattern = weekly((1, 3, 5), interval=2, end_date=date(2024, 1, 20))
        assert next_occurrence(saturday, pattern) is None

    def test_end_before_start_never_occurs(self):
        pattern = RecurrencePattern(
            type=RecurrenceType.DAILY,
            start_date=date(2024, 2, 1),
            end_date=date(2024, 1, 31),
        )
        assert next_occurrence(date(2023, 12, 1), pattern) is None

    def test_upcoming_stops_at_end(self, monday):
        pattern = RecurrencePattern(type=RecurrenceType.DAILY, end_date=monday + timedelta(days=2))
        assert upcoming_occurrences(monday, pattern, 10) == [
            monday + timedelta(days=1),
            monday + timedelta(days=2),
        ]


class TestHelpers:
    def test_end_of_day(self, monday):
        assert end_of_day(monday) == datetime(2024, 1, 15, 23, 59, 59, 999000)

    def test_is_past_end_without_end_date(self, monday):
        assert is_past_end(monday, None) is False

    def test_is_past_end_same_day_late(self, monday):
        assert is_past_end(datetime.combine(monday, time(23, 59, 59)), monday) is False

    def test_is_past_end_next_day(self, monday):
        assert is_past_end(monday + timedelta(days=1), monday) is True


class TestInputs:
    def test_datetime_anchor_returns_date(self):
        anchor = datetime(2024, 1, 15, 23, 59, 59, 999000)
        pattern = RecurrencePattern(type=RecurrenceType.DAILY)
        assert next_occurrence(anchor, pattern) == date(2024, 1, 16)

    def test_does_not_mutate_anchor(self, monday):
        original = date(monday.year, monday.month, monday.day)
        next_occurrence(monday, RecurrencePattern(type=RecurrenceType.MONTHLY))
        assert monday == original

    def test_unknown_type_terminates_with_warning(self, monday, caplog):
        pattern = RecurrencePattern(type="fortnightly")
        with caplog.at_level(logging.WARNING):
            assert next_occurrence(monday, pattern) is None
        assert "fortnightly" in caplog.text
