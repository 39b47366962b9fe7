"""Tests for DateRange factories and invariants."""

from datetime import datetime, timedelta

import pytest

from worklog_chat.exceptions import InvalidDateRangeError, InvalidMonthName
from worklog_chat.query.date_range import DateRange, month_number


def test_today_spans_whole_calendar_day(now):
    r = DateRange.today(now)
    assert r.start == datetime(2024, 9, 18, 0, 0, 0)
    assert r.end == datetime(2024, 9, 18, 23, 59, 59, 999000)


def test_yesterday_is_previous_calendar_day(now):
    r = DateRange.yesterday(now)
    assert r.start == datetime(2024, 9, 17)
    assert r.end == datetime(2024, 9, 17, 23, 59, 59, 999000)


def test_yesterday_crosses_month_boundary():
    r = DateRange.yesterday(datetime(2024, 3, 1, 8, 0))
    assert r.start == datetime(2024, 2, 29)


def test_this_week_starts_on_most_recent_sunday(now):
    r = DateRange.this_period(now, "week")
    assert r.start == datetime(2024, 9, 15)
    assert r.end == now


def test_this_week_on_a_sunday_starts_today():
    sunday = datetime(2024, 9, 15, 9, 0)
    r = DateRange.this_period(sunday, "week")
    assert r.start == datetime(2024, 9, 15)
    assert r.end == sunday


def test_this_month_starts_on_the_first(now):
    r = DateRange.this_period(now, "month")
    assert r.start == datetime(2024, 9, 1)
    assert r.end == now


def test_last_week_spans_exactly_seven_days(now):
    r = DateRange.last_period(now, "week")
    assert r.end == now
    assert r.end - r.start == timedelta(days=7)


def test_last_month_same_day_of_month(now):
    r = DateRange.last_period(now, "month")
    assert r.start == datetime(2024, 8, 18, 14, 30)
    assert r.end == now


def test_last_month_clamps_to_shorter_month():
    now = datetime(2024, 3, 31, 10, 0)
    r = DateRange.last_period(now, "month")
    assert r.start == datetime(2024, 2, 29, 10, 0)


def test_recent_is_five_days(now):
    r = DateRange.recent(now)
    assert r.end == now
    assert r.duration == timedelta(days=5)


def test_unsupported_period_rejected(now):
    with pytest.raises(ValueError):
        DateRange.last_period(now, "fortnight")
    with pytest.raises(ValueError):
        DateRange.this_period(now, "year")


def test_late_february_leap_year(now):
    r = DateRange.month_third(now, "late", "february", 2024)
    assert r.start == datetime(2024, 2, 21)
    assert r.end.date() == datetime(2024, 2, 29).date()


def test_late_february_common_year(now):
    r = DateRange.month_third(now, "late", "february", 2023)
    assert r.end.date() == datetime(2023, 2, 28).date()


def test_late_month_with_thirty_days(now):
    r = DateRange.month_third(now, "late", "April")
    assert r.start == datetime(2024, 4, 21)
    assert r.end == datetime(2024, 4, 30, 23, 59, 59, 999000)


def test_early_and_mid_thirds(now):
    early = DateRange.month_third(now, "early", "september")
    mid = DateRange.month_third(now, "mid", "september")
    assert (early.start, early.end.date()) == (datetime(2024, 9, 1), datetime(2024, 9, 10).date())
    assert (mid.start, mid.end.date()) == (datetime(2024, 9, 11), datetime(2024, 9, 20).date())


def test_month_third_defaults_to_current_year():
    r = DateRange.month_third(datetime(2023, 6, 1), "early", "january")
    assert r.start.year == 2023


def test_month_third_rejects_unknown_period(now):
    with pytest.raises(ValueError):
        DateRange.month_third(now, "end", "march")


def test_full_month(now):
    r = DateRange.full_month(now, "february", 2023)
    assert r.start == datetime(2023, 2, 1)
    assert r.end == datetime(2023, 2, 28, 23, 59, 59, 999000)


def test_invalid_month_name(now):
    with pytest.raises(InvalidMonthName):
        DateRange.full_month(now, "smarch")
    with pytest.raises(ValueError):
        DateRange.month_third(now, "early", "sept")


def test_month_number_is_case_insensitive():
    assert month_number("December") == 12
    assert month_number(" may ") == 5


def test_start_after_end_rejected():
    with pytest.raises(InvalidDateRangeError):
        DateRange(datetime(2024, 1, 2), datetime(2024, 1, 1))


def test_contains_is_inclusive():
    r = DateRange(datetime(2024, 1, 1), datetime(2024, 1, 10))
    assert r.contains(datetime(2024, 1, 1))
    assert r.contains(datetime(2024, 1, 10))
    assert r.contains(datetime(2024, 1, 5, 12))
    assert not r.contains(datetime(2024, 1, 10, 0, 0, 1))
    assert not r.contains(datetime(2023, 12, 31, 23, 59))


def test_date_range_is_immutable(now):
    r = DateRange.today(now)
    with pytest.raises(AttributeError):
        r.start = now
