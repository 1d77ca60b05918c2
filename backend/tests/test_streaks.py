"""Tests for streak calculation."""
from datetime import date, datetime, timedelta

from tapago.services.analytics import current_streak, max_streak


def test_scenario_gap_closes_run():
    days = [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 5)]
    assert max_streak(days) == 3


def test_empty_and_single():
    assert max_streak([]) == 0
    assert max_streak([date(2024, 1, 1)]) == 1


def test_order_does_not_matter():
    days = [date(2024, 1, 5), date(2024, 1, 3), date(2024, 1, 4), date(2024, 1, 1)]
    assert max_streak(days) == 3


def test_duplicate_day_breaks_run():
    # zero-day difference is "any other difference"
    days = [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 2), date(2024, 1, 3)]
    assert max_streak(days) == 2


def test_run_across_month_boundary():
    days = [datetime(2024, 1, 31, 7, 0), datetime(2024, 2, 1, 19, 30), date(2024, 2, 2)]
    assert max_streak(days) == 3


def test_monotonic_under_union():
    a = [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 10)]
    b = [date(2024, 1, 3), date(2024, 1, 20), date(2024, 1, 21)]
    assert max_streak(a + b) >= max(max_streak(a), max_streak(b))
    assert max_streak(a + b) == 3


def test_does_not_mutate_input():
    days = [date(2024, 1, 3), date(2024, 1, 1)]
    max_streak(days)
    current_streak(days, date(2024, 1, 3))
    assert days == [date(2024, 1, 3), date(2024, 1, 1)]


def test_current_streak_ends_at_reference():
    today = date(2024, 6, 10)
    days = [today, today - timedelta(days=1), today - timedelta(days=2), today - timedelta(days=4)]
    assert current_streak(days, today) == 3


def test_current_streak_zero_without_workout_today():
    today = date(2024, 6, 10)
    assert current_streak([today - timedelta(days=1)], today) == 0


def test_current_streak_is_bounded():
    today = date(2024, 6, 10)
    days = [today - timedelta(days=n) for n in range(500)]
    assert current_streak(days, today) == 365
    assert current_streak(days, today, lookback=30) == 30
