"""
Analytics module - Workout statistics computed over in-memory snapshots.

This module provides:
- Date-range selection for calendar and rolling periods
- Record filtering and history search
- Streak calculation
- Distributions by type, weekday and month
- Period statistics report
- Weight and calendar views
"""
from tapago.services.analytics.periods import DateRange, Period, resolve_range
from tapago.services.analytics.snapshots import TypeSnapshot, WeightSnapshot, WorkoutSnapshot
from tapago.services.analytics.filters import filter_by_range, search_workouts
from tapago.services.analytics.streaks import current_streak, max_streak
from tapago.services.analytics.distribution import Bucket, by_month, by_type, by_weekday
from tapago.services.analytics.summary import WorkoutStats, compute_stats
from tapago.services.analytics.weight import entries_for_period, latest_weight, weight_change
from tapago.services.analytics.calendar_view import CalendarDay, build_month

__all__ = [
    # Periods
    "DateRange",
    "Period",
    "resolve_range",
    # Snapshots
    "TypeSnapshot",
    "WeightSnapshot",
    "WorkoutSnapshot",
    # Filtering
    "filter_by_range",
    "search_workouts",
    # Streaks
    "current_streak",
    "max_streak",
    # Distributions
    "Bucket",
    "by_month",
    "by_type",
    "by_weekday",
    # Report
    "WorkoutStats",
    "compute_stats",
    # Weight
    "entries_for_period",
    "latest_weight",
    "weight_change",
    # Calendar
    "CalendarDay",
    "build_month",
]
