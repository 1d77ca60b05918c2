"""
Stats Summarizer - combines range selection, filtering, streaks and type
counts into a single report for a period.
"""
import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, Optional, Sequence

from tapago.services.analytics.filters import filter_by_range
from tapago.services.analytics.labels import NO_TYPE_LABEL, UNKNOWN_TYPE_LABEL, TypeResolver
from tapago.services.analytics.periods import DateRange, Period, resolve_range
from tapago.services.analytics.snapshots import TypeSnapshot, WorkoutSnapshot
from tapago.services.analytics.streaks import current_streak, max_streak


@dataclass
class WorkoutStats:
    """Statistics report for one period."""
    total_workouts: int = 0
    workout_days: int = 0
    rest_days: int = 0
    lost_days: int = 0
    most_frequent_type: str = NO_TYPE_LABEL
    streak: int = 0
    current_streak: int = 0
    percentage: int = 0
    total_days: int = 0
    start: Optional[date] = None
    end: Optional[date] = None
    
    def to_dict(self) -> dict:
        data = asdict(self)
        data["start"] = self.start.isoformat() if self.start else None
        data["end"] = self.end.isoformat() if self.end else None
        return data


def elapsed_days(date_range: DateRange, today: date) -> int:
    """
    Inclusive number of days from the range start up to min(end, today).
    
    Days after today never count; a range that starts in the future
    has zero elapsed days.
    """
    if date_range.start is None:
        return 0
    end = min(date_range.end, today) if date_range.end else today
    return max(0, (end - date_range.start).days + 1)


def completion_percentage(workout_days: int, total_days: int) -> int:
    """Share of elapsed days with a workout, rounded half up into [0, 100]."""
    if total_days <= 0:
        return 0
    value = math.floor(workout_days / total_days * 100 + 0.5)
    return max(0, min(100, value))


def most_frequent_type(workouts: Sequence[WorkoutSnapshot], resolver: TypeResolver) -> str:
    """
    Label with the highest count.
    
    Ties go to the label that appears first in date order (then id),
    so the result does not depend on how the records were loaded.
    """
    counts: Dict[str, int] = {}
    for workout in sorted(workouts, key=lambda w: (w.date, w.id)):
        label = resolver.label(workout, fallback=UNKNOWN_TYPE_LABEL)
        counts[label] = counts.get(label, 0) + 1
    
    if not counts:
        return NO_TYPE_LABEL
    # max() keeps the first of equal keys, i.e. the earliest label
    return max(counts.items(), key=lambda item: item[1])[0]


def compute_stats(
    workouts: Sequence[WorkoutSnapshot],
    types: Sequence[TypeSnapshot],
    period: Period,
    reference: Optional[date] = None,
    today: Optional[date] = None,
) -> WorkoutStats:
    """
    Build the statistics report for a period.
    
    Args:
        workouts: All of the user's workouts (unfiltered)
        types: The user's workout type descriptors
        period: Period tag
        reference: Day the period is anchored to (defaults to today)
        today: Current day; days after it never count against the user
        
    Returns:
        WorkoutStats with zero-valued fields when there is no data
    """
    today = today or date.today()
    reference = reference or today
    
    date_range = resolve_range(period, reference)
    period_workouts = filter_by_range(workouts, date_range)
    
    if date_range.is_unbounded:
        # "all" starts at the first recorded workout
        first = min((w.date for w in period_workouts), default=None)
        date_range = DateRange(first, None)

    total_days = elapsed_days(date_range, today)
    workout_days = len({w.date for w in period_workouts})
    resolver = TypeResolver(types)
    
    return WorkoutStats(
        total_workouts=len(period_workouts),
        workout_days=workout_days,
        rest_days=total_days - workout_days,
        lost_days=max(0, total_days - workout_days),
        most_frequent_type=most_frequent_type(period_workouts, resolver),
        streak=max_streak(w.date for w in period_workouts),
        current_streak=current_streak((w.date for w in workouts), today),
        percentage=completion_percentage(workout_days, total_days),
        total_days=total_days,
        start=date_range.start,
        end=date_range.end,
    )
