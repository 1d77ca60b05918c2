"""
Record filtering by date range and free-text search.
"""
from typing import Callable, List, Optional, Sequence, TypeVar

from tapago.services.analytics.periods import DateRange
from tapago.services.analytics.snapshots import WorkoutSnapshot, to_day

T = TypeVar("T")


def filter_by_range(records: Sequence[T], date_range: DateRange) -> List[T]:
    """
    Select records whose date falls inside the range, keeping input order.
    
    Records only need a ``date`` attribute (date or datetime); time of day
    is ignored.
    """
    if date_range.is_unbounded:
        return list(records)
    return [record for record in records if date_range.contains(to_day(record.date))]


def search_workouts(
    workouts: Sequence[WorkoutSnapshot],
    term: Optional[str],
    label_for: Callable[[WorkoutSnapshot], str],
) -> List[WorkoutSnapshot]:
    """
    Workout history: newest first, optionally narrowed by a search term.
    
    The term matches the type label or the notes case-insensitively, or
    the date rendered as dd/MM/yyyy.
    """
    if term:
        needle = term.strip().lower()
        workouts = [
            workout for workout in workouts
            if needle in label_for(workout).lower()
            or needle in (workout.notes or "").lower()
            or term.strip() in workout.date.strftime("%d/%m/%Y")
        ]
    return sorted(workouts, key=lambda w: w.date, reverse=True)
