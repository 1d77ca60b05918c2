"""
Distribution of workouts by type, weekday and month.
"""
from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from tapago.services.analytics.filters import filter_by_range
from tapago.services.analytics.labels import (
    CALENDAR_ICON,
    FALLBACK_TYPE_LABEL,
    MONTH_NAMES,
    PRIMARY_COLOR,
    WEEKDAY_NAMES,
    TypeResolver,
)
from tapago.services.analytics.periods import year_bounds
from tapago.services.analytics.snapshots import TypeSnapshot, WorkoutSnapshot


@dataclass
class Bucket:
    """One slice of a distribution chart."""
    name: str
    count: int
    color: str
    icon: str
    
    def to_dict(self) -> dict:
        return asdict(self)


def by_type(workouts: Sequence[WorkoutSnapshot], types: Sequence[TypeSnapshot]) -> List[Bucket]:
    """
    Count workouts per resolved type label.
    
    Sparse: only labels with at least one workout appear, in order of
    first appearance. Labels with no matching descriptor (custom or
    removed types) get the fallback icon and color.
    """
    resolver = TypeResolver(types)
    buckets: Dict[str, Bucket] = {}
    
    for workout in workouts:
        label = resolver.label(workout, fallback=FALLBACK_TYPE_LABEL)
        bucket = buckets.get(label)
        if bucket is None:
            style = resolver.style_for_label(label)
            bucket = buckets[label] = Bucket(name=label, count=0, color=style.color, icon=style.icon)
        bucket.count += 1
    
    return list(buckets.values())


def by_weekday(workouts: Sequence[WorkoutSnapshot]) -> List[Bucket]:
    """Seven buckets, Monday first and Sunday last."""
    buckets = [Bucket(name=name, count=0, color=PRIMARY_COLOR, icon=CALENDAR_ICON) for name in WEEKDAY_NAMES]
    for workout in workouts:
        # date.weekday() is already Monday=0 .. Sunday=6
        buckets[workout.date.weekday()].count += 1
    return buckets


def by_month(workouts: Sequence[WorkoutSnapshot], reference: Optional[date] = None) -> List[Bucket]:
    """Twelve buckets for the year of the reference date."""
    in_year = filter_by_range(workouts, year_bounds(reference or date.today()))
    buckets = [Bucket(name=name, count=0, color=PRIMARY_COLOR, icon=CALENDAR_ICON) for name in MONTH_NAMES]
    for workout in in_year:
        buckets[workout.date.month - 1].count += 1
    return buckets
