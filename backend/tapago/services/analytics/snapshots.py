"""
Read-only snapshots consumed by the analytics engine.

Stores hand ORM rows to the engine through these plain value objects so
every calculation stays a pure function over in-memory data.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime]


def to_day(value: DateLike) -> date:
    """Truncate a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class WorkoutSnapshot:
    """Workout as seen by the analytics engine."""
    id: str
    date: date
    type_id: Optional[str] = None
    custom_type: Optional[str] = None
    notes: Optional[str] = None
    
    @classmethod
    def from_model(cls, workout) -> "WorkoutSnapshot":
        return cls(
            id=str(workout.id),
            date=to_day(workout.date),
            type_id=str(workout.type_id) if workout.type_id else None,
            custom_type=workout.custom_type,
            notes=workout.notes,
        )


@dataclass(frozen=True)
class TypeSnapshot:
    """Workout type descriptor as seen by the analytics engine."""
    id: str
    name: str
    icon: str
    color: str
    
    @classmethod
    def from_model(cls, workout_type) -> "TypeSnapshot":
        return cls(
            id=str(workout_type.id),
            name=workout_type.name,
            icon=workout_type.icon,
            color=workout_type.color,
        )


@dataclass(frozen=True)
class WeightSnapshot:
    """Body weight entry as seen by the analytics engine."""
    id: str
    weight: float
    date: date
    
    @classmethod
    def from_model(cls, entry) -> "WeightSnapshot":
        return cls(id=str(entry.id), weight=entry.weight, date=to_day(entry.date))
