"""
Month calendar: one cell per day with its workout status.
"""
import calendar
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from tapago.services.analytics.labels import TypeResolver
from tapago.services.analytics.snapshots import TypeSnapshot, WorkoutSnapshot

WEEKDAY_HEADERS = ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"]

STATUS_COMPLETED = "completed"
STATUS_TODAY = "today"
STATUS_MISSED = "missed"
STATUS_AVAILABLE = "available"

STATUS_LABELS = {
    STATUS_TODAY: "Hoje",
    STATUS_MISSED: "Perdido",
    STATUS_AVAILABLE: "Disponível",
}


@dataclass
class CalendarDay:
    date: date
    status: str
    label: str
    icon: str = ""
    color: Optional[str] = None
    workout_id: Optional[str] = None
    
    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "status": self.status,
            "label": self.label,
            "icon": self.icon,
            "color": self.color,
            "workoutId": self.workout_id,
        }


def build_month(
    year: int,
    month: int,
    workouts: Sequence[WorkoutSnapshot],
    types: Sequence[TypeSnapshot],
    today: Optional[date] = None,
) -> List[CalendarDay]:
    """
    Day cells for a month.
    
    A day with a workout is completed; otherwise today is flagged, past
    days are missed and future days are available.
    """
    today = today or date.today()
    resolver = TypeResolver(types)
    by_day: Dict[date, WorkoutSnapshot] = {w.date: w for w in workouts}
    
    days: List[CalendarDay] = []
    for day_number in range(1, calendar.monthrange(year, month)[1] + 1):
        day = date(year, month, day_number)
        workout = by_day.get(day)
        
        if workout is not None:
            style = resolver.style(workout)
            days.append(CalendarDay(
                date=day,
                status=STATUS_COMPLETED,
                label=style.name,
                icon=style.icon,
                color=style.color,
                workout_id=workout.id,
            ))
            continue
        
        if day == today:
            status = STATUS_TODAY
        elif day < today:
            status = STATUS_MISSED
        else:
            status = STATUS_AVAILABLE
        days.append(CalendarDay(date=day, status=status, label=STATUS_LABELS[status]))
    
    return days


def leading_blanks(year: int, month: int) -> int:
    """Empty cells before day 1 in a Monday-first grid."""
    return date(year, month, 1).weekday()
