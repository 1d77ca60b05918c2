"""
FitLog Service - a user's workouts, types and weights plus the analytics
computed over them.

Holds an in-memory snapshot of the user's data. Every write goes to the
store first; the snapshot changes only after the store has committed, so
a failed write leaves it exactly as it was. Statistics are recomputed on
demand from the current snapshot.
"""
import uuid
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from tapago.core.auth import UserContext
from tapago.core.logging import get_logger
from tapago.models.weight import WeightEntry
from tapago.models.workout import Workout
from tapago.models.workout_type import WorkoutType
from tapago.services.analytics import (
    Bucket,
    CalendarDay,
    DateRange,
    Period,
    TypeSnapshot,
    WeightSnapshot,
    WorkoutSnapshot,
    WorkoutStats,
    build_month,
    by_month,
    by_type,
    by_weekday,
    compute_stats,
    entries_for_period,
    filter_by_range,
    latest_weight,
    resolve_range,
    search_workouts,
    weight_change,
)
from tapago.services.analytics.labels import TypeResolver
from tapago.services.store import WeightStore, WorkoutStore, WorkoutTypeStore

logger = get_logger(__name__)


class FitLogService:
    """
    Usage:
        fitlog = FitLogService(db, user)
        await fitlog.load()
        await fitlog.save_workout(date(2024, 1, 1), custom_type="Corrida")
        stats = fitlog.get_stats(Period.MONTH)
    """
    
    def __init__(self, db: AsyncSession, user: UserContext):
        self.user = user
        self.workout_store = WorkoutStore(db, user)
        self.type_store = WorkoutTypeStore(db, user)
        self.weight_store = WeightStore(db, user)
        
        self.workouts: List[WorkoutSnapshot] = []
        self.types: List[TypeSnapshot] = []
        self.weights: List[WeightSnapshot] = []
    
    async def load(self) -> "FitLogService":
        """Fetch the user's data into the snapshot."""
        self.types = [TypeSnapshot.from_model(t) for t in await self.type_store.list()]
        self.workouts = [WorkoutSnapshot.from_model(w) for w in await self.workout_store.list()]
        self.weights = [WeightSnapshot.from_model(e) for e in await self.weight_store.list()]
        
        logger.debug(
            "Loaded fitlog snapshot",
            workouts=len(self.workouts),
            types=len(self.types),
            weights=len(self.weights),
        )
        return self
    
    # ========================================
    # Workouts
    # ========================================
    
    async def save_workout(
        self,
        day: date,
        type_id: Optional[uuid.UUID] = None,
        custom_type: Optional[str] = None,
        notes: Optional[str] = None,
        exercises: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> Tuple[Workout, bool]:
        """Save a workout; returns (workout, created)."""
        workout, created = await self.workout_store.save(day, type_id, custom_type, notes, exercises)
        self._put_workout(workout)
        return workout, created
    
    async def update_workout(self, workout_id: uuid.UUID, **changes: Any) -> Workout:
        workout = await self.workout_store.update(workout_id, **changes)
        self._put_workout(workout)
        return workout
    
    async def delete_workout(self, workout_id: uuid.UUID) -> None:
        await self.workout_store.delete(workout_id)
        self.workouts = [w for w in self.workouts if w.id != str(workout_id)]
    
    async def get_workout_by_date(self, day: date) -> Optional[Workout]:
        """The workout logged on a day, with its exercises."""
        return await self.workout_store.get_by_date(day)
    
    def get_workouts_by_period(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[WorkoutSnapshot]:
        """Snapshot workouts between start and end (inclusive); a missing bound is open."""
        return filter_by_range(self.workouts, DateRange(start, end))
    
    def history(
        self,
        search: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[WorkoutSnapshot]:
        resolver = TypeResolver(self.types)
        workouts = self.get_workouts_by_period(start, end)
        return search_workouts(workouts, search, lambda w: resolver.label(w, fallback=""))
    
    def type_label(self, workout: WorkoutSnapshot) -> str:
        return TypeResolver(self.types).style(workout).name
    
    # ========================================
    # Workout types
    # ========================================
    
    async def add_workout_type(self, **fields: Any) -> WorkoutType:
        workout_type = await self.type_store.create(**fields)
        self.types.append(TypeSnapshot.from_model(workout_type))
        return workout_type
    
    async def update_workout_type(self, type_id: uuid.UUID, **changes: Any) -> WorkoutType:
        workout_type = await self.type_store.update(type_id, **changes)
        snapshot = TypeSnapshot.from_model(workout_type)
        self.types = [snapshot if t.id == snapshot.id else t for t in self.types]
        return workout_type
    
    async def remove_workout_type(self, type_id: uuid.UUID) -> None:
        await self.type_store.delete(type_id)
        self.types = [t for t in self.types if t.id != str(type_id)]
    
    async def reorder_workout_types(self, ordered_ids: Sequence[uuid.UUID]) -> List[WorkoutType]:
        types = await self.type_store.reorder(ordered_ids)
        self.types = [TypeSnapshot.from_model(t) for t in types]
        return types
    
    # ========================================
    # Weight
    # ========================================
    
    async def save_weight(self, weight: float, day: Optional[date] = None) -> Tuple[WeightEntry, bool]:
        """Record a weight; returns (entry, created)."""
        entry, created = await self.weight_store.save(weight, day)
        snapshot = WeightSnapshot.from_model(entry)
        self.weights = [w for w in self.weights if w.id != snapshot.id] + [snapshot]
        return entry, created
    
    async def delete_weight(self, entry_id: uuid.UUID) -> None:
        await self.weight_store.delete(entry_id)
        self.weights = [w for w in self.weights if w.id != str(entry_id)]
    
    def get_weight_entries(self, period: Period, reference: Optional[date] = None) -> List[WeightSnapshot]:
        return entries_for_period(self.weights, period, reference)
    
    def get_latest_weight(self) -> Optional[WeightSnapshot]:
        return latest_weight(self.weights)
    
    def get_weight_change(self, period: Period, reference: Optional[date] = None) -> Optional[float]:
        return weight_change(self.weights, period, reference)
    
    # ========================================
    # Statistics
    # ========================================
    
    def get_stats(
        self,
        period: Period,
        reference: Optional[date] = None,
        today: Optional[date] = None,
    ) -> WorkoutStats:
        return compute_stats(self.workouts, self.types, period, reference, today)
    
    def get_type_distribution(self, period: Period, reference: Optional[date] = None) -> List[Bucket]:
        return by_type(self._in_period(period, reference), self.types)
    
    def get_weekday_distribution(self, period: Period, reference: Optional[date] = None) -> List[Bucket]:
        return by_weekday(self._in_period(period, reference))
    
    def get_month_distribution(self, reference: Optional[date] = None) -> List[Bucket]:
        return by_month(self.workouts, reference)
    
    def get_calendar(self, year: int, month: int, today: Optional[date] = None) -> List[CalendarDay]:
        return build_month(year, month, self.workouts, self.types, today)
    
    def _in_period(self, period: Period, reference: Optional[date]) -> List[WorkoutSnapshot]:
        return filter_by_range(self.workouts, resolve_range(period, reference))
    
    def _put_workout(self, workout: Workout) -> None:
        snapshot = WorkoutSnapshot.from_model(workout)
        self.workouts = [w for w in self.workouts if w.id != snapshot.id] + [snapshot]
