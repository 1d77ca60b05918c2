"""
Workout Store - Database operations for workouts and their exercises.
"""
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tapago.core.auth import UserContext
from tapago.core.exceptions import DuplicateDateError, InvalidDataError, NotFoundError
from tapago.core.logging import get_logger
from tapago.models.workout import Workout, WorkoutExercise
from tapago.models.workout_type import WorkoutType

logger = get_logger(__name__)

_UNSET: Any = object()


def normalize_exercise_order(exercises: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Return exercises with contiguous zero-based ``order`` values.
    
    Entries are ranked by their ``order``; an entry without one ranks as if
    its ``order`` were its list position. Equal ranks keep list order. The
    input is not modified.
    """
    indexed = sorted(
        enumerate(exercises),
        key=lambda pair: (pair[1].get("order", pair[0]), pair[0]),
    )
    return [{**exercise, "order": position} for position, (_, exercise) in enumerate(indexed)]


class WorkoutStore:
    """
    Database store for a single user's workouts.
    
    Enforces one workout per user per day: saving on an occupied date
    updates that workout, moving a workout onto an occupied date fails.
    """
    
    def __init__(self, db: AsyncSession, user: UserContext):
        self.db = db
        self.user = user
    
    async def list(self) -> List[Workout]:
        """All workouts, newest first."""
        result = await self.db.execute(
            select(Workout)
            .where(Workout.user_id == self.user.user_id)
            .order_by(Workout.date.desc())
        )
        return list(result.scalars().all())
    
    async def get(self, workout_id: uuid.UUID) -> Workout:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.id == workout_id, Workout.user_id == self.user.user_id)
            .execution_options(populate_existing=True)
        )
        workout = result.scalar_one_or_none()
        if workout is None:
            raise NotFoundError("Treino não encontrado")
        return workout
    
    async def get_by_date(self, day: date) -> Optional[Workout]:
        result = await self.db.execute(
            select(Workout).where(Workout.user_id == self.user.user_id, Workout.date == day)
        )
        return result.scalar_one_or_none()
    
    async def save(
        self,
        day: date,
        type_id: Optional[uuid.UUID] = None,
        custom_type: Optional[str] = None,
        notes: Optional[str] = None,
        exercises: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> Tuple[Workout, bool]:
        """
        Create a workout, or update the one already logged on that day.
        
        Args:
            day: Calendar day of the workout
            type_id: Workout type reference (ignored when custom_type is set)
            custom_type: Free-text type label
            notes: Optional notes
            exercises: Exercises to store; None keeps the existing ones
            
        Returns:
            (workout, created) tuple
        """
        type_id, custom_type = await self._resolve_type(type_id, custom_type)
        existing = await self.get_by_date(day)
        
        if existing is not None:
            existing.type_id = type_id
            existing.custom_type = custom_type
            existing.notes = notes
            if exercises is not None:
                self._replace_exercises(existing, exercises)
            await self._commit(day)
            
            logger.info("Updated workout for existing date", workout_id=str(existing.id), date=day.isoformat())
            return await self.get(existing.id), False
        
        workout = Workout(
            user_id=self.user.user_id,
            date=day,
            type_id=type_id,
            custom_type=custom_type,
            notes=notes,
            exercises=[],
        )
        if exercises:
            self._replace_exercises(workout, exercises)
        self.db.add(workout)
        await self._commit(day)
        
        logger.info("Created workout", workout_id=str(workout.id), date=day.isoformat())
        return await self.get(workout.id), True
    
    async def update(
        self,
        workout_id: uuid.UUID,
        day: Optional[date] = None,
        type_id: Optional[uuid.UUID] = _UNSET,
        custom_type: Optional[str] = _UNSET,
        notes: Optional[str] = _UNSET,
        exercises: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> Workout:
        """
        Update a workout in place.
        
        A date change is checked against the new date; if another workout
        already occupies it, DuplicateDateError is raised and nothing changes.
        """
        workout = await self.get(workout_id)
        
        if day is not None and day != workout.date:
            clash = await self.get_by_date(day)
            if clash is not None and clash.id != workout.id:
                raise DuplicateDateError("Já existe um treino registrado nesta data", day=day)
            workout.date = day
        
        if type_id is not _UNSET or custom_type is not _UNSET:
            new_type_id = workout.type_id if type_id is _UNSET else type_id
            new_custom = workout.custom_type if custom_type is _UNSET else custom_type
            if type_id is not _UNSET and type_id is not None and custom_type is _UNSET:
                # picking a type replaces a previous custom label
                new_custom = None
            workout.type_id, workout.custom_type = await self._resolve_type(new_type_id, new_custom)
        
        if notes is not _UNSET:
            workout.notes = notes
        if exercises is not None:
            self._replace_exercises(workout, exercises)
        
        await self._commit(workout.date)
        logger.info("Updated workout", workout_id=str(workout_id))
        return await self.get(workout_id)
    
    async def delete(self, workout_id: uuid.UUID) -> None:
        workout = await self.get(workout_id)
        await self.db.delete(workout)
        await self.db.commit()
        logger.info("Deleted workout", workout_id=str(workout_id))
    
    async def remove_exercise(self, workout_id: uuid.UUID, exercise_id: uuid.UUID) -> Workout:
        """Remove one exercise and re-index the remaining ones."""
        workout = await self.get(workout_id)
        remaining = [e for e in workout.exercises if e.id != exercise_id]
        if len(remaining) == len(workout.exercises):
            raise NotFoundError("Exercício não encontrado")
        
        workout.exercises = remaining
        for position, exercise in enumerate(remaining):
            exercise.exercise_order = position
        workout.updated_at = datetime.utcnow()
        await self.db.commit()
        
        logger.debug("Removed exercise", workout_id=str(workout_id), exercise_id=str(exercise_id))
        return await self.get(workout_id)
    
    def _replace_exercises(self, workout: Workout, exercises: Sequence[Dict[str, Any]]) -> None:
        workout.updated_at = datetime.utcnow()
        workout.exercises = [
            WorkoutExercise(
                name=exercise["name"],
                sets=exercise.get("sets", 3),
                reps=exercise.get("reps", ""),
                weight=exercise.get("weight"),
                notes=exercise.get("notes"),
                exercise_order=exercise["order"],
            )
            for exercise in normalize_exercise_order(exercises)
        ]
    
    async def _resolve_type(
        self,
        type_id: Optional[uuid.UUID],
        custom_type: Optional[str],
    ) -> Tuple[Optional[uuid.UUID], Optional[str]]:
        """A custom label wins over a type reference; one of them is required."""
        custom_type = custom_type.strip() if custom_type else None
        if custom_type:
            return None, custom_type
        if type_id is None:
            raise InvalidDataError("Selecione um tipo de treino ou informe um tipo personalizado")
        
        result = await self.db.execute(
            select(WorkoutType.id).where(
                WorkoutType.id == type_id,
                WorkoutType.user_id == self.user.user_id,
            )
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Tipo de treino não encontrado")
        return type_id, None
    
    async def _commit(self, day: date) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent insert on the same day
            await self.db.rollback()
            raise DuplicateDateError("Já existe um treino registrado nesta data", day=day)
