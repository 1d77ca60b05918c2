"""
Workout Type Store - Database operations for workout type descriptors.
"""
import uuid
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tapago.core.auth import UserContext
from tapago.core.exceptions import NotFoundError, ProtectedResourceError
from tapago.core.logging import get_logger
from tapago.models.workout_type import WorkoutType
from tapago.services.seed import seed_default_types

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("name", "icon", "color", "exercises")


class WorkoutTypeStore:
    """
    Database store for a single user's workout types.
    
    Default types are seeded the first time a user's types are read.
    Removing a type leaves workouts that reference it untouched.
    """
    
    def __init__(self, db: AsyncSession, user: UserContext):
        self.db = db
        self.user = user
    
    async def list(self) -> List[WorkoutType]:
        """All workout types in display order, seeding defaults if needed."""
        types = await self._fetch_all()
        if not types:
            await seed_default_types(self.db, self.user.user_id)
            types = await self._fetch_all()
        return types
    
    async def get(self, type_id: uuid.UUID) -> WorkoutType:
        result = await self.db.execute(
            select(WorkoutType).where(
                WorkoutType.id == type_id,
                WorkoutType.user_id == self.user.user_id,
            )
        )
        workout_type = result.scalar_one_or_none()
        if workout_type is None:
            raise NotFoundError("Tipo de treino não encontrado")
        return workout_type
    
    async def create(
        self,
        name: str,
        icon: str,
        color: str,
        exercises: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> WorkoutType:
        """Create a custom workout type at the end of the display order."""
        result = await self.db.execute(
            select(func.max(WorkoutType.order_index)).where(WorkoutType.user_id == self.user.user_id)
        )
        last_index = result.scalar_one_or_none()
        
        workout_type = WorkoutType(
            user_id=self.user.user_id,
            name=name.strip(),
            icon=icon,
            color=color,
            order_index=0 if last_index is None else last_index + 1,
            is_default=False,
            exercises=list(exercises or []),
        )
        self.db.add(workout_type)
        await self.db.commit()
        await self.db.refresh(workout_type)
        
        logger.info("Created workout type", type_id=str(workout_type.id), name=workout_type.name)
        return workout_type
    
    async def update(self, type_id: uuid.UUID, **changes: Any) -> WorkoutType:
        """Update name, icon, color or exercise templates."""
        workout_type = await self.get(type_id)
        
        for field_name in UPDATABLE_FIELDS:
            if changes.get(field_name) is not None:
                value = changes[field_name]
                setattr(workout_type, field_name, value.strip() if field_name == "name" else value)
        
        await self.db.commit()
        await self.db.refresh(workout_type)
        
        logger.info("Updated workout type", type_id=str(type_id))
        return workout_type
    
    async def delete(self, type_id: uuid.UUID) -> None:
        workout_type = await self.get(type_id)
        if workout_type.is_default:
            raise ProtectedResourceError("Não é possível remover tipos de treino padrão")
        
        await self.db.delete(workout_type)
        await self.db.commit()
        logger.info("Deleted workout type", type_id=str(type_id))
    
    async def reorder(self, ordered_ids: Sequence[uuid.UUID]) -> List[WorkoutType]:
        """
        Set the display order from a list of type ids.
        
        Types missing from the list keep their relative order after the
        listed ones.
        """
        types = await self._fetch_all()
        by_id = {t.id: t for t in types}
        
        unknown = [type_id for type_id in ordered_ids if type_id not in by_id]
        if unknown:
            raise NotFoundError("Tipo de treino não encontrado")
        
        listed = [by_id[type_id] for type_id in dict.fromkeys(ordered_ids)]
        listed_ids = set(ordered_ids)
        rest = [t for t in types if t.id not in listed_ids]
        for position, workout_type in enumerate(listed + rest):
            workout_type.order_index = position
        
        await self.db.commit()
        logger.info("Reordered workout types", count=len(listed))
        return await self._fetch_all()
    
    async def _fetch_all(self) -> List[WorkoutType]:
        result = await self.db.execute(
            select(WorkoutType)
            .where(WorkoutType.user_id == self.user.user_id)
            .order_by(WorkoutType.order_index, WorkoutType.created_at)
        )
        return list(result.scalars().all())
