"""
Weight Store - Database operations for body weight entries.
"""
import uuid
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tapago.core.auth import UserContext
from tapago.core.exceptions import DuplicateDateError, NotFoundError
from tapago.core.logging import get_logger
from tapago.models.weight import WeightEntry

logger = get_logger(__name__)


class WeightStore:
    """
    Database store for a single user's weight entries.
    
    One entry per day: saving on a date that already has an entry
    updates it.
    """
    
    def __init__(self, db: AsyncSession, user: UserContext):
        self.db = db
        self.user = user
    
    async def list(self) -> List[WeightEntry]:
        """All entries, newest first."""
        result = await self.db.execute(
            select(WeightEntry)
            .where(WeightEntry.user_id == self.user.user_id)
            .order_by(WeightEntry.date.desc())
        )
        return list(result.scalars().all())
    
    async def get_by_date(self, day: date) -> Optional[WeightEntry]:
        result = await self.db.execute(
            select(WeightEntry).where(
                WeightEntry.user_id == self.user.user_id,
                WeightEntry.date == day,
            )
        )
        return result.scalar_one_or_none()
    
    async def save(self, weight: float, day: Optional[date] = None) -> Tuple[WeightEntry, bool]:
        """
        Record the weight for a day (today by default).
        
        Returns:
            (entry, created) tuple
        """
        day = day or date.today()
        entry = await self.get_by_date(day)
        created = entry is None
        
        if created:
            entry = WeightEntry(user_id=self.user.user_id, weight=weight, date=day)
            self.db.add(entry)
        else:
            entry.weight = weight
        
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateDateError("Já existe um peso registrado nesta data", day=day)
        await self.db.refresh(entry)
        
        logger.info(
            "Saved weight entry",
            entry_id=str(entry.id),
            date=day.isoformat(),
            created=created,
        )
        return entry, created
    
    async def delete(self, entry_id: uuid.UUID) -> None:
        result = await self.db.execute(
            select(WeightEntry).where(
                WeightEntry.id == entry_id,
                WeightEntry.user_id == self.user.user_id,
            )
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            raise NotFoundError("Registro de peso não encontrado")
        
        await self.db.delete(entry)
        await self.db.commit()
        logger.info("Deleted weight entry", entry_id=str(entry_id))
