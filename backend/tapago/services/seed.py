"""
Default workout types seeded for every user on first access.
"""
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tapago.core.logging import get_logger
from tapago.models.workout_type import WorkoutType

logger = get_logger(__name__)

# (name, icon, color, protected from removal)
DEFAULT_WORKOUT_TYPES = [
    ("Treino A", "🅰️", "hsl(142 76% 36%)", True),
    ("Treino B", "🅱️", "hsl(217 91% 60%)", True),
    ("Treino C", "🔥", "hsl(195 92% 50%)", True),
    ("Treino D", "💪", "hsl(25 95% 53%)", True),
    ("Treino E", "⚡", "hsl(120 76% 36%)", True),
    ("Treino F", "🏋️", "hsl(0 84% 60%)", True),
    ("Treino G", "🚀", "hsl(300 76% 46%)", False),
    ("Treino H", "🎯", "hsl(45 93% 47%)", False),
    ("Treino I", "💯", "hsl(330 81% 60%)", False),
]


async def seed_default_types(db: AsyncSession, user_id: str) -> List[WorkoutType]:
    """
    Insert the default workout types for a user.
    
    Each seeded row carries its default name as ``default_key``, which is
    unique per user. If another request seeded the same user first, the
    insert is rolled back and an empty list is returned.
    """
    created = [
        WorkoutType(
            user_id=user_id,
            name=name,
            icon=icon,
            color=color,
            order_index=index,
            is_default=protected,
            default_key=name,
            exercises=[],
        )
        for index, (name, icon, color, protected) in enumerate(DEFAULT_WORKOUT_TYPES)
    ]
    db.add_all(created)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Default workout types already seeded", user_id=user_id)
        return []
    
    logger.info("Seeded default workout types", user_id=user_id, count=len(created))
    return created
