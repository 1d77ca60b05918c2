"""
Shared API dependencies.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tapago.core.auth import UserContext, get_current_user
from tapago.core.database import get_db
from tapago.services.fitlog import FitLogService


async def get_fitlog(
    db: AsyncSession = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> FitLogService:
    """FitLogService bound to the authenticated user; call load() before reading analytics."""
    return FitLogService(db, user)
