"""
Statistics API endpoints.
"""
import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from tapago.api.deps import get_fitlog
from tapago.core.logging import get_logger
from tapago.services.analytics import Period
from tapago.services.fitlog import FitLogService

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Response Schemas
# ========================================

class BucketResponse(BaseModel):
    name: str
    count: int
    color: str
    icon: str


class StatsResponse(BaseModel):
    """Statistics report with chart distributions for a period."""
    period: Period
    totalWorkouts: int
    workoutDays: int
    restDays: int
    lostDays: int
    mostFrequentType: str
    streak: int
    currentStreak: int
    percentage: int
    totalDays: int
    start: Optional[str] = None
    end: Optional[str] = None
    typeDistribution: list[BucketResponse] = []
    weekdayDistribution: list[BucketResponse] = []
    monthDistribution: list[BucketResponse] = []


# ========================================
# API Endpoints
# ========================================

@router.get("", response_model=StatsResponse)
async def get_stats(
    period: Period = Query(Period.MONTH),
    date: Optional[dt.date] = Query(None, description="Day the period is anchored to, defaults to today"),
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Statistics for a period.
    
    Calendar periods (week, month, year) contain the reference date;
    rolling periods end on it. The month distribution always covers the
    reference date's year.
    """
    await fitlog.load()
    stats = fitlog.get_stats(period, date)
    
    logger.debug(
        "Computed stats",
        period=period.value,
        total_workouts=stats.total_workouts,
        percentage=stats.percentage,
    )
    
    report = stats.to_dict()
    return StatsResponse(
        period=period,
        totalWorkouts=report["total_workouts"],
        workoutDays=report["workout_days"],
        restDays=report["rest_days"],
        lostDays=report["lost_days"],
        mostFrequentType=report["most_frequent_type"],
        streak=report["streak"],
        currentStreak=report["current_streak"],
        percentage=report["percentage"],
        totalDays=report["total_days"],
        start=report["start"],
        end=report["end"],
        typeDistribution=[b.to_dict() for b in fitlog.get_type_distribution(period, date)],
        weekdayDistribution=[b.to_dict() for b in fitlog.get_weekday_distribution(period, date)],
        monthDistribution=[b.to_dict() for b in fitlog.get_month_distribution(date)],
    )
