"""
Calendar API endpoints.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from tapago.api.deps import get_fitlog
from tapago.services.analytics.calendar_view import WEEKDAY_HEADERS, leading_blanks
from tapago.services.fitlog import FitLogService

router = APIRouter()


class CalendarDayResponse(BaseModel):
    date: str
    status: str
    label: str
    icon: str = ""
    color: Optional[str] = None
    workoutId: Optional[str] = None


class CalendarMonthResponse(BaseModel):
    """One month grid, Monday first."""
    year: int
    month: int
    weekdayHeaders: list[str]
    leadingBlanks: int
    days: list[CalendarDayResponse]


@router.get("", response_model=CalendarMonthResponse)
async def get_calendar(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Day-by-day status for a month (defaults to the current month).
    """
    today = date.today()
    year = year or today.year
    month = month or today.month
    
    await fitlog.load()
    days = fitlog.get_calendar(year, month, today)
    return CalendarMonthResponse(
        year=year,
        month=month,
        weekdayHeaders=WEEKDAY_HEADERS,
        leadingBlanks=leading_blanks(year, month),
        days=[d.to_dict() for d in days],
    )
