"""
Date-range selection for calendar-aligned and rolling periods.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Optional
import calendar


class Period(str, Enum):
    """Period tags accepted by the statistics and weight views."""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    LAST_YEAR = "1y"
    ALL = "all"
    
    @property
    def is_rolling(self) -> bool:
        return self in ROLLING_WINDOW_DAYS


ROLLING_WINDOW_DAYS = {
    Period.LAST_7_DAYS: 7,
    Period.LAST_30_DAYS: 30,
    Period.LAST_90_DAYS: 90,
    Period.LAST_YEAR: 365,
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days. Both bounds None means unbounded."""
    start: Optional[date] = None
    end: Optional[date] = None
    
    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None
    
    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


UNBOUNDED = DateRange()


def week_bounds(reference: date) -> DateRange:
    """Monday to Sunday week containing the reference date."""
    start = reference - timedelta(days=reference.weekday())
    return DateRange(start, start + timedelta(days=6))


def month_bounds(reference: date) -> DateRange:
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return DateRange(reference.replace(day=1), reference.replace(day=last_day))


def year_bounds(reference: date) -> DateRange:
    return DateRange(date(reference.year, 1, 1), date(reference.year, 12, 31))


def resolve_range(period: Period, reference: Optional[date] = None) -> DateRange:
    """
    Compute the inclusive date range for a period.
    
    Args:
        period: Period tag
        reference: Day the period is anchored to (defaults to today)
        
    Returns:
        DateRange; UNBOUNDED for Period.ALL
    """
    reference = reference or date.today()
    period = Period(period)
    
    if period is Period.WEEK:
        return week_bounds(reference)
    if period is Period.MONTH:
        return month_bounds(reference)
    if period is Period.YEAR:
        return year_bounds(reference)
    if period is Period.ALL:
        return UNBOUNDED
    
    days = ROLLING_WINDOW_DAYS[period]
    return DateRange(reference - timedelta(days=days), reference)
