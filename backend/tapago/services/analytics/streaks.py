"""
Streak calculations over sets of workout days.
"""
from datetime import date, timedelta
from typing import Iterable, Optional

from tapago.services.analytics.snapshots import DateLike, to_day

CURRENT_STREAK_LOOKBACK_DAYS = 365


def max_streak(days: Iterable[DateLike]) -> int:
    """
    Longest run of consecutive calendar days.
    
    Days are sorted ascending and scanned pairwise: a gap of exactly one
    day extends the run, anything else starts a new run of length 1.
    """
    ordered = sorted(to_day(day) for day in days)
    if not ordered:
        return 0
    
    longest = 1
    current = 1
    for previous, day in zip(ordered, ordered[1:]):
        if (day - previous).days == 1:
            current += 1
        else:
            longest = max(longest, current)
            current = 1
    
    return max(longest, current)


def current_streak(
    days: Iterable[DateLike],
    reference: Optional[date] = None,
    lookback: int = CURRENT_STREAK_LOOKBACK_DAYS,
) -> int:
    """Consecutive workout days ending at the reference date (today by default)."""
    present = {to_day(day) for day in days}
    cursor = reference or date.today()
    
    streak = 0
    for _ in range(lookback):
        if cursor not in present:
            break
        streak += 1
        cursor -= timedelta(days=1)
    
    return streak
