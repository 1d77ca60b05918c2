"""
Body weight analytics: period filtering, latest entry and change.
"""
from datetime import date
from typing import List, Optional, Sequence

from tapago.services.analytics.filters import filter_by_range
from tapago.services.analytics.periods import Period, resolve_range
from tapago.services.analytics.snapshots import WeightSnapshot


def newest_first(entries: Sequence[WeightSnapshot]) -> List[WeightSnapshot]:
    return sorted(entries, key=lambda e: e.date, reverse=True)


def entries_for_period(
    entries: Sequence[WeightSnapshot],
    period: Period,
    reference: Optional[date] = None,
) -> List[WeightSnapshot]:
    """Entries inside the period, newest first."""
    return newest_first(filter_by_range(entries, resolve_range(period, reference)))


def latest_weight(entries: Sequence[WeightSnapshot]) -> Optional[WeightSnapshot]:
    ordered = newest_first(entries)
    return ordered[0] if ordered else None


def weight_change(
    entries: Sequence[WeightSnapshot],
    period: Period,
    reference: Optional[date] = None,
) -> Optional[float]:
    """
    Newest minus oldest weight within the period.
    
    None when the period holds fewer than two entries.
    """
    filtered = entries_for_period(entries, period, reference)
    if len(filtered) < 2:
        return None
    return round(filtered[0].weight - filtered[-1].weight, 2)
