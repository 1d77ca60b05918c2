"""
Weight tracking API endpoints.
"""
import datetime as dt
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field

from tapago.api.deps import get_fitlog
from tapago.core.logging import get_logger
from tapago.services.analytics import Period, WeightSnapshot
from tapago.services.fitlog import FitLogService

logger = get_logger(__name__)
router = APIRouter()

MIN_WEIGHT = 20
MAX_WEIGHT = 300


# ========================================
# Request/Response Schemas
# ========================================

class SaveWeightRequest(BaseModel):
    """Request to record body weight; an entry on the same date is replaced."""
    weight: float = Field(..., ge=MIN_WEIGHT, le=MAX_WEIGHT, description="Weight in kg")
    date: Optional[dt.date] = Field(None, description="Defaults to today")


class WeightEntryResponse(BaseModel):
    """Weight entry response."""
    id: str
    weight: float
    date: str


class WeightSummaryResponse(BaseModel):
    """Weight entries for a period with latest value and change."""
    period: Period
    entries: list[WeightEntryResponse]
    latest: Optional[WeightEntryResponse] = None
    change: Optional[float] = None


def _entry(snapshot: WeightSnapshot) -> WeightEntryResponse:
    return WeightEntryResponse(id=snapshot.id, weight=snapshot.weight, date=snapshot.date.isoformat())


# ========================================
# API Endpoints
# ========================================

@router.get("", response_model=WeightSummaryResponse)
async def get_weights(
    period: Period = Query(Period.LAST_30_DAYS),
    date: Optional[dt.date] = Query(None, description="Reference date, defaults to today"),
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Weight entries for a period (newest first), the latest entry overall,
    and the change between the oldest and newest entry in the period.
    """
    await fitlog.load()
    latest = fitlog.get_latest_weight()
    return WeightSummaryResponse(
        period=period,
        entries=[_entry(e) for e in fitlog.get_weight_entries(period, date)],
        latest=_entry(latest) if latest else None,
        change=fitlog.get_weight_change(period, date),
    )


@router.post("", response_model=WeightEntryResponse)
async def save_weight(
    request: SaveWeightRequest,
    response: Response,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Record body weight for a day.
    """
    entry, created = await fitlog.save_weight(request.weight, request.date)
    response.status_code = 201 if created else 200
    return WeightEntryResponse(id=str(entry.id), weight=entry.weight, date=entry.date.isoformat())


@router.delete("/{entry_id}", status_code=204)
async def delete_weight(
    entry_id: UUID,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Delete a weight entry.
    """
    await fitlog.delete_weight(entry_id)
    return Response(status_code=204)
