"""
Workouts API endpoints.
"""
import datetime as dt
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field, model_validator

from tapago.api.deps import get_fitlog
from tapago.core.logging import get_logger
from tapago.models.workout import Workout
from tapago.services.fitlog import FitLogService

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Request/Response Schemas
# ========================================

class ExerciseSchema(BaseModel):
    """Exercise performed in a workout."""
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)
    sets: int = Field(3, ge=1)
    reps: str = Field("", max_length=30, description='e.g. "10", "8-12", "máximo"')
    weight: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)
    
    def to_store(self) -> dict:
        data = self.model_dump(exclude={"id"})
        if data["order"] is None:
            data.pop("order")
        return data


class SaveWorkoutRequest(BaseModel):
    """Request to log a workout; an existing workout on the same date is updated."""
    date: dt.date
    typeId: Optional[UUID] = None
    customType: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=280)
    exercises: Optional[list[ExerciseSchema]] = None
    
    @model_validator(mode="after")
    def require_type(self):
        if not self.typeId and not (self.customType and self.customType.strip()):
            raise ValueError("typeId or customType is required")
        return self


class UpdateWorkoutRequest(BaseModel):
    """Request to edit a workout; omitted fields are left unchanged."""
    date: Optional[dt.date] = None
    typeId: Optional[UUID] = None
    customType: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=280)
    exercises: Optional[list[ExerciseSchema]] = None


class WorkoutResponse(BaseModel):
    """Workout response."""
    id: str
    date: str
    typeId: Optional[str]
    customType: Optional[str]
    notes: Optional[str]
    createdAt: int
    updatedAt: int
    exercises: list[ExerciseSchema] = []


class HistoryItem(BaseModel):
    """Workout as listed in the history view."""
    id: str
    date: str
    typeId: Optional[str]
    customType: Optional[str]
    label: str
    notes: Optional[str]


def _to_response(workout: Workout) -> WorkoutResponse:
    return WorkoutResponse(
        **workout.to_dict(),
        exercises=[ExerciseSchema(**e.to_dict()) for e in workout.exercises],
    )


def _clean_notes(notes: Optional[str]) -> Optional[str]:
    return notes.strip() or None if notes else None


# ========================================
# API Endpoints
# ========================================

@router.get("", response_model=list[HistoryItem])
async def list_workouts(
    search: Optional[str] = Query(None, description="Matches type, notes or dd/MM/yyyy"),
    start: Optional[dt.date] = Query(None, description="First day to include"),
    end: Optional[dt.date] = Query(None, description="Last day to include"),
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Workout history, newest first, optionally limited to a date range.
    """
    await fitlog.load()
    return [
        HistoryItem(
            id=w.id,
            date=w.date.isoformat(),
            typeId=w.type_id,
            customType=w.custom_type,
            label=fitlog.type_label(w),
            notes=w.notes,
        )
        for w in fitlog.history(search, start, end)
    ]


@router.get("/by-date/{day}", response_model=WorkoutResponse)
async def get_workout_by_date(
    day: dt.date,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Get the workout logged on a given date.
    """
    workout = await fitlog.get_workout_by_date(day)
    if workout is None:
        raise HTTPException(status_code=404, detail="Nenhum treino nesta data")
    return _to_response(workout)


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: UUID,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Get a specific workout with its exercises.
    """
    return _to_response(await fitlog.workout_store.get(workout_id))


@router.post("", response_model=WorkoutResponse)
async def save_workout(
    request: SaveWorkoutRequest,
    response: Response,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Log a workout. Saving on a date that already has one updates it.
    """
    logger.info("Saving workout", date=request.date.isoformat())
    
    workout, created = await fitlog.save_workout(
        request.date,
        type_id=request.typeId,
        custom_type=request.customType,
        notes=_clean_notes(request.notes),
        exercises=[e.to_store() for e in request.exercises] if request.exercises is not None else None,
    )
    response.status_code = 201 if created else 200
    return _to_response(workout)


@router.put("/{workout_id}", response_model=WorkoutResponse)
async def update_workout(
    workout_id: UUID,
    request: UpdateWorkoutRequest,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Update a workout. Moving it onto a date that already has a workout fails with 409.
    """
    changes = {}
    fields = request.model_fields_set
    if "date" in fields and request.date is not None:
        changes["day"] = request.date
    if "typeId" in fields:
        changes["type_id"] = request.typeId
    if "customType" in fields:
        changes["custom_type"] = request.customType
    if "notes" in fields:
        changes["notes"] = _clean_notes(request.notes)
    if request.exercises is not None:
        changes["exercises"] = [e.to_store() for e in request.exercises]
    
    workout = await fitlog.update_workout(workout_id, **changes)
    return _to_response(workout)


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: UUID,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Delete a workout and its exercises.
    """
    await fitlog.delete_workout(workout_id)
    return {"message": "Treino excluído"}


@router.get("/{workout_id}/exercises", response_model=list[ExerciseSchema])
async def list_exercises(
    workout_id: UUID,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Exercises of a workout in order.
    """
    workout = await fitlog.workout_store.get(workout_id)
    return [ExerciseSchema(**e.to_dict()) for e in workout.exercises]


@router.put("/{workout_id}/exercises", response_model=list[ExerciseSchema])
async def replace_exercises(
    workout_id: UUID,
    exercises: list[ExerciseSchema],
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Replace all exercises of a workout.
    """
    workout = await fitlog.update_workout(workout_id, exercises=[e.to_store() for e in exercises])
    return [ExerciseSchema(**e.to_dict()) for e in workout.exercises]


@router.delete("/{workout_id}/exercises/{exercise_id}", response_model=list[ExerciseSchema])
async def delete_exercise(
    workout_id: UUID,
    exercise_id: UUID,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Remove one exercise; the remaining ones are re-numbered from 0.
    """
    workout = await fitlog.workout_store.remove_exercise(workout_id, exercise_id)
    return [ExerciseSchema(**e.to_dict()) for e in workout.exercises]
