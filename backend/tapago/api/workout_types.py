"""
Workout Types API endpoints.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, field_validator

from tapago.api.deps import get_fitlog
from tapago.core.logging import get_logger
from tapago.models.workout_type import WorkoutType
from tapago.services.fitlog import FitLogService

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Request/Response Schemas
# ========================================

class ExerciseTemplate(BaseModel):
    """Exercise suggested when logging a workout of this type."""
    name: str = Field(..., min_length=1, max_length=100)
    sets: int = Field(3, ge=1)
    reps: str = Field("", max_length=30)


class CreateWorkoutTypeRequest(BaseModel):
    """Request to create a custom workout type."""
    name: str = Field(..., max_length=50)
    icon: str = Field("💪", max_length=16)
    color: str = Field("hsl(142 76% 36%)", max_length=40)
    exercises: list[ExerciseTemplate] = []
    
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("O nome do treino é obrigatório")
        return value


class UpdateWorkoutTypeRequest(BaseModel):
    """Request to edit a workout type; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, max_length=50)
    icon: Optional[str] = Field(None, max_length=16)
    color: Optional[str] = Field(None, max_length=40)
    exercises: Optional[list[ExerciseTemplate]] = None
    
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("O nome do treino é obrigatório")
        return value


class ReorderRequest(BaseModel):
    """New display order, as a list of type ids."""
    ids: list[UUID] = Field(..., description="Type ids in display order")


class WorkoutTypeResponse(BaseModel):
    """Workout type response."""
    id: str
    name: str
    icon: str
    color: str
    orderIndex: int
    isDefault: bool
    exercises: list[ExerciseTemplate] = []


def _to_response(workout_type: WorkoutType) -> WorkoutTypeResponse:
    return WorkoutTypeResponse(**workout_type.to_dict())


# ========================================
# API Endpoints
# ========================================

@router.get("", response_model=list[WorkoutTypeResponse])
async def list_workout_types(
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    All workout types in display order. Defaults are created on first access.
    """
    return [_to_response(t) for t in await fitlog.type_store.list()]


@router.post("", response_model=WorkoutTypeResponse, status_code=201)
async def create_workout_type(
    request: CreateWorkoutTypeRequest,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Create a custom workout type.
    """
    workout_type = await fitlog.add_workout_type(
        name=request.name,
        icon=request.icon,
        color=request.color,
        exercises=[e.model_dump() for e in request.exercises],
    )
    return _to_response(workout_type)


@router.put("/order", response_model=list[WorkoutTypeResponse])
async def reorder_workout_types(
    request: ReorderRequest,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Change the display order of workout types.
    """
    return [_to_response(t) for t in await fitlog.reorder_workout_types(request.ids)]


@router.put("/{type_id}", response_model=WorkoutTypeResponse)
async def update_workout_type(
    type_id: UUID,
    request: UpdateWorkoutTypeRequest,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Update a workout type.
    """
    changes = request.model_dump(exclude_none=True)
    workout_type = await fitlog.update_workout_type(type_id, **changes)
    return _to_response(workout_type)


@router.delete("/{type_id}", status_code=204)
async def delete_workout_type(
    type_id: UUID,
    fitlog: FitLogService = Depends(get_fitlog),
):
    """
    Remove a custom workout type. Default types cannot be removed;
    workouts that used the type keep their reference.
    """
    await fitlog.remove_workout_type(type_id)
    return Response(status_code=204)
