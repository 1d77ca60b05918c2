"""
Workout database models: one workout per user per day, with ordered exercises.
"""
import uuid
import datetime as dt
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tapago.core.database import Base


class Workout(Base):
    """Workout logged by a user on a calendar day."""
    
    __tablename__ = "workouts"
    
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    type_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    custom_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(280), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow
    )
    
    exercises: Mapped[List["WorkoutExercise"]] = relationship(
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.exercise_order",
        lazy="selectin",
    )
    
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_workouts_user_date"),
    )
    
    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": str(self.id),
            "date": self.date.isoformat(),
            "typeId": str(self.type_id) if self.type_id else None,
            "customType": self.custom_type,
            "notes": self.notes,
            "createdAt": int(self.created_at.timestamp() * 1000),
            "updatedAt": int(self.updated_at.timestamp() * 1000),
        }


class WorkoutExercise(Base):
    """Exercise performed within a workout."""
    
    __tablename__ = "workout_exercises"
    
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    sets: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    reps: Mapped[str] = mapped_column(String(30), nullable=False, default="")
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    exercise_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow
    )
    
    workout: Mapped[Workout] = relationship(back_populates="exercises")
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "notes": self.notes,
            "order": self.exercise_order,
        }
