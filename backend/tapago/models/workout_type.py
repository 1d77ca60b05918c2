"""
Workout type database model.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from tapago.core.database import Base


class WorkoutType(Base):
    """User-configurable workout type (name, icon, color, exercise templates)."""
    
    __tablename__ = "workout_types"
    
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    icon: Mapped[str] = mapped_column(String(16), nullable=False)
    color: Mapped[str] = mapped_column(String(40), nullable=False, default="hsl(142 76% 36%)")
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Seeded rows only; unique per user, NULL for custom types
    default_key: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    # Ordered list of {"name", "sets", "reps"} templates
    exercises: Mapped[list] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=list
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow
    )
    
    __table_args__ = (
        UniqueConstraint("user_id", "default_key", name="uq_workout_types_user_default"),
    )
    
    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": str(self.id),
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "orderIndex": self.order_index,
            "isDefault": self.is_default,
            "exercises": self.exercises or [],
        }
