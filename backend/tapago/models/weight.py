"""
Body weight entry database model.
"""
import uuid
import datetime as dt
from datetime import datetime

from sqlalchemy import Date, DateTime, Float, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from tapago.core.database import Base


class WeightEntry(Base):
    """Body weight recorded by a user on a calendar day."""
    
    __tablename__ = "weight_entries"
    
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow
    )
    
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_weight_entries_user_date"),
    )
    
    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": str(self.id),
            "weight": self.weight,
            "date": self.date.isoformat(),
            "createdAt": int(self.created_at.timestamp() * 1000),
        }
