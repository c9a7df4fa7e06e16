from __future__ import annotations
import datetime as dt
import uuid
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum as SAEnum, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base, utcnow

if TYPE_CHECKING:
    from staff.models import Staff
    from venue.models import Venue

class AssignmentStatus(str, Enum):
    PLANNED = "PLANNED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

class Assignment(Base):
    __tablename__ = "assignments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    date: Mapped[dt.date] = mapped_column(Date(), nullable=False, index=True)

    staff_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("staff.id", ondelete="CASCADE"), index=True, nullable=False
    )
    venue_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("venues.id", ondelete="CASCADE"), index=True, nullable=False
    )

    # local wall-clock "HH:MM", no timezone
    start_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)

    notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    status: Mapped[AssignmentStatus] = mapped_column(
        SAEnum(AssignmentStatus, name="assignment_status"),
        nullable=False,
        default=AssignmentStatus.PLANNED,
    )

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # relationships
    staff: Mapped["Staff"] = relationship("Staff", back_populates="assignments", lazy="joined")
    venue: Mapped["Venue"] = relationship("Venue", back_populates="assignments", lazy="joined")

    __table_args__ = (
        # one assignment per staff member per day
        UniqueConstraint("date", "staff_id", name="uq_assignment_date_staff"),
        Index("ix_assignments_date_venue", "date", "venue_id"),
    )
