from __future__ import annotations
import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Enum as SAEnum, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base, utcnow

if TYPE_CHECKING:
    from assignment.models import Assignment

class VenueType(str, Enum):
    MARKET = "MARKET"
    SHOW = "SHOW"

class Venue(Base):
    __tablename__ = "venues"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    type: Mapped[VenueType] = mapped_column(
        SAEnum(VenueType, name="venue_type"), nullable=False, default=VenueType.MARKET
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    town: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    typical_days: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    assignments: Mapped[list["Assignment"]] = relationship(
        "Assignment", back_populates="venue", cascade="all, delete-orphan", passive_deletes=True
    )

    # duplicates are allowed on request, so this is a lookup index and not a unique constraint
    __table_args__ = (
        Index("ix_venues_name_town", "name", "town"),
    )
