from __future__ import annotations
import datetime as dt
import uuid
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import AssignmentStatus
from staff.schema import StaffSchema
from venue.schemas import VenueSchema

TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"


class AssignmentSchema(BaseModel):
    id: uuid.UUID
    date: dt.date
    staff_id: uuid.UUID
    venue_id: uuid.UUID
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
    status: AssignmentStatus
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    staff: StaffSchema
    venue: VenueSchema
    model_config = ConfigDict(from_attributes=True)


class AssignmentResult(AssignmentSchema):
    # true when an existing assignment in the slot was overwritten
    replaced: bool = False


# PUBLIC payload from clients, also the service DTO
class AssignmentCreate(BaseModel):
    date: dt.date
    staff_id: uuid.UUID
    venue_id: uuid.UUID
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN, description="HH:MM, 24h")
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN, description="HH:MM, 24h")
    notes: Optional[str] = Field(None, max_length=500)
    status: AssignmentStatus = AssignmentStatus.PLANNED
    replace_existing: bool = False
    model_config = ConfigDict(extra="forbid")


class AssignmentUpdate(BaseModel):
    date: Optional[dt.date] = None
    staff_id: Optional[uuid.UUID] = None
    venue_id: Optional[uuid.UUID] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    notes: Optional[str] = Field(None, max_length=500)
    status: Optional[AssignmentStatus] = None
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for name in ("date", "staff_id", "venue_id", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class CopyWeekPayload(BaseModel):
    source_start_date: dt.date
    target_start_date: dt.date
    # omitted or empty means every staff member
    staff_ids: Optional[List[uuid.UUID]] = None
    model_config = ConfigDict(extra="forbid")


class SkippedSlot(BaseModel):
    date: dt.date
    staff_id: uuid.UUID
    reason: str


class CopyWeekResponse(BaseModel):
    message: str
    created: List[AssignmentSchema]
    skipped: List[SkippedSlot]
