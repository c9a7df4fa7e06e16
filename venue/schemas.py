import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .models import VenueType

class VenueSchema(BaseModel):
    id: uuid.UUID
    type: VenueType
    name: str
    town: str
    address: Optional[str] = None
    notes: Optional[str] = None
    typical_days: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

# PUBLIC payload, what clients send
class VenueCreate(BaseModel):
    type: VenueType = VenueType.MARKET
    name: str = Field(..., min_length=1, max_length=200)
    town: str = Field(..., min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)
    typical_days: Optional[List[str]] = None
    # create even if a venue with this name already exists in the town
    allow_duplicate: bool = False
    model_config = ConfigDict(extra="forbid")

class VenueUpdate(BaseModel):
    type: Optional[VenueType] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    town: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)
    typical_days: Optional[List[str]] = None
    model_config = ConfigDict(extra="forbid")
