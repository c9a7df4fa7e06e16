from __future__ import annotations
import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class StaffSchema(BaseModel):
    id: uuid.UUID
    name: str
    role: Optional[str] = None
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

# PUBLIC payload, what clients send
class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    role: Optional[str] = Field(None, max_length=100)
    active: bool = True
    model_config = ConfigDict(extra="forbid")

class StaffUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[str] = Field(None, max_length=100)
    active: Optional[bool] = None
    model_config = ConfigDict(extra="forbid")
