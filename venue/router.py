import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.service import get_current_role
from authz.deps import require_admin
from .models import VenueType
from .schemas import VenueSchema, VenueCreate, VenueUpdate
from . import service

venue_router = APIRouter(prefix="/venues", tags=["Venues"])

# List venues with optional filters
@venue_router.get("", response_model=list[VenueSchema])
def list_venues(
    type: Optional[VenueType] = Query(None),
    town: Optional[str] = Query(None, description="Substring match on town"),
    search: Optional[str] = Query(None, description="Substring match on name or town"),
    db: Session = Depends(get_db),
    role = Depends(get_current_role),
    ):
    return service.get_venues(db, type=type, town=town, search=search)

# Get venue by id
@venue_router.get("/{venue_id}", response_model=VenueSchema)
def venue_detail(venue_id: uuid.UUID, db: Session = Depends(get_db), role = Depends(get_current_role)):
    obj = service.get_venue(db, venue_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Venue not found")
    return obj

# Create venue (409 on same name + town unless allow_duplicate)
@venue_router.post("", response_model=VenueSchema, status_code=status.HTTP_201_CREATED)
def venue_post(payload: VenueCreate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return service.create_venue(db, payload)

# Update venue
@venue_router.patch("/{venue_id}", response_model=VenueSchema)
def venue_patch(venue_id: uuid.UUID, payload: VenueUpdate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    obj = service.update_venue(db, venue_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="Venue not found")
    return obj

# Delete venue (assignments go with it)
@venue_router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
def venue_delete(venue_id: uuid.UUID, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    if not service.delete_venue(db, venue_id):
        raise HTTPException(status_code=404, detail="Venue not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
