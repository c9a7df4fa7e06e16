import uuid
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select, or_

from core.app_logger import get_logger
from .models import Venue, VenueType
from .schemas import VenueSchema, VenueCreate, VenueUpdate

logger = get_logger("venue")

def get_venues(
    db: Session,
    *,
    type: Optional[VenueType] = None,
    town: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Venue]:
    stmt = select(Venue)
    if type is not None:
        stmt = stmt.where(Venue.type == type)
    if town:
        stmt = stmt.where(Venue.town.ilike(f"%{town}%"))
    if search:
        stmt = stmt.where(or_(Venue.name.ilike(f"%{search}%"), Venue.town.ilike(f"%{search}%")))
    stmt = stmt.order_by(Venue.name.asc(), Venue.town.asc())
    return list(db.scalars(stmt))

def get_venue(db: Session, venue_id: uuid.UUID) -> Optional[Venue]:
    return db.get(Venue, venue_id)

def find_duplicate(db: Session, name: str, town: str) -> Optional[Venue]:
    stmt = select(Venue).where(Venue.name == name, Venue.town == town).order_by(Venue.created_at)
    return db.scalars(stmt).first()

def create_venue(db: Session, payload: VenueCreate) -> Venue:
    if not payload.allow_duplicate:
        existing = find_duplicate(db, payload.name, payload.town)
        if existing:
            logger.info("duplicate venue %r in %r rejected", payload.name, payload.town)
            raise HTTPException(
                status_code=409,
                detail={
                    "error": "Duplicate venue",
                    "message": f'A venue named "{payload.name}" in {payload.town} already exists',
                    "existing_venue": VenueSchema.model_validate(existing).model_dump(mode="json"),
                },
            )

    db_venue = Venue(**payload.model_dump(exclude={"allow_duplicate"}))
    db.add(db_venue)
    db.commit()
    db.refresh(db_venue)
    return db_venue

def update_venue(db: Session, venue_id: uuid.UUID, patch: VenueUpdate) -> Optional[Venue]:
    db_venue = db.get(Venue, venue_id)
    if not db_venue:
        return None
    data = patch.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(db_venue, k, v)
    db.commit(); db.refresh(db_venue)
    return db_venue

def delete_venue(db: Session, venue_id: uuid.UUID) -> bool:
    db_venue = db.get(Venue, venue_id)
    if not db_venue:
        return False
    db.delete(db_venue); db.commit()
    return True
