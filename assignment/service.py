from __future__ import annotations
import datetime as dt
import uuid
from typing import Optional, List, Tuple

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.app_logger import get_logger
from .models import Assignment
from .schema import AssignmentCreate, AssignmentUpdate, AssignmentSchema
from staff.models import Staff
from staff.service import get_staff_member
from venue.service import get_venue

logger = get_logger("assignment")

# fields a replace is allowed to overwrite; id, date and staff stay put
REPLACEABLE_FIELDS = ("venue_id", "start_time", "end_time", "notes", "status")


# ---------- helpers ----------

def find_in_slot(
    db: Session,
    date: dt.date,
    staff_id: uuid.UUID,
    *,
    exclude_id: Optional[uuid.UUID] = None,
) -> Assignment | None:
    stmt = select(Assignment).where(Assignment.date == date, Assignment.staff_id == staff_id)
    if exclude_id is not None:
        stmt = stmt.where(Assignment.id != exclude_id)
    return db.scalars(stmt).first()

def collision(message: str, existing: Assignment | None = None) -> HTTPException:
    """
    409 carrying the occupying assignment so the client can offer
    "replace" instead of a generic error.
    """
    return HTTPException(
        status_code=409,
        detail={
            "error": "Collision detected",
            "message": message,
            "existing_assignment": (
                AssignmentSchema.model_validate(existing).model_dump(mode="json") if existing else None
            ),
        },
    )

def _occupied_message(existing: Assignment) -> str:
    return f"Staff member already assigned to {existing.venue.name} on this date"


# ---------- queries ----------

def get_assignments(
    db: Session,
    *,
    from_date: dt.date,
    to_date: dt.date,
    staff_id: Optional[uuid.UUID] = None,
    venue_id: Optional[uuid.UUID] = None,
) -> List[Assignment]:
    if from_date > to_date:
        raise HTTPException(status_code=422, detail="from must be on or before to")

    stmt = (
        select(Assignment)
        .join(Staff, Staff.id == Assignment.staff_id)
        .where(Assignment.date >= from_date, Assignment.date <= to_date)
    )
    if staff_id is not None:
        stmt = stmt.where(Assignment.staff_id == staff_id)
    if venue_id is not None:
        stmt = stmt.where(Assignment.venue_id == venue_id)

    stmt = stmt.order_by(Assignment.date.asc(), Staff.name.asc(), Assignment.created_at.asc(), Assignment.id.asc())
    return list(db.scalars(stmt))

def get_assignment(db: Session, assignment_id: uuid.UUID) -> Assignment | None:
    return db.get(Assignment, assignment_id)


# ---------- create / replace ----------

def create_assignment(db: Session, dto: AssignmentCreate) -> Tuple[Assignment, bool]:
    """
    Book a staff member on a date. Returns (assignment, replaced).

    - free slot: venue and staff must exist, a new row is inserted
    - taken slot, replace_existing false: 409, nothing is written
    - taken slot, replace_existing true: the existing row is overwritten in place and keeps its id
    """
    existing = find_in_slot(db, dto.date, dto.staff_id)

    if existing:
        if not dto.replace_existing:
            logger.info("collision for staff %s on %s", dto.staff_id, dto.date)
            raise collision(_occupied_message(existing), existing)

        # venue and status always win; times and notes only when the client sent them
        data = dto.model_dump(include={"venue_id", "status"})
        data.update(dto.model_dump(include=set(REPLACEABLE_FIELDS), exclude_unset=True))
        for k, v in data.items():
            setattr(existing, k, v)
        db.commit()
        db.refresh(existing)
        logger.info("replaced assignment %s for staff %s on %s", existing.id, dto.staff_id, dto.date)
        return existing, True

    if not get_venue(db, dto.venue_id):
        raise HTTPException(status_code=404, detail="Venue not found")
    if not get_staff_member(db, dto.staff_id):
        raise HTTPException(status_code=404, detail="Staff not found")

    row = Assignment(**dto.model_dump(exclude={"replace_existing"}))
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # Another writer took the slot between our check and the insert
        taken = find_in_slot(db, dto.date, dto.staff_id)
        if taken is None:
            raise
        logger.info("slot for staff %s on %s taken concurrently", dto.staff_id, dto.date)
        raise collision(_occupied_message(taken), taken)

    db.refresh(row)
    return row, False


# ---------- update ----------

def update_assignment(db: Session, assignment_id: uuid.UUID, patch: AssignmentUpdate) -> Assignment:
    row = db.get(Assignment, assignment_id)
    if not row:
        raise HTTPException(status_code=404, detail="Assignment not found")

    data = patch.model_dump(exclude_unset=True)

    # Moving to another date or staff member must land in a free slot. No replace on update.
    moves = "date" in data or "staff_id" in data
    new_date = data.get("date", row.date)
    new_staff_id = data.get("staff_id", row.staff_id)
    if moves:
        clash = find_in_slot(db, new_date, new_staff_id, exclude_id=row.id)
        if clash:
            logger.info("update of %s collides with %s", row.id, clash.id)
            raise collision("Staff member already has an assignment on this date", clash)

    if "venue_id" in data and data["venue_id"] != row.venue_id and not get_venue(db, data["venue_id"]):
        raise HTTPException(status_code=404, detail="Venue not found")
    if "staff_id" in data and data["staff_id"] != row.staff_id and not get_staff_member(db, data["staff_id"]):
        raise HTTPException(status_code=404, detail="Staff not found")

    for k, v in data.items():
        setattr(row, k, v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        taken = find_in_slot(db, new_date, new_staff_id, exclude_id=assignment_id)
        if taken is None:
            raise
        raise collision("Staff member already has an assignment on this date", taken)

    db.refresh(row)
    return row


# ---------- delete ----------

def delete_assignment(db: Session, assignment_id: uuid.UUID) -> bool:
    row = db.get(Assignment, assignment_id)
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True
