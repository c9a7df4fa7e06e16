from __future__ import annotations
import datetime as dt
import uuid
from typing import Iterable, Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.app_logger import get_logger
from .models import Assignment, AssignmentStatus
from .service import find_in_slot
from staff.models import Staff

logger = get_logger("assignment.copy_week")

WEEK_DAYS = 7
SKIP_REASON = "Already has assignment"


def _week_window(start: dt.date) -> tuple[dt.date, dt.date]:
    # inclusive: start .. start + 6
    return start, start + dt.timedelta(days=WEEK_DAYS - 1)

def _source_assignments(
    db: Session,
    start: dt.date,
    end: dt.date,
    staff_ids: Optional[Iterable[uuid.UUID]],
) -> list[Assignment]:
    stmt = (
        select(Assignment)
        .join(Staff, Staff.id == Assignment.staff_id)
        .where(Assignment.date >= start, Assignment.date <= end)
    )
    if staff_ids:
        stmt = stmt.where(Assignment.staff_id.in_(list(staff_ids)))
    stmt = stmt.order_by(Assignment.date.asc(), Staff.name.asc(), Assignment.created_at.asc(), Assignment.id.asc())
    return list(db.scalars(stmt))


def copy_week(
    db: Session,
    *,
    source_start: dt.date,
    target_start: dt.date,
    staff_ids: Optional[Iterable[uuid.UUID]] = None,
) -> dict:
    """
    Copy the 7 days starting at source_start onto the days starting at target_start.

    - The offset is the literal day delta between the two anchors, any sign.
    - A target slot that is already taken is skipped, never overwritten.
    - Copies are always PLANNED, whatever the source status was.
    - Each row is checked and committed on its own; one taken slot does not stop the rest.
    """
    staff_ids = list(staff_ids) if staff_ids else None
    window_start, window_end = _week_window(source_start)

    source = _source_assignments(db, window_start, window_end, staff_ids)
    if not source:
        raise HTTPException(status_code=404, detail="No assignments found in source week")

    day_offset = (target_start - source_start).days

    # Snapshot the source rows; commits below expire the ORM instances
    plan = [
        {
            "date": src.date + dt.timedelta(days=day_offset),
            "staff_id": src.staff_id,
            "venue_id": src.venue_id,
            "start_time": src.start_time,
            "end_time": src.end_time,
            "notes": src.notes,
        }
        for src in source
    ]

    created: list[Assignment] = []
    skipped: list[dict] = []

    for item in plan:
        slot = {"date": item["date"], "staff_id": item["staff_id"], "reason": SKIP_REASON}

        if find_in_slot(db, item["date"], item["staff_id"]):
            skipped.append(slot)
            continue

        row = Assignment(**item, status=AssignmentStatus.PLANNED)
        db.add(row)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            # only a filled slot is a skip; any other constraint failure propagates
            if find_in_slot(db, item["date"], item["staff_id"]) is None:
                raise
            logger.info("slot for staff %s on %s taken concurrently", item["staff_id"], item["date"])
            skipped.append(slot)
            continue
        created.append(row)

    for row in created:
        db.refresh(row)

    logger.info(
        "copy week %s -> %s (offset %+d days): created %d, skipped %d",
        source_start, target_start, day_offset, len(created), len(skipped),
    )
    return {
        "message": f"Copied {len(created)} assignments, skipped {len(skipped)}",
        "created": created,
        "skipped": skipped,
    }
