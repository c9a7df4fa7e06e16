from __future__ import annotations
import datetime as dt
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.service import get_current_role
from authz.deps import require_admin

from .schema import (
    AssignmentSchema,
    AssignmentResult,
    AssignmentCreate,
    AssignmentUpdate,
    CopyWeekPayload,
    CopyWeekResponse,
    )
from . import service
from .copy_week_service import copy_week as copy_week_service


assignment_router = APIRouter(prefix="/assignments", tags=["Assignments"])

# List assignments in a date window, ordered by date then staff name
@assignment_router.get("", response_model=list[AssignmentSchema])
def list_assignments(
    from_date: dt.date = Query(..., alias="from", description="Inclusive start date"),
    to_date: dt.date = Query(..., alias="to", description="Inclusive end date"),
    staff_id: Optional[uuid.UUID] = Query(None),
    venue_id: Optional[uuid.UUID] = Query(None),
    db: Session = Depends(get_db),
    role = Depends(get_current_role),
    ):
    return service.get_assignments(
        db,
        from_date=from_date,
        to_date=to_date,
        staff_id=staff_id,
        venue_id=venue_id,
    )

# Copy one week onto another (admin only)
@assignment_router.post("/copy-week", response_model=CopyWeekResponse)
def copy_week(
    payload: CopyWeekPayload,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    return copy_week_service(
        db,
        source_start=payload.source_start_date,
        target_start=payload.target_start_date,
        staff_ids=payload.staff_ids,
    )

# Get single assignment
@assignment_router.get("/{assignment_id}", response_model=AssignmentSchema)
def get_assignment(
    assignment_id: uuid.UUID,
    db: Session = Depends(get_db),
    role = Depends(get_current_role),
    ):
    obj = service.get_assignment(db, assignment_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return obj

# Create assignment (admin only). 201 when new, 200 when an existing one was replaced
@assignment_router.post("", response_model=AssignmentResult, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    response: Response,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    row, replaced = service.create_assignment(db, payload)
    if replaced:
        response.status_code = status.HTTP_200_OK
    result = AssignmentResult.model_validate(row)
    result.replaced = replaced
    return result

# Update assignment (admin only)
@assignment_router.patch("/{assignment_id}", response_model=AssignmentSchema)
def update_assignment(
    assignment_id: uuid.UUID,
    payload: AssignmentUpdate,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    return service.update_assignment(db, assignment_id, payload)

# Delete assignment (admin only)
@assignment_router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_assignment(
    assignment_id: uuid.UUID,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    if not service.delete_assignment(db, assignment_id):
        raise HTTPException(status_code=404, detail="Assignment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
