import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.service import get_current_role
from authz.deps import require_admin
from .schema import StaffSchema, StaffCreate, StaffUpdate
from . import service

staff_router = APIRouter(prefix="/staff", tags=["Staff"])

# List staff, active only unless asked otherwise
@staff_router.get("", response_model=list[StaffSchema])
def list_staff(
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
    role = Depends(get_current_role),
    ):
    return service.get_staff(db, include_inactive=include_inactive)

# Get staff member by id
@staff_router.get("/{staff_id}", response_model=StaffSchema)
def staff_detail(staff_id: uuid.UUID, db: Session = Depends(get_db), role = Depends(get_current_role)):
    obj = service.get_staff_member(db, staff_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Staff not found")
    return obj

# Create staff member
@staff_router.post("", response_model=StaffSchema, status_code=status.HTTP_201_CREATED)
def staff_post(payload: StaffCreate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return service.create_staff(db, payload)

# Update staff member
@staff_router.patch("/{staff_id}", response_model=StaffSchema)
def staff_patch(staff_id: uuid.UUID, payload: StaffUpdate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    obj = service.update_staff(db, staff_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="Staff not found")
    return obj

# Delete staff member (assignments go with it)
@staff_router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
def staff_delete(staff_id: uuid.UUID, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    if not service.delete_staff(db, staff_id):
        raise HTTPException(status_code=404, detail="Staff not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
