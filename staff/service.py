import uuid
from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select
from .models import Staff
from .schema import StaffCreate, StaffUpdate

def get_staff(db: Session, *, include_inactive: bool = False) -> List[Staff]:
    statement = select(Staff)
    if not include_inactive:
        statement = statement.where(Staff.active.is_(True))
    statement = statement.order_by(Staff.name.asc())
    return list(db.scalars(statement))

def get_staff_member(db: Session, staff_id: uuid.UUID) -> Optional[Staff]:
    return db.get(Staff, staff_id)

def create_staff(db: Session, staff: StaffCreate) -> Staff:
    db_staff = Staff(name=staff.name, role=staff.role, active=staff.active)
    db.add(db_staff)
    db.commit()
    db.refresh(db_staff)
    return db_staff

def update_staff(db: Session, staff_id: uuid.UUID, patch: StaffUpdate) -> Optional[Staff]:
    db_staff = db.get(Staff, staff_id)
    if not db_staff:
        return None
    data = patch.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(db_staff, k, v)
    db.commit()
    db.refresh(db_staff)
    return db_staff

def delete_staff(db: Session, staff_id: uuid.UUID) -> bool:
    db_staff = db.get(Staff, staff_id)
    if not db_staff:
        return False
    db.delete(db_staff)
    db.commit()
    return True
