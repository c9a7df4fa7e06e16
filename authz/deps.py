from fastapi import Depends, HTTPException
from auth.service import get_current_role
from auth.schema import Role

def require_admin(role: Role = Depends(get_current_role)) -> None:
    if role != "admin":
        raise HTTPException(status_code=403, detail="Admin role required")
