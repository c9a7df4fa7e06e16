from __future__ import annotations
import secrets
from typing import Optional

from fastapi import Header

from core.config_loader import settings
from .schema import Role


def check_password(password: Optional[str]) -> bool:
    if not password:
        return False
    return secrets.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())


def get_current_role(x_admin_password: Optional[str] = Header(None)) -> Role:
    """
    Resolve the caller's role from the shared admin password header.
    Anyone without it is a view-only staff user.
    """
    return "admin" if check_password(x_admin_password) else "staff"
