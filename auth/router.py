from fastapi import APIRouter, HTTPException, status

from core.app_logger import get_logger
from .schema import LoginPayload, LoginResponse
from .service import check_password

logger = get_logger("auth")

auth_router = APIRouter(prefix="/auth", tags=["Auth"])

@auth_router.post("/login", response_model=LoginResponse)
def login(payload: LoginPayload):
    if not check_password(payload.password):
        logger.warning("rejected admin login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")
    return {"role": "admin"}
