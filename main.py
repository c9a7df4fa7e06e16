from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.app_logger import get_logger

from auth.router import auth_router
from staff.router import staff_router
from venue.router import venue_router
from assignment.router import assignment_router
import models_bootstrap

logger = get_logger("http")

openapi_tags = [
    {
        "name": "Assignments",
        "description": "Staff bookings per date, collisions and week copying",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title="Market Staff Scheduler", openapi_tags=openapi_tags)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


# Storage faults are opaque to clients
@app.exception_handler(SQLAlchemyError)
async def storage_fault_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("storage error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth_router, prefix="/api")
app.include_router(staff_router, prefix="/api")
app.include_router(venue_router, prefix="/api")
app.include_router(assignment_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
@app.get("/api/health", tags=['Health Checks'])
def read_root():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
