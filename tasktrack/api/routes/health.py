"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until the lifespan has wired both services

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      load balancer
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from tasktrack.config import get_settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — services wired and answering."""
    task_service = getattr(request.app.state, "task_service", None)
    user_service = getattr(request.app.state, "user_service", None)
    if task_service is None or user_service is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "services_not_initialized"},
        )
    return {
        "status": "ready",
        "checks": {
            "tasks": task_service.count_tasks(),
            "users": user_service.count_users(),
        },
    }
