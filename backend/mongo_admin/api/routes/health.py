"""Health & Readiness Checks — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until the lifespan has created the connection provider
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "mongo-admin-api",
        "version": "1.0.0",
    }


@router.get("/ready")
def readiness_check(request: Request):
    """Readiness check: reports bound sessions."""
    provider = getattr(request.app.state, "connections", None)
    if provider is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "provider_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"active_sessions": provider.active_sessions()},
    }
