# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.config import settings
from app.dependencies import SongRepositoryDep
from app.exceptions import SongRepositoryError

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    database: str
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(repository: SongRepositoryDep):
    """
    Readiness check endpoint.

    Reports "degraded" when the songs table cannot be queried.
    """
    try:
        repository.ping()
        database = "healthy"
    except SongRepositoryError as e:
        database = f"unhealthy: {e.message[:50]}"

    return ReadinessResponse(
        status="ready" if database == "healthy" else "degraded",
        database=database,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Whether the service process is alive."""
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
