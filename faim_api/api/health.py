"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from faim_api.models.response import HealthResponse, LivenessResponse, ReadinessResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat()
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Readiness check - is a FAIM client attached?"""
    configured = getattr(request.app.state, "forecast_service", None) is not None
    return ReadinessResponse(ready=configured, forecaster_configured=configured)


@router.get("/health/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness check - is the service running?"""
    return LivenessResponse(alive=True)
