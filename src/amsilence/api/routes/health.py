from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from amsilence.api.deps import get_backend
from amsilence.providers.base import AlertingBackend

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str = "0.1.0"


class ReadinessResponse(BaseModel):
    status: str
    alertmanager: str
    details: str | None = None


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="healthy")


@router.get("/ready", response_model=ReadinessResponse, status_code=status.HTTP_200_OK)
async def readiness_check(
    backend: AlertingBackend = Depends(get_backend),  # noqa: B008
) -> ReadinessResponse:
    """Readiness check with Alertmanager connectivity."""
    probe = getattr(backend, "health_check", None)
    if probe is None:
        return ReadinessResponse(status="ready", alertmanager="unknown")

    health = await probe()
    overall_status = "ready" if health.status == "healthy" else "not_ready"
    return ReadinessResponse(
        status=overall_status,
        alertmanager=health.status,
        details=health.details,
    )
