"""
Observability endpoints for the MyColor service.

Liveness probe and the in-process metrics summary.
"""
from typing import Any, Dict

from fastapi import APIRouter

from app.config import SERVICE_VERSION
from app.schemas import HealthResponse
from app.utils.metrics import get_metrics


router = APIRouter(tags=["observability"])


@router.get("/healthz", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(version=SERVICE_VERSION)


@router.get("/metrics")
async def get_metrics_summary() -> Dict[str, Any]:
    """Request counters and timing statistics since startup."""
    return get_metrics().get_summary()
