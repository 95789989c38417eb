"""Health check endpoints for the Bublr Import API.

Reports service uptime and runs a conversion self-check against a known
fixture so a broken HTML parser install shows up as unhealthy.
"""

from datetime import datetime, timezone
import time
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException

from bublr_import.api.models import HealthCheckResponse, HealthStatus
from bublr_import.normalizer import NormalizationPipeline, Platform, get_pipeline

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])

API_VERSION = "1.0.0"

SELF_CHECK_INPUT = '<figure class="c"><img src="https://x/y.png"></figure><h5 id="t">Title</h5>'
SELF_CHECK_OUTPUT = '<img src="https://x/y.png" /><h3>Title</h3>'

# Track server start time for uptime calculation
_server_start_time: Optional[float] = None


def set_server_start_time() -> None:
    """Set the server start time. Called on application startup."""
    global _server_start_time
    _server_start_time = time.time()


def get_uptime_seconds() -> Optional[float]:
    """Get server uptime in seconds."""
    if _server_start_time is None:
        return None
    return time.time() - _server_start_time


def check_normalizer_health(pipeline: NormalizationPipeline) -> HealthStatus:
    """Convert a fixed fixture and compare against the expected output."""
    start_time = time.time()
    try:
        output = pipeline.run(SELF_CHECK_INPUT, Platform.MEDIUM).html
        latency = (time.time() - start_time) * 1000

        if output != SELF_CHECK_OUTPUT:
            logger.warning("normalizer_self_check_mismatch", output=output[:200])
            return HealthStatus(
                status="degraded",
                latency_ms=round(latency, 2),
                message="Normalizer output differs from expected fixture",
            )

        return HealthStatus(
            status="healthy",
            latency_ms=round(latency, 2),
            message=f"{len(pipeline.list_platforms())} platform rule sets loaded",
        )
    except Exception as e:
        latency = (time.time() - start_time) * 1000
        logger.error("normalizer_health_check_failed", error=str(e))
        return HealthStatus(
            status="unhealthy",
            latency_ms=round(latency, 2),
            message=f"Normalizer self-check failed: {str(e)[:100]}",
        )


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health Check",
    description="Check the health status of the API and its components.",
)
async def health_check(
    pipeline: NormalizationPipeline = Depends(get_pipeline),
) -> HealthCheckResponse:
    """Run the normalizer self-check and report overall status."""
    services = {"normalizer": check_normalizer_health(pipeline)}

    statuses = [s.status for s in services.values()]
    if all(s == "healthy" for s in statuses):
        overall_status = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall_status = "unhealthy"
    else:
        overall_status = "degraded"

    return HealthCheckResponse(
        status=overall_status,
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc),
        services=services,
        uptime_seconds=get_uptime_seconds(),
    )


@router.get(
    "/health/live",
    summary="Liveness Check",
    description="Simple liveness check for container orchestration.",
)
async def liveness() -> dict:
    """
    Simple liveness check for Kubernetes/Cloud Run.

    Returns 200 if the service is alive.
    """
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get(
    "/health/ready",
    summary="Readiness Check",
    description="Check if the service is ready to accept traffic.",
)
async def readiness(
    pipeline: NormalizationPipeline = Depends(get_pipeline),
) -> dict:
    """
    Readiness check for Kubernetes/Cloud Run.

    Returns 200 only if the normalizer passes its self-check.
    """
    normalizer_status = check_normalizer_health(pipeline)

    if normalizer_status.status != "healthy":
        raise HTTPException(
            status_code=503,
            detail="Service not ready: normalizer self-check failed",
        )

    return {"status": "ready", "timestamp": datetime.now(timezone.utc).isoformat()}
