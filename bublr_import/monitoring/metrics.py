"""
Prometheus metrics for Bublr Import observability.

Usage:
    from bublr_import.monitoring.metrics import track_conversion

    with track_conversion("medium"):
        result = pipeline.run(html, "medium")

    # Or manually
    CONVERSION_DURATION.labels(platform="medium").observe(duration)
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from starlette.applications import Starlette
from starlette.responses import Response
from starlette.routing import Route


# =============================================================================
# Metric Definitions
# =============================================================================

# Conversion metrics
CONVERSION_TOTAL = Counter(
    "bublr_import_conversions_total",
    "Total number of article conversions",
    ["platform", "status"],
)

CONVERSION_DURATION = Histogram(
    "bublr_import_conversion_duration_seconds",
    "Duration of article conversions in seconds",
    ["platform"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

RULE_REWRITES = Counter(
    "bublr_import_rule_rewrites_total",
    "Elements rewritten by each normalization rule",
    ["platform", "rule"],
)

# API request metrics
API_REQUEST_DURATION = Histogram(
    "bublr_import_api_request_duration_seconds",
    "Duration of API requests in seconds",
    ["method", "endpoint", "status_code"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

API_REQUEST_TOTAL = Counter(
    "bublr_import_api_request_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
)


# =============================================================================
# Tracking Context Managers
# =============================================================================


@contextmanager
def track_conversion(platform: str) -> Generator[None, None, None]:
    """
    Context manager to track conversion duration and status.

    Usage:
        with track_conversion("ghost"):
            html = normalize(content, "ghost")
    """
    start_time = time.perf_counter()
    status = "success"
    try:
        yield
    except Exception:
        status = "error"
        raise
    finally:
        duration = time.perf_counter() - start_time
        CONVERSION_DURATION.labels(platform=platform).observe(duration)
        CONVERSION_TOTAL.labels(platform=platform, status=status).inc()


@contextmanager
def track_api_request(
    method: str,
    endpoint: str,
) -> Generator[dict, None, None]:
    """
    Context manager to track API request duration and status.

    Usage:
        with track_api_request("POST", "/api/import/convert") as ctx:
            response = await call_next(request)
            ctx["status_code"] = response.status_code
    """
    start_time = time.perf_counter()
    context = {"status_code": "500"}  # Default to error
    try:
        yield context
    finally:
        duration = time.perf_counter() - start_time
        status_code = str(context.get("status_code", "500"))
        API_REQUEST_DURATION.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).observe(duration)
        API_REQUEST_TOTAL.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).inc()


def record_rule_rewrites(platform: str, rewrites: dict[str, int]) -> None:
    """Add per-rule rewrite counts from one conversion."""
    for rule, count in rewrites.items():
        RULE_REWRITES.labels(platform=platform, rule=rule).inc(count)


# =============================================================================
# Metrics Endpoint
# =============================================================================


async def metrics_endpoint(request) -> Response:
    """Prometheus metrics endpoint handler."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


def get_metrics_app() -> Starlette:
    """
    Get a Starlette app for serving metrics.

    Mount this at /metrics in your main app:
        from bublr_import.monitoring.metrics import get_metrics_app
        app.mount("/metrics", get_metrics_app())
    """
    return Starlette(
        routes=[
            Route("/", metrics_endpoint),
        ]
    )
