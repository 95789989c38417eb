"""
Monitoring and observability for Bublr Import.

Provides Prometheus metrics for conversion volume, latency and rule activity.

Usage:
    from bublr_import.monitoring import track_conversion

    with track_conversion("substack"):
        html = normalize(content, "substack")
"""

from bublr_import.monitoring.metrics import (
    API_REQUEST_DURATION,
    API_REQUEST_TOTAL,
    CONVERSION_DURATION,
    CONVERSION_TOTAL,
    RULE_REWRITES,
    get_metrics_app,
    record_rule_rewrites,
    track_api_request,
    track_conversion,
)

__all__ = [
    "API_REQUEST_DURATION",
    "API_REQUEST_TOTAL",
    "CONVERSION_DURATION",
    "CONVERSION_TOTAL",
    "RULE_REWRITES",
    "get_metrics_app",
    "record_rule_rewrites",
    "track_api_request",
    "track_conversion",
]
