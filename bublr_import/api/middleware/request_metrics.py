"""Request metrics middleware for FastAPI.

Records duration and status code of every API request in Prometheus.

Usage:
    from bublr_import.api.middleware import RequestMetricsMiddleware

    app = FastAPI()
    app.add_middleware(RequestMetricsMiddleware)

The metrics endpoint itself is not recorded.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from bublr_import.monitoring.metrics import track_api_request


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Middleware timing each request and counting it by status code."""

    EXCLUDED_PREFIXES = ("/metrics",)

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path.startswith(self.EXCLUDED_PREFIXES):
            return await call_next(request)

        with track_api_request(request.method, path) as ctx:
            response = await call_next(request)
            ctx["status_code"] = response.status_code
        return response
