"""Middleware package for Bublr Import API.

Provides custom middleware components for the FastAPI application.
"""

from bublr_import.api.middleware.request_metrics import RequestMetricsMiddleware

__all__ = ["RequestMetricsMiddleware"]
