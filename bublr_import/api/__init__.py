"""
Bublr Import FastAPI Application.

This module contains the REST API for article import:

- main: FastAPI application entry point and configuration
- routes/: API endpoint definitions organized by domain
- models: Pydantic request/response models
- middleware/: Request metrics middleware

API Structure:
- /health - Health, liveness and readiness checks
- /api/import/convert - Convert article HTML from any supported platform
- /api/medium/convert - Convert Medium article HTML
- /api/import/platforms - List importable platforms
- /api/import/resolve - Resolve a platform handle to its RSS feed
- /metrics - Prometheus metrics

Example:
    from bublr_import.api.main import app

    # Run with: uvicorn bublr_import.api.main:app --reload
"""

from bublr_import.api.main import app

__all__ = ["app"]
