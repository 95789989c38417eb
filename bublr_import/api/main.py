"""Bublr Import API - Main FastAPI Application.

This module provides the FastAPI application for article import.
It includes:
- CORS middleware configuration
- Optional API key authentication
- Health check and Prometheus metrics endpoints
- Article conversion and platform endpoints under /api

Usage:
    # Run with uvicorn
    uvicorn bublr_import.api.main:app --reload

    # Or run directly
    python -m bublr_import.api.main
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from bublr_import.api.middleware import RequestMetricsMiddleware
from bublr_import.api.models import (
    ClientErrorResponse,
    ErrorResponse,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from bublr_import.api.routes.convert import router as convert_router
from bublr_import.api.routes.health import API_VERSION, router as health_router, set_server_start_time
from bublr_import.api.routes.platforms import router as platforms_router
from bublr_import.config.settings import get_settings
from bublr_import.core.exceptions import PermanentError, TransformFailure
from bublr_import.monitoring.metrics import get_metrics_app

logger = structlog.get_logger(__name__)

API_TITLE = "Bublr Import API"
API_DESCRIPTION = """
## Article import for the Bublr editor

Converts posts published on other blogging platforms into the HTML accepted
by the editor.

### Supported platforms

Medium, Substack, Blogger, Hashnode, WordPress, Ghost and DEV.to. Any other
platform value gets generic cleaning only.

### Getting Started

1. **Find the feed**: `POST /api/import/resolve` with a platform and handle
2. **Convert a post**: `POST /api/import/convert` with the post HTML and platform
"""


# =============================================================================
# API Key Authentication Middleware
# =============================================================================


class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Middleware to validate API key for all requests except health/docs endpoints.

    Enable by setting API_KEY_ENABLED=true and API_KEY=<secret> in environment.
    """

    # Endpoints that don't require authentication
    PUBLIC_PATHS = {
        "/", "/health", "/health/live", "/health/ready",
        "/docs", "/redoc", "/openapi.json", "/metrics", "/metrics/",
    }

    async def dispatch(self, request: Request, call_next):
        settings = get_settings()

        if not settings.api_key_enabled:
            return await call_next(request)

        if request.url.path in self.PUBLIC_PATHS:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        expected_key = settings.api_key.get_secret_value() if settings.api_key else None

        if not expected_key:
            logger.error("api_key_enabled_but_not_set")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Server misconfiguration: API key authentication enabled but no key configured"},
            )

        if not api_key:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Missing X-API-Key header"},
            )

        if api_key != expected_key:
            logger.warning("invalid_api_key_attempt", path=request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Invalid API key"},
            )

        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Record the start time for uptime reporting."""
    logger.info("application_starting")
    set_server_start_time()
    logger.info("application_started")

    yield

    logger.info("application_stopped")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=[
        {
            "name": "Health",
            "description": "System health and status endpoints",
        },
        {
            "name": "Import",
            "description": "Convert imported article HTML to editor-compatible HTML",
        },
        {
            "name": "Platforms",
            "description": "Importable platforms and RSS feed resolution",
        },
    ],
)

_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allowed_origins,
    allow_credentials=_settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-API-Key", "Accept"],
)
app.add_middleware(APIKeyMiddleware)
app.add_middleware(RequestMetricsMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(PermanentError)
async def permanent_error_handler(request: Request, exc: PermanentError) -> JSONResponse:
    """Reject requests that can never succeed as sent."""
    logger.info("request_rejected", path=request.url.path, error=exc.message)
    response = ClientErrorResponse(error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response.model_dump(exclude_none=True),
    )


@app.exception_handler(TransformFailure)
async def transform_failure_handler(request: Request, exc: TransformFailure) -> JSONResponse:
    """Report a failed conversion with the underlying message."""
    response = ClientErrorResponse(error="Failed to convert article", details=exc.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with detailed response."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append(ValidationErrorDetail(
            field=field,
            message=error["msg"],
            value=error.get("input"),
        ))

    response = ValidationErrorResponse(
        errors=errors,
        timestamp=datetime.now(timezone.utc),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )

    response = ErrorResponse(
        error="internal_server_error",
        message="An unexpected error occurred",
        detail=str(exc) if get_settings().debug else None,
        path=request.url.path,
        timestamp=datetime.now(timezone.utc),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump(mode="json"),
    )


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Root endpoint - service information."""
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "api": "/api",
    }


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)

api_router = APIRouter(prefix="/api")
api_router.include_router(convert_router)
api_router.include_router(platforms_router)

app.include_router(api_router)

app.mount("/metrics", get_metrics_app())


# =============================================================================
# Development Server
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    from bublr_import.core.logging_config import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    uvicorn.run(
        "bublr_import.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
