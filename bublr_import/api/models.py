"""Pydantic models for API requests and responses.

This module defines all the request/response schemas for the Bublr Import API.
"""

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Conversion Models
# =============================================================================


class ConvertRequest(BaseModel):
    """Request model for converting article HTML."""

    content: Optional[str] = Field(
        None,
        description="Raw article HTML as delivered by the source platform",
        json_schema_extra={"example": "<figure><img src=\"https://x/y.png\"></figure><p>Hello</p>"},
    )
    title: Optional[str] = Field(
        None,
        description="Article title, echoed back unchanged",
    )
    platform: Optional[str] = Field(
        None,
        description="Source platform (medium, substack, blogger, hashnode, wordpress, ghost, devto). "
        "Defaults to medium; unrecognized values get generic cleaning.",
        json_schema_extra={"example": "substack"},
    )


class MediumConvertRequest(BaseModel):
    """Request model for the Medium-only conversion endpoint."""

    content: Optional[str] = Field(None, description="Raw Medium article HTML")
    title: Optional[str] = Field(None, description="Article title, echoed back unchanged")


class ConvertResponse(BaseModel):
    """Response model for a successful conversion."""

    success: bool = Field(default=True, description="Always true on success")
    title: str = Field(default="", description="Article title")
    content: str = Field(..., description="Editor-compatible HTML")


# =============================================================================
# Platform Models
# =============================================================================


class PlatformInfo(BaseModel):
    """Display details for an importable platform."""

    id: str = Field(..., description="Platform identifier")
    name: str = Field(..., description="Display name")
    color: str = Field(..., description="Brand color")
    description: str = Field(..., description="Short description")
    placeholder: str = Field(..., description="Input hint for the handle or URL")


class PlatformListResponse(BaseModel):
    """Response for listing importable platforms."""

    platforms: list[PlatformInfo] = Field(..., description="Importable platforms")


class ResolveFeedRequest(BaseModel):
    """Request to resolve a platform handle to its RSS feed."""

    platform: Optional[str] = Field(None, description="Platform identifier")
    username: Optional[str] = Field(
        None,
        description="Handle or blog address as typed by the user",
        json_schema_extra={"example": "my-letter.substack.com"},
    )


class ResolveFeedResponse(BaseModel):
    """Resolved feed location for a platform handle."""

    success: bool = Field(default=True)
    platform: str = Field(..., description="Platform identifier")
    username: str = Field(..., description="Cleaned handle")
    feed_url: str = Field(..., description="Primary RSS feed URL")
    alternate_feed_url: Optional[str] = Field(None, description="Fallback feed URL, if any")


# =============================================================================
# Health Check Models
# =============================================================================


class HealthStatus(BaseModel):
    """Individual component health status."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Component status"
    )
    latency_ms: Optional[float] = Field(None, description="Check latency in milliseconds")
    message: Optional[str] = Field(None, description="Additional status message")


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Overall system status"
    )
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Check timestamp")
    services: dict[str, HealthStatus] = Field(
        default_factory=dict,
        description="Individual component statuses",
    )
    uptime_seconds: Optional[float] = Field(None, description="Server uptime in seconds")


# =============================================================================
# Error Models
# =============================================================================


class ClientErrorResponse(BaseModel):
    """Error body for rejected requests and failed conversions."""

    error: str = Field(..., description="Human-readable error message")
    details: Optional[str] = Field(None, description="Underlying failure message")


class ErrorResponse(BaseModel):
    """Standard error response model for unexpected failures."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    path: Optional[str] = Field(None, description="Request path that caused the error")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp",
    )


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Optional[Any] = Field(None, description="Invalid value provided")


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: str = Field(default="validation_error", description="Error type")
    message: str = Field(default="Request validation failed", description="Error message")
    errors: list[ValidationErrorDetail] = Field(..., description="List of validation errors")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp",
    )
