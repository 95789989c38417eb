"""
Core exception hierarchy for Bublr Import.

Provides standardized exception types so the API layer can map failures
to client (4xx) or server (5xx) responses without inspecting messages.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class BublrImportError(Exception):
    """Base exception for all Bublr Import errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PermanentError(BublrImportError):
    """
    Errors that won't be fixed by retrying.

    Examples: Missing content, unknown platform, malformed usernames.
    """

    pass


# =============================================================================
# Request Errors
# =============================================================================


class MissingInputError(PermanentError):
    """Raised when a required request field is absent or empty."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} is required", {"field": field})


class InvalidPlatformError(PermanentError):
    """Raised when a platform identifier has no registered descriptor."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__("Invalid platform", {"platform": platform})


class InvalidInputError(PermanentError):
    """Raised when a username or blog URL fails the platform's format check."""

    def __init__(self, platform_name: str, value: str):
        self.platform_name = platform_name
        self.value = value
        super().__init__(
            f"Invalid {platform_name} username/URL format",
            {"value": value},
        )


# =============================================================================
# Conversion Errors
# =============================================================================


class TransformFailure(BublrImportError):
    """Raised when rule application fails unexpectedly during normalization.

    Wraps the underlying exception; no partial output accompanies it.
    """

    def __init__(self, platform: str, message: str, rule: Optional[str] = None):
        self.platform = platform
        self.rule = rule
        details = {"platform": platform}
        if rule:
            details["rule"] = rule
        super().__init__(message, details)
