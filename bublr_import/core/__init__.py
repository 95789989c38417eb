"""
Core infrastructure modules for Bublr Import.

Provides common utilities used across the application:
- exceptions: Standardized exception hierarchy
- logging_config: structlog configuration
"""

from bublr_import.core.exceptions import (
    BublrImportError,
    PermanentError,
    MissingInputError,
    InvalidPlatformError,
    InvalidInputError,
    TransformFailure,
)
from bublr_import.core.logging_config import configure_logging

__all__ = [
    # Exceptions
    "BublrImportError",
    "PermanentError",
    "MissingInputError",
    "InvalidPlatformError",
    "InvalidInputError",
    "TransformFailure",
    # Logging
    "configure_logging",
]
