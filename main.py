"""
Bublr Import - Main Entry Point

Article import service: converts posts from other blogging platforms into
editor-compatible HTML.
"""

import structlog
import uvicorn

from bublr_import.config import get_settings
from bublr_import.core.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def main():
    """Main entry point for running the application."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    logger.info(
        "Starting server",
        host=settings.api_host,
        port=settings.api_port,
        environment=settings.app_env,
        version="0.1.0",
    )

    uvicorn.run(
        "bublr_import.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
