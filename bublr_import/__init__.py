"""
Bublr Import - article import service for the Bublr writing platform.

This package contains the core modules for importing posts from other
blogging platforms:
- normalizer: Platform and universal HTML cleaning rules
- sources: Importable platform registry and feed resolution
- api: FastAPI application and endpoints
- config: Pydantic settings
- core: Exceptions and logging setup
- monitoring: Prometheus metrics
"""

__version__ = "0.1.0"
