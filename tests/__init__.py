"""
Bublr Import Test Suite.

This package contains all tests for the article import service:

- unit/: Normalizer rules, platform rule sets, source registry, settings, metrics
- integration/: API endpoint tests through the full FastAPI stack
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
"""
