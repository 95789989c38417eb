"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- pipeline: Fresh NormalizationPipeline with the built-in rule sets
- client: TestClient bound to the FastAPI app (lifespan enabled)
- messy_document: Markup exercising every universal rule
"""

import pytest
from fastapi.testclient import TestClient

from bublr_import.api.main import app
from bublr_import.normalizer import NormalizationPipeline


@pytest.fixture
def pipeline() -> NormalizationPipeline:
    """Return a pipeline isolated from the shared default."""
    return NormalizationPipeline()


@pytest.fixture
def client():
    """Return a TestClient with application lifespan handled."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def messy_document() -> str:
    """Return markup with scripts, attributes, deep headings and empty blocks."""
    return (
        '<h1 class="title" id="top">Title</h1>\n'
        "<script>track()</script>\n"
        '<p style="color: red" data-block="1">Intro with <a href="https://ex.com" target="_blank" '
        'rel="noopener" class="link">a link</a>.</p>\n'
        "<p></p>\n"
        "<p><br/></p>\n"
        '<h5 data-anchor="x">Deep heading</h5>\n'
        '<blockquote class="pull">Quote</blockquote>\n'
        '<pre class="code"><code class="language-py">print(1)</code></pre>\n'
        '<ul class="list"><li class="item">One</li></ul>\n'
        "<hr>\n\n\n\n"
        '<p>Outro <a href="https://ex.com/empty"> </a></p>\n'
    )
