"""Unit tests for structured logging setup."""

import json
import logging

import structlog

from bublr_import.core import configure_logging


class TestConfigureLogging:
    """structlog configuration."""

    def test_json_events(self, caplog):
        """Events render as JSON lines with level, logger and timestamp."""
        configure_logging("INFO", json_output=True)
        caplog.set_level(logging.INFO)

        structlog.get_logger("bublr_import.tests").info("article_converted", platform="ghost", rewrites=3)

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "article_converted"
        assert payload["platform"] == "ghost"
        assert payload["rewrites"] == 3
        assert payload["level"] == "info"
        assert payload["logger"] == "bublr_import.tests"
        assert "timestamp" in payload

    def test_level_filters_debug(self, caplog):
        """Events below the configured level are dropped."""
        configure_logging("INFO", json_output=True)
        caplog.set_level(logging.INFO)

        structlog.get_logger("bublr_import.tests.quiet").debug("rule_applied")

        assert not any("rule_applied" in record.getMessage() for record in caplog.records)
