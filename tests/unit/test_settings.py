"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from bublr_import.config import Settings, get_settings


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestDefaults:
    """Development defaults."""

    def test_development_defaults(self):
        """Defaults describe a local development server."""
        settings = make_settings()

        assert settings.app_env == "development"
        assert settings.is_development
        assert not settings.is_production
        assert settings.default_platform == "medium"
        assert settings.api_port == 8000
        assert settings.api_key_enabled is False

    def test_env_overrides(self, monkeypatch):
        """Environment variables override defaults, case-insensitively."""
        monkeypatch.setenv("DEFAULT_PLATFORM", "ghost")
        monkeypatch.setenv("api_port", "9001")

        settings = make_settings()

        assert settings.default_platform == "ghost"
        assert settings.api_port == 9001

    def test_port_range_validated(self):
        """Ports outside 1-65535 are rejected."""
        with pytest.raises(ValidationError):
            make_settings(api_port=70000)

    def test_get_settings_is_cached(self):
        """The same instance is returned until the cache is cleared."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestProductionValidation:
    """Production mode refuses insecure configuration."""

    def test_secure_production_config(self):
        """A locked-down production config loads."""
        settings = make_settings(
            app_env="production",
            debug=False,
            api_key_enabled=True,
            api_key="s3cret",
            cors_allowed_origins=["https://bublr.life"],
        )

        assert settings.is_production
        assert settings.api_key.get_secret_value() == "s3cret"

    @pytest.mark.parametrize(
        "overrides,fragment",
        [
            ({"api_key_enabled": False}, "api_key_enabled must be True"),
            ({"api_key": None}, "api_key must be set"),
            ({"debug": True}, "debug must be False"),
            ({"cors_allowed_origins": ["*"]}, "cannot contain '*'"),
        ],
    )
    def test_insecure_production_config(self, overrides, fragment):
        """Each insecure setting is reported."""
        values = {
            "app_env": "production",
            "debug": False,
            "api_key_enabled": True,
            "api_key": "s3cret",
            "cors_allowed_origins": ["https://bublr.life"],
        }
        values.update(overrides)

        with pytest.raises(ValidationError) as exc_info:
            make_settings(**values)

        assert fragment in str(exc_info.value)
