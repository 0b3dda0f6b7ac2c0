"""Unit tests for configuration management (flat Settings)."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from staffdesk.core.config import Settings, get_settings
from staffdesk.core.enums import Environment


@pytest.fixture
def base_test_env() -> dict[str, str]:
    """Minimal required settings; tests merge overrides into it."""
    return {
        "DATABASE_URL": "postgresql+asyncpg://user:pass@db:5432/staffdesk",
        "REDIS_URL": "redis://redis:6379/0",
        "AUTH_URL": "https://auth.example.com/auth/v1",
        "AUTH_API_KEY": "anon-key",
        "JWT_SECRET": "jwt-secret",
        "SITE_URL": "https://app.example.com",
    }


@pytest.mark.unit
class TestSettingsLoading:
    def test_loads_required_values(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            settings = Settings()  # type: ignore[call-arg]

        assert settings.database_url == base_test_env["DATABASE_URL"]
        assert settings.auth_api_key == "anon-key"
        assert settings.jwt_algorithm == "HS256"
        assert settings.api_v1_prefix == "/api/v1"
        assert settings.environment is Environment.DEVELOPMENT

    def test_missing_required_value_raises(self, base_test_env):
        env = {k: v for k, v in base_test_env.items() if k != "DATABASE_URL"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValidationError):
                Settings()  # type: ignore[call-arg]

    def test_strips_trailing_slashes(self, base_test_env):
        env = base_test_env | {
            "SITE_URL": "https://app.example.com/",
            "AUTH_URL": "https://auth.example.com/auth/v1/",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()  # type: ignore[call-arg]

        assert settings.site_url == "https://app.example.com"
        assert settings.auth_url == "https://auth.example.com/auth/v1"

    def test_log_level_is_upper_cased(self, base_test_env):
        with patch.dict(os.environ, base_test_env | {"LOG_LEVEL": "debug"}, clear=True):
            settings = Settings()  # type: ignore[call-arg]

        assert settings.log_level == "DEBUG"

    def test_env_names_are_case_insensitive(self, base_test_env):
        env = base_test_env | {"app_name": "staffdesk-test"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()  # type: ignore[call-arg]

        assert settings.app_name == "staffdesk-test"


@pytest.mark.unit
class TestEnvironmentDetection:
    @pytest.mark.parametrize(
        ("value", "development", "testing", "production"),
        [
            ("development", True, False, False),
            ("testing", False, True, False),
            ("ci", False, False, False),
            ("production", False, False, True),
        ],
    )
    def test_flags(self, base_test_env, value, development, testing, production):
        with patch.dict(os.environ, base_test_env | {"ENVIRONMENT": value}, clear=True):
            settings = Settings()  # type: ignore[call-arg]

        assert settings.is_development is development
        assert settings.is_testing is testing
        assert settings.is_production is production


@pytest.mark.unit
class TestGetSettings:
    def test_is_cached(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            get_settings.cache_clear()
            first = get_settings()
            second = get_settings()

        assert first is second
