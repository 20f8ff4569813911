"""Unit tests for configuration management."""

import os
from unittest.mock import patch

from unified_gateway.config import Settings


def test_settings_default_values():
    """Test that Settings loads with default values."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.test_mode is True
        assert settings.default_gateway == "plexo"
        assert settings.log_level == "INFO"
        assert settings.log_format_json is True
        assert settings.transport.timeout_seconds == 30.0
        assert settings.plexo.client_id == ""
        assert settings.plexo.merchant_id is None
        assert settings.merchant_e_solutions.login == ""


def test_settings_from_environment():
    """Test that Settings can be overridden by environment variables."""
    env_vars = {
        "LOG_LEVEL": "DEBUG",
        "ENVIRONMENT": "test",
        "TEST_MODE": "false",
        "DEFAULT_GATEWAY": "merchant_e_solutions",
        "LOG_FORMAT_JSON": "false",
    }

    with patch.dict(os.environ, env_vars, clear=False):
        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.environment == "test"
        assert settings.test_mode is False
        assert settings.default_gateway == "merchant_e_solutions"
        assert settings.log_format_json is False


def test_settings_provider_credentials():
    """Test nested provider credentials from environment variables."""
    env_vars = {
        "PLEXO__CLIENT_ID": "abcd",
        "PLEXO__API_KEY": "copyabcdefghijklmnopqrstuvwxyz",
        "PLEXO__MERCHANT_ID": "3243",
        "MERCHANT_E_SOLUTIONS__LOGIN": "94100010518900000029",
        "MERCHANT_E_SOLUTIONS__PASSWORD": "secret",
    }

    with patch.dict(os.environ, env_vars, clear=False):
        settings = Settings()

        assert settings.plexo.client_id == "abcd"
        assert settings.plexo.api_key == "copyabcdefghijklmnopqrstuvwxyz"
        assert settings.plexo.merchant_id == "3243"
        assert settings.merchant_e_solutions.login == "94100010518900000029"
        assert settings.merchant_e_solutions.password == "secret"


def test_settings_transport_timeout():
    """Test transport configuration settings."""
    with patch.dict(os.environ, {"TRANSPORT__TIMEOUT_SECONDS": "5.5"}, clear=False):
        settings = Settings()

        assert settings.transport.timeout_seconds == 5.5
