"""
Tests for environment configuration loading.
"""

import logging

import pytest

from ghl_mcp.config import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    ConfigError,
    load_config,
    load_server_settings,
)


class TestLoadConfig:

    def test_loads_required_and_optional_values(self, test_env):
        config = load_config(test_env)

        assert config.access_token == "test_api_token_123"
        assert config.location_id == "test_location_123"
        assert config.base_url == "https://test.leadconnectorhq.com"
        assert config.version == DEFAULT_API_VERSION

    def test_defaults(self):
        config = load_config({"GHL_API_TOKEN": "t", "GHL_LOCATION_ID": "l"})

        assert config.base_url == DEFAULT_BASE_URL
        assert config.version == DEFAULT_API_VERSION

    def test_falls_back_to_api_key_with_warning(self, caplog):
        env = {"GHL_API_KEY": "legacy", "GHL_LOCATION_ID": "l"}

        with caplog.at_level(logging.WARNING, logger="test.config"):
            config = load_config(env, logger=logging.getLogger("test.config"))

        assert config.access_token == "legacy"
        assert "falling back to GHL_API_KEY" in caplog.text

    def test_lists_every_missing_variable(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config({})

        assert str(exc_info.value) == (
            "Missing required environment variables: GHL_API_TOKEN, GHL_LOCATION_ID"
        )

    def test_missing_location_only(self):
        with pytest.raises(ConfigError, match="GHL_LOCATION_ID"):
            load_config({"GHL_API_TOKEN": "t"})


class TestServerSettings:

    def test_defaults(self):
        settings = load_server_settings({})

        assert settings.host == "0.0.0.0"
        assert settings.port == 8000

    def test_port_precedence(self):
        assert load_server_settings({"PORT": "9000", "MCP_SERVER_PORT": "9100"}).port == 9000
        assert load_server_settings({"MCP_SERVER_PORT": "9100"}).port == 9100

    def test_invalid_port(self):
        with pytest.raises(ConfigError, match="Invalid port"):
            load_server_settings({"PORT": "eighty"})
