"""Tests for reading the client configuration"""

import pytest

from client_config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_TOOL_DEFINITIONS_PATH, load_config
from proxy_errors import ConfigurationError


def test_minimal_configuration():
    config = load_config({"MCP_SERVER_URL": "https://billy-mcp.vercel.app/", "CONGRESS_API_KEY": "ABC123"})

    assert config.server_url == "https://billy-mcp.vercel.app"
    assert config.congress_api_key == "ABC123"
    assert config.default_congress is None
    assert config.tool_definitions_path == DEFAULT_TOOL_DEFINITIONS_PATH
    assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT
    assert config.log_level == "INFO"


def test_default_congress_alone_is_enough():
    config = load_config({"MCP_SERVER_URL": "https://billy.test", "DEFAULT_CONGRESS": "119"})

    assert config.credentials() == {"CONGRESS_API_KEY": None, "DEFAULT_CONGRESS": "119"}


def test_missing_server_url():
    with pytest.raises(ConfigurationError, match="MCP_SERVER_URL"):
        load_config({"CONGRESS_API_KEY": "ABC123"})


def test_missing_both_credentials():
    with pytest.raises(ConfigurationError, match="CONGRESS_API_KEY or DEFAULT_CONGRESS"):
        load_config({"MCP_SERVER_URL": "https://billy.test", "CONGRESS_API_KEY": "  "})


def test_optional_settings():
    config = load_config({
        "MCP_SERVER_URL": "https://billy.test",
        "CONGRESS_API_KEY": "ABC123",
        "BILLY_TOOL_DEFINITIONS": "/etc/billy/tools.json",
        "BILLY_REQUEST_TIMEOUT": "5.5",
        "BILLY_LOG_LEVEL": "debug",
    })

    assert config.tool_definitions_path == "/etc/billy/tools.json"
    assert config.request_timeout == 5.5
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_invalid_timeout(value):
    with pytest.raises(ConfigurationError, match="BILLY_REQUEST_TIMEOUT"):
        load_config({"MCP_SERVER_URL": "https://billy.test", "CONGRESS_API_KEY": "ABC123", "BILLY_REQUEST_TIMEOUT": value})


def test_config_is_immutable():
    config = load_config({"MCP_SERVER_URL": "https://billy.test", "CONGRESS_API_KEY": "ABC123"})

    with pytest.raises(AttributeError):
        config.congress_api_key = "other"
