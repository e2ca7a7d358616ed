"""Simple test to verify setup"""

import pytest
import structlog

import billy_server


@pytest.fixture
def logging_config():
    yield billy_server.configure_logging
    structlog.reset_defaults()


def test_logs_go_to_stderr_only(logging_config, capsys):
    """stdout carries MCP frames, so nothing may be logged there"""
    logging_config("INFO")

    structlog.get_logger().info("catalog_loaded", tools=40)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "catalog_loaded" in captured.err


def test_log_level_filters_events(logging_config, capsys):
    logging_config("WARNING")

    logger = structlog.get_logger()
    logger.info("tool_call", tool="search_bills")
    logger.warning("catalog_fallback", reason="missing")

    err = capsys.readouterr().err
    assert "tool_call" not in err
    assert "catalog_fallback" in err


def test_server_identity():
    assert billy_server.SERVER_NAME == "billy-mcp-client"
    assert billy_server.__version__ == "1.0.0"
