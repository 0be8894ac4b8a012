"""
Tests for logging configuration and formatters.
"""

import io
import json
import logging

import pytest

from ghl_mcp.log import configure_logging, parse_log_format, parse_log_level


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    app_logger = logging.getLogger("ghl_mcp")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True


class TestParsing:

    @pytest.mark.parametrize("raw,expected", [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("warn", logging.WARNING),
        ("warning", logging.WARNING),
        ("error", logging.ERROR),
        ("verbose", logging.INFO),
        (None, logging.INFO),
    ])
    def test_levels(self, raw, expected):
        assert parse_log_level(raw) == expected

    def test_formats(self):
        assert parse_log_format("JSON") == "json"
        assert parse_log_format("text") == "text"
        assert parse_log_format("xml") == "text"
        assert parse_log_format(None) == "text"


class TestConfigureLogging:

    def test_text_output_includes_context_and_meta(self):
        stream = io.StringIO()
        logger = configure_logging({"LOG_LEVEL": "info"}, stream=stream)

        logger.getChild("registry").info("Tool registry initialized", extra={"meta": {"total": 3}})

        line = stream.getvalue().strip()
        assert "[ghl_mcp.registry] INFO: Tool registry initialized" in line
        assert line.endswith('{"total": 3}')

    def test_json_output(self):
        stream = io.StringIO()
        logger = configure_logging({"GHL_MCP_LOG_FORMAT": "json"}, stream=stream)

        logger.getChild("config").warning("Falling back", extra={"meta": {"key": "GHL_API_KEY"}})

        payload = json.loads(stream.getvalue())
        assert payload["level"] == "warning"
        assert payload["context"] == "ghl_mcp.config"
        assert payload["message"] == "Falling back"
        assert payload["meta"] == {"key": "GHL_API_KEY"}
        assert "timestamp" in payload

    def test_level_filters_messages(self):
        stream = io.StringIO()
        logger = configure_logging({"GHL_MCP_LOG_LEVEL": "error", "LOG_LEVEL": "debug"}, stream=stream)

        logger.info("hidden")
        logger.error("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_reconfiguring_replaces_handler(self):
        configure_logging({}, stream=io.StringIO())
        logger = configure_logging({}, stream=io.StringIO())

        assert len(logger.handlers) == 1
