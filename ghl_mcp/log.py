"""
Logging setup for the GoHighLevel MCP server.

All output goes to STDERR: the stdio transport owns STDOUT, and anything
else written there would corrupt the JSON-RPC stream.

Structured fields are passed through ``extra={"meta": {...}}``:

    logger.warning("Duplicate tool registration detected",
                   extra={"meta": {"tool": name}})
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

ROOT_LOGGER_NAME = "ghl_mcp"

DEFAULT_LEVEL = "info"
DEFAULT_FORMAT = "text"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_log_level(level: Optional[str]) -> int:
    """Map a level name to a logging level; unknown names fall back to INFO."""
    if not level:
        return _LEVELS[DEFAULT_LEVEL]
    return _LEVELS.get(level.strip().lower(), _LEVELS[DEFAULT_LEVEL])


def parse_log_format(fmt: Optional[str]) -> str:
    if fmt and fmt.strip().lower() == "json":
        return "json"
    return DEFAULT_FORMAT


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds")


class TextFormatter(logging.Formatter):
    """[timestamp] [logger] LEVEL: message {meta}"""

    def format(self, record: logging.LogRecord) -> str:
        line = f"[{_timestamp(record)}] [{record.name}] {record.levelname}: {record.getMessage()}"
        meta = getattr(record, "meta", None)
        if meta:
            line += f" {json.dumps(meta, default=str)}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _timestamp(record),
            "level": record.levelname.lower(),
            "context": record.name,
            "message": record.getMessage(),
        }
        meta = getattr(record, "meta", None)
        if meta:
            payload["meta"] = meta
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(env: Optional[Mapping[str, str]] = None, stream=None) -> logging.Logger:
    """
    Configure the application logger from environment variables.

    GHL_MCP_LOG_LEVEL / LOG_LEVEL   debug | info | warn | error
    GHL_MCP_LOG_FORMAT / LOG_FORMAT text | json

    Returns the root application logger; components use getChild() on it.
    """
    env = os.environ if env is None else env
    level = parse_log_level(env.get("GHL_MCP_LOG_LEVEL") or env.get("LOG_LEVEL"))
    fmt = parse_log_format(env.get("GHL_MCP_LOG_FORMAT") or env.get("LOG_FORMAT"))

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else TextFormatter())

    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(app_logger.handlers):
        app_logger.removeHandler(existing)
    app_logger.addHandler(handler)
    app_logger.setLevel(level)
    app_logger.propagate = False
    return app_logger
