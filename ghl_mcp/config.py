"""
Configuration loaded from environment variables.

Required:
  - GHL_API_TOKEN (or legacy GHL_API_KEY): Private integration / OAuth access token
  - GHL_LOCATION_ID: Default sub-account (location) for location-scoped calls
Optional:
  - GHL_BASE_URL, GHL_API_VERSION
  - MCP_HOST, PORT / MCP_SERVER_PORT (HTTP server only)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://services.leadconnectorhq.com"
DEFAULT_API_VERSION = "2021-07-28"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


@dataclass(frozen=True)
class GHLConfig:
    access_token: str
    location_id: str
    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_API_VERSION


@dataclass(frozen=True)
class ServerSettings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def load_config(
    env: Optional[Mapping[str, str]] = None,
    logger: Optional[logging.Logger] = None,
) -> GHLConfig:
    """Read the API configuration, failing fast on missing required values."""
    env = os.environ if env is None else env
    logger = logger or logging.getLogger(__name__)

    access_token = env.get("GHL_API_TOKEN") or env.get("GHL_API_KEY") or ""
    base_url = env.get("GHL_BASE_URL") or DEFAULT_BASE_URL
    version = env.get("GHL_API_VERSION") or DEFAULT_API_VERSION
    location_id = env.get("GHL_LOCATION_ID") or ""

    if not env.get("GHL_API_TOKEN") and env.get("GHL_API_KEY"):
        logger.warning("GHL_API_TOKEN not provided, falling back to GHL_API_KEY")

    missing = []
    if not access_token:
        missing.append("GHL_API_TOKEN")
    if not location_id:
        missing.append("GHL_LOCATION_ID")

    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    logger.debug(
        "Loaded GoHighLevel configuration",
        extra={"meta": {"baseUrl": base_url, "version": version, "locationId": location_id}},
    )

    return GHLConfig(
        access_token=access_token,
        location_id=location_id,
        base_url=base_url.rstrip("/"),
        version=version,
    )


def load_server_settings(env: Optional[Mapping[str, str]] = None) -> ServerSettings:
    env = os.environ if env is None else env

    raw_port = env.get("PORT") or env.get("MCP_SERVER_PORT") or str(DEFAULT_PORT)
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigError(f"Invalid port: {raw_port}")

    return ServerSettings(host=env.get("MCP_HOST") or DEFAULT_HOST, port=port)
