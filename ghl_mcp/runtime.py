"""
Startup wiring shared by the stdio and HTTP entry points:
config -> API client -> tool providers -> registry.
"""

import logging
from typing import Mapping, Optional, Tuple

from .client import GHLApiClient
from .config import load_config
from .registry import ToolRegistry
from .tools import build_tool_providers


def build_registry(client: GHLApiClient, logger: logging.Logger) -> ToolRegistry:
    registry = ToolRegistry(build_tool_providers(client), logger=logger.getChild("registry"))
    logger.info("Tool registry initialized", extra={"meta": registry.get_snapshot()})
    return registry


def initialize(
    logger: logging.Logger,
    env: Optional[Mapping[str, str]] = None,
) -> Tuple[GHLApiClient, ToolRegistry]:
    """Load configuration and build the API client and tool registry."""
    config = load_config(env, logger=logger.getChild("config"))

    logger.info(
        "Initializing GoHighLevel API client",
        extra={"meta": {
            "baseUrl": config.base_url,
            "version": config.version,
            "locationId": config.location_id,
        }},
    )
    client = GHLApiClient(config, logger=logger.getChild("client"))
    return client, build_registry(client, logger)


async def check_connection(client: GHLApiClient, logger: logging.Logger) -> None:
    """Verify API credentials; raises ExecutionError when the API is unreachable."""
    logger.info("Testing GoHighLevel API connectivity")
    result = await client.test_connection()
    logger.info(
        "GoHighLevel API connection established",
        extra={"meta": {"locationId": result.get("locationId")}},
    )
