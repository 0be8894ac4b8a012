#!/usr/bin/env python3
"""
MCP stdio Server Entrypoint

Serves all registered GoHighLevel tools over stdin/stdout.
Logs go to stderr only.

Usage:
  python -m ghl_mcp.stdio_server
"""

import asyncio
import logging
import signal
import sys

from dotenv import load_dotenv
from mcp.server.stdio import stdio_server

from .client import GHLApiClient
from .dispatch import ToolDispatcher, build_server
from .log import configure_logging
from .runtime import check_connection, initialize


async def _background_connection_check(client: GHLApiClient, logger: logging.Logger) -> None:
    try:
        await check_connection(client, logger)
    except Exception as e:
        logger.warning("GoHighLevel API connectivity check failed", extra={"meta": {"error": str(e)}})


async def serve(logger: logging.Logger) -> None:
    client, registry = initialize(logger)
    server = build_server(ToolDispatcher(registry, logger.getChild("dispatch")))

    logger.info("Starting GoHighLevel MCP Server")
    async with client:
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "GoHighLevel MCP Server is ready",
                extra={"meta": {"toolCount": len(registry)}},
            )
            # Connectivity is verified without blocking MCP initialization
            check = asyncio.create_task(_background_connection_check(client, logger))
            try:
                await server.run(
                    read_stream,
                    write_stream,
                    server.create_initialization_options(),
                )
            finally:
                if not check.done():
                    check.cancel()


def _install_signal_handlers(logger: logging.Logger) -> None:
    def shutdown(signum, _frame):
        logger.info("Received shutdown signal, exiting", extra={"meta": {"signal": signal.Signals(signum).name}})
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)


def main() -> None:
    """Run the MCP server over stdio."""
    load_dotenv()
    logger = configure_logging()
    _install_signal_handlers(logger.getChild("shutdown"))

    try:
        asyncio.run(serve(logger))
    except Exception as e:
        logger.error("Fatal error starting GoHighLevel MCP Server", extra={"meta": {"error": str(e)}})
        sys.exit(1)


if __name__ == "__main__":
    main()
