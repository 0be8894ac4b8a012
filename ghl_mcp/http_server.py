#!/usr/bin/env python3
"""
MCP HTTP Server Entrypoint

HTTP + Server-Sent Events front-end for web clients (e.g. ChatGPT connectors).
The MCP session runs over GET /sse with client messages posted to /messages/.

Usage:
  python -m ghl_mcp.http_server
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from mcp.server.sse import SseServerTransport

from .client import GHLApiClient
from .config import ConfigError, load_server_settings
from .dispatch import SERVER_NAME, SERVER_VERSION, ToolDispatcher, build_server
from .log import configure_logging
from .registry import ToolRegistry
from .runtime import check_connection, initialize

ALLOWED_ORIGINS = ["https://chatgpt.com", "https://chat.openai.com"]
LOCALHOST_ORIGIN_REGEX = r"http://localhost(:\d+)?"


def create_app(
    registry: ToolRegistry,
    client: Optional[GHLApiClient] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """
    Build the FastAPI application around a populated registry.

    When an API client is attached, startup fails if the API is unreachable
    and the client is closed on shutdown.
    """
    logger = logger or logging.getLogger(__name__)
    dispatcher = ToolDispatcher(registry, logger.getChild("dispatch"))
    mcp_server = build_server(dispatcher)
    sse = SseServerTransport("/messages/")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("HTTP tool registry initialized", extra={"meta": registry.get_snapshot()})
        if client is not None:
            await check_connection(client, logger)
        yield
        if client is not None:
            await client.aclose()
        logger.info("GoHighLevel MCP HTTP Server shutting down")

    app = FastAPI(
        title="GoHighLevel MCP Server",
        description="Model Context Protocol server for the GoHighLevel API",
        version=SERVER_VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_origin_regex=LOCALHOST_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.debug(
            "HTTP request received",
            extra={"meta": {
                "method": request.method,
                "path": request.url.path,
                "ip": request.client.host if request.client else None,
            }},
        )
        return await call_next(request)

    # ============== API Endpoints ==============

    @app.get("/")
    async def root():
        return {
            "name": "GoHighLevel MCP Server",
            "version": SERVER_VERSION,
            "status": "running",
            "endpoints": {
                "health": "/health",
                "capabilities": "/capabilities",
                "tools": "/tools",
                "sse": "/sse",
                "messages": "/messages/",
            },
            "tools": registry.get_snapshot(),
        }

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "tools": registry.get_snapshot(),
        }

    @app.get("/capabilities")
    async def capabilities():
        return {
            "capabilities": {"tools": {}},
            "server": {"name": SERVER_NAME, "version": SERVER_VERSION},
        }

    @app.get("/tools")
    async def list_tools():
        tools = [tool.model_dump(exclude_none=True) for tool in dispatcher.list_tools()]
        return {"tools": tools, "count": len(tools)}

    # ============== MCP over SSE ==============

    async def handle_sse(request: Request):
        session = request.query_params.get("sessionId", "unknown")
        logger.info(
            "Incoming SSE connection",
            extra={"meta": {"sessionId": session, "ip": request.client.host if request.client else None}},
        )
        async with sse.connect_sse(request.scope, request.receive, request._send) as (read_stream, write_stream):
            logger.info("SSE connection established", extra={"meta": {"sessionId": session}})
            await mcp_server.run(read_stream, write_stream, mcp_server.create_initialization_options())
        logger.info("SSE connection closed", extra={"meta": {"sessionId": session}})
        return Response()

    app.add_route("/sse", handle_sse, methods=["GET"])
    app.mount("/messages/", app=sse.handle_post_message)

    return app


def main():
    """Run the MCP HTTP server."""
    import uvicorn

    load_dotenv()
    logger = configure_logging()

    try:
        settings = load_server_settings()
        client, registry = initialize(logger)
    except ConfigError as e:
        logger.error("Failed to start GoHighLevel MCP HTTP Server", extra={"meta": {"error": str(e)}})
        sys.exit(1)

    app = create_app(registry, client=client, logger=logger)
    logger.info(
        "Starting GoHighLevel MCP HTTP Server",
        extra={"meta": {"host": settings.host, "port": settings.port, "sseEndpoint": "/sse"}},
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
