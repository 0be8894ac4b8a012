"""
Protocol dispatch shared by the stdio and HTTP/SSE front-ends.

Turns "list tools" and "call tool" requests into registry calls and
registry results/failures into MCP content or classified MCP errors:

  unknown tool           -> INVALID_REQUEST (message unchanged)
  message contains "404" -> INVALID_REQUEST
  anything else          -> INTERNAL_ERROR
"""

import json
import logging
from typing import Any, Dict, List, Optional

from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    CallToolRequest,
    CallToolResult,
    ErrorData,
    ServerResult,
    TextContent,
    Tool,
)

from .registry import ToolRegistry

UNKNOWN_TOOL_MARKER = "Unknown tool"
EXECUTION_FAILED_PREFIX = "Tool execution failed: "

SERVER_NAME = "ghl-mcp-server"
SERVER_VERSION = "1.0.0"


def format_result(result: Any) -> str:
    """Strings pass through; everything else is rendered as indented JSON."""
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, ensure_ascii=False, default=str)


def classify_error(error: Exception) -> ErrorData:
    """Map a failed invocation to the MCP error the client should see."""
    message = str(error)

    if message.startswith(UNKNOWN_TOOL_MARKER):
        return ErrorData(code=INVALID_REQUEST, message=message)

    code = INVALID_REQUEST if "404" in message else INTERNAL_ERROR
    return ErrorData(code=code, message=f"{EXECUTION_FAILED_PREFIX}{message}")


class ToolDispatcher:
    """Front-end facing view of a ToolRegistry."""

    def __init__(self, registry: ToolRegistry, logger: Optional[logging.Logger] = None):
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)

    def list_tools(self) -> List[Tool]:
        tools = [definition.to_mcp_tool() for definition in self.registry.get_definitions()]
        self.logger.debug("Listing available tools", extra={"meta": {"count": len(tools)}})
        return tools

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> List[TextContent]:
        """
        Invoke a tool and wrap its result as text content.
        Raises McpError with a classified error code on failure.
        """
        category = self.registry.get_category(name) or "unknown"
        self.logger.debug("Executing tool", extra={"meta": {"tool": name, "category": category}})

        try:
            result = await self.registry.invoke(name, arguments or {})
        except Exception as e:
            error = classify_error(e)
            if not str(e).startswith(UNKNOWN_TOOL_MARKER):
                self.logger.error(
                    f"Tool execution failed: {name}",
                    extra={"meta": {"tool": name, "category": category, "error": str(e)}},
                )
            raise McpError(error) from e

        self.logger.debug("Tool executed successfully", extra={"meta": {"tool": name}})
        return [TextContent(type="text", text=format_result(result))]


def build_server(
    dispatcher: ToolDispatcher,
    name: str = SERVER_NAME,
    version: str = SERVER_VERSION,
) -> Server:
    """
    Create a low-level MCP server whose handlers delegate to the dispatcher.

    The call-tool handler is installed directly so that McpError codes are
    sent to the client as JSON-RPC errors instead of being folded into an
    isError tool result.
    """
    server = Server(name, version=version)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return dispatcher.list_tools()

    async def call_tool(request: CallToolRequest) -> ServerResult:
        content = await dispatcher.call_tool(request.params.name, request.params.arguments)
        return ServerResult(CallToolResult(content=content, isError=False))

    server.request_handlers[CallToolRequest] = call_tool
    dispatcher.logger.debug("Request handlers registered")
    return server
