"""
GoHighLevel MCP Server

Exposes the GoHighLevel REST API as MCP tools over stdio and HTTP/SSE.
Tool providers live in ghl_mcp/tools and are aggregated by registry.py.
"""

from .base import (
    ExecutionError,
    MCPToolError,
    ToolDefinition,
    ToolGroup,
    ToolInputError,
    ToolProvider,
    UnknownToolError,
    tool,
)
from .registry import CategorySummary, ToolRegistry

__all__ = [
    "CategorySummary",
    "ExecutionError",
    "MCPToolError",
    "ToolDefinition",
    "ToolGroup",
    "ToolInputError",
    "ToolProvider",
    "ToolRegistry",
    "UnknownToolError",
    "tool",
]
