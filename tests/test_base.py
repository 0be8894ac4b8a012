"""
Tests for ToolProvider: handler collection, lookup-table dispatch and input validation.
"""

from typing import Optional

import pytest
from pydantic import Field

from ghl_mcp.base import (
    ExecutionError,
    ToolArgs,
    ToolDefinition,
    ToolInputError,
    ToolProvider,
    tool,
)


class EchoArgs(ToolArgs):
    text: str = Field(description="Text to echo")
    times: Optional[int] = Field(None, ge=1, description="Repeat count")


class EchoTools(ToolProvider):
    category = "Echo"

    @tool("echo", "Echo the given text", args=EchoArgs)
    async def echo(self, params: EchoArgs):
        return params.text * (params.times or 1)

    @tool("ping", "Reply with pong")
    async def ping(self, params: ToolArgs):
        return "pong"

    async def helper(self):
        return "not a tool"


class LoudEchoTools(EchoTools):
    category = "Loud Echo"

    @tool("echo", "Echo the given text in upper case", args=EchoArgs)
    async def echo(self, params: EchoArgs):
        return params.text.upper() * (params.times or 1)

    @tool("shout", "Shout the given text", args=EchoArgs)
    async def shout(self, params: EchoArgs):
        return f"{params.text.upper()}!"


@pytest.fixture
def provider():
    return EchoTools()


class TestDefinitions:

    def test_collects_tools_in_declaration_order(self, provider):
        assert [d.name for d in provider.definitions] == ["echo", "ping"]

    def test_subclass_inherits_base_tools(self):
        names = [d.name for d in LoudEchoTools().definitions]

        assert names == ["echo", "ping", "shout"]

    @pytest.mark.asyncio
    async def test_subclass_override_replaces_handler(self):
        provider = LoudEchoTools()

        assert await provider.execute("echo", {"text": "ab"}) == "AB"
        assert await provider.execute("ping", {}) == "pong"
        assert await provider.execute("shout", {"text": "hi"}) == "HI!"
        assert provider.definitions[0].description == "Echo the given text in upper case"

    def test_schema_generated_from_model(self, provider):
        schema = provider.definitions[0].input_schema

        assert schema["type"] == "object"
        assert schema["required"] == ["text"]
        assert schema["properties"]["text"] == {"type": "string", "description": "Text to echo"}
        assert schema["additionalProperties"] is False
        assert "title" not in schema

    def test_no_argument_tool_schema(self, provider):
        schema = provider.definitions[1].input_schema

        assert schema["properties"] == {}
        assert "required" not in schema

    def test_to_mcp_tool(self):
        definition = ToolDefinition("t", "desc", {"type": "object", "properties": {}})

        mcp_tool = definition.to_mcp_tool()

        assert mcp_tool.name == "t"
        assert mcp_tool.description == "desc"
        assert mcp_tool.inputSchema == {"type": "object", "properties": {}}


class TestExecute:

    @pytest.mark.asyncio
    async def test_dispatches_to_handler(self, provider):
        assert await provider.execute("echo", {"text": "ab", "times": 2}) == "abab"
        assert await provider.execute("ping", {}) == "pong"

    @pytest.mark.asyncio
    async def test_none_arguments_treated_as_empty(self, provider):
        assert await provider.execute("ping", None) == "pong"

    @pytest.mark.asyncio
    async def test_unrecognised_name_does_not_use_registry_marker(self, provider):
        with pytest.raises(ExecutionError) as exc_info:
            await provider.execute("helper", {})

        message = str(exc_info.value)
        assert message == "Unknown Echo tool: helper"
        assert not message.startswith("Unknown tool")

    @pytest.mark.asyncio
    async def test_missing_required_field(self, provider):
        with pytest.raises(ToolInputError) as exc_info:
            await provider.execute("echo", {})

        assert exc_info.value.tool_name == "echo"
        assert "Invalid arguments for echo" in str(exc_info.value)
        assert "text" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_constraint_violation(self, provider):
        with pytest.raises(ToolInputError):
            await provider.execute("echo", {"text": "a", "times": 0})

    @pytest.mark.asyncio
    async def test_unknown_fields_rejected(self, provider):
        with pytest.raises(ToolInputError) as exc_info:
            await provider.execute("ping", {"unexpected": True})

        assert "unexpected" in str(exc_info.value)
