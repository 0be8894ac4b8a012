"""
Shared fixtures for the GoHighLevel MCP server tests.
"""

from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest

from ghl_mcp.base import ToolDefinition, ToolGroup
from ghl_mcp.config import GHLConfig

TEST_ENV = {
    "GHL_API_TOKEN": "test_api_token_123",
    "GHL_BASE_URL": "https://test.leadconnectorhq.com",
    "GHL_LOCATION_ID": "test_location_123",
}


def make_definition(name: str, **properties: Dict[str, Any]) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=f"{name} for testing",
        input_schema={"type": "object", "properties": properties},
    )


class RecordingProvider(ToolGroup):
    """ToolGroup that records every execute call."""

    def __init__(self, category: str, definitions: List[ToolDefinition], result: Any = None):
        self.calls = []
        self.result = result if result is not None else {"category": category}

        async def execute(tool_name, args):
            self.calls.append((tool_name, args))
            return self.result

        super().__init__(category=category, definitions=definitions, execute=execute)


@pytest.fixture
def test_env() -> Dict[str, str]:
    return dict(TEST_ENV)


@pytest.fixture
def ghl_config() -> GHLConfig:
    return GHLConfig(
        access_token="token_123",
        location_id="loc_123",
        base_url="https://example.test",
        version="2021-07-28",
    )


@pytest.fixture
def mock_client() -> AsyncMock:
    """API client double; every method is awaitable."""
    return AsyncMock()
