"""
Tests for the FastAPI front-end routes and lifespan.
"""

import pytest
from fastapi.testclient import TestClient

from ghl_mcp.client import GHLApiError
from ghl_mcp.http_server import create_app
from ghl_mcp.registry import ToolRegistry

from conftest import RecordingProvider, make_definition


@pytest.fixture
def registry():
    return ToolRegistry([
        RecordingProvider("Contacts", [make_definition("ghl_get_contact", contactId={"type": "string"})]),
        RecordingProvider("Payments", [make_definition("list_orders"), make_definition("ghl_get_contact")]),
    ])


class TestRoutes:

    def test_root_lists_endpoints_and_snapshot(self, registry):
        with TestClient(create_app(registry)) as http:
            response = http.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["endpoints"]["sse"] == "/sse"
        assert data["tools"] == {
            "total": 2,
            "categories": [
                {"category": "Contacts", "count": 1},
                {"category": "Payments", "count": 1},
            ],
        }

    def test_health(self, registry):
        with TestClient(create_app(registry)) as http:
            data = http.get("/health").json()

        assert data["status"] == "healthy"
        assert data["server"] == "ghl-mcp-server"
        assert data["tools"]["total"] == 2
        assert "timestamp" in data

    def test_capabilities(self, registry):
        with TestClient(create_app(registry)) as http:
            data = http.get("/capabilities").json()

        assert data == {
            "capabilities": {"tools": {}},
            "server": {"name": "ghl-mcp-server", "version": "1.0.0"},
        }

    def test_tools_returns_definitions(self, registry):
        with TestClient(create_app(registry)) as http:
            data = http.get("/tools").json()

        assert data["count"] == 2
        assert [t["name"] for t in data["tools"]] == ["ghl_get_contact", "list_orders"]
        assert data["tools"][0]["inputSchema"]["properties"] == {"contactId": {"type": "string"}}


class TestLifespan:

    def test_checks_connection_and_closes_client(self, registry, mock_client):
        mock_client.test_connection.return_value = {"success": True, "locationId": "loc_123"}

        with TestClient(create_app(registry, client=mock_client)):
            mock_client.test_connection.assert_awaited_once()

        mock_client.aclose.assert_awaited_once()

    def test_unreachable_api_fails_startup(self, registry, mock_client):
        mock_client.test_connection.side_effect = GHLApiError("GHL API Error (401): Unauthorized", status_code=401)

        with pytest.raises(GHLApiError):
            with TestClient(create_app(registry, client=mock_client)):
                pass
