"""
Location Tools
"""

from typing import Any, Dict, Optional

from pydantic import Field

from ..base import ToolArgs, ToolProvider, tool


class LocationArgs(ToolArgs):
    locationId: Optional[str] = Field(
        None, description="Location ID. If not provided, uses the default location from configuration."
    )


class CreateLocationTagArgs(LocationArgs):
    name: str = Field(min_length=1, description="Name of the new tag")


class LocationTools(ToolProvider):
    category = "Locations"

    @tool("ghl_get_location", "Get location (sub-account) details.", args=LocationArgs)
    async def get_location(self, params: LocationArgs) -> Dict[str, Any]:
        return await self.client.get_location(params.locationId)

    @tool("ghl_get_location_tags", "List all tags defined in a location.", args=LocationArgs)
    async def get_location_tags(self, params: LocationArgs) -> Dict[str, Any]:
        return await self.client.get_location_tags(params.locationId)

    @tool("ghl_create_location_tag", "Create a new tag in a location.", args=CreateLocationTagArgs)
    async def create_location_tag(self, params: CreateLocationTagArgs) -> Dict[str, Any]:
        return await self.client.create_location_tag(params.name, params.locationId)

    @tool("ghl_get_location_custom_values", "List custom values defined in a location.", args=LocationArgs)
    async def get_location_custom_values(self, params: LocationArgs) -> Dict[str, Any]:
        return await self.client.get_location_custom_values(params.locationId)
