"""
Opportunity Tools

Search and manage opportunities (deals) and read sales pipelines.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import Field

from ..base import ToolArgs, ToolProvider, tool

OpportunityStatus = Literal["open", "won", "lost", "abandoned"]


class SearchOpportunitiesArgs(ToolArgs):
    q: Optional[str] = Field(None, description="Search text matched against opportunity names and contacts")
    pipeline_id: Optional[str] = Field(None, description="Only return opportunities in this pipeline")
    pipeline_stage_id: Optional[str] = Field(None, description="Only return opportunities in this stage")
    status: Optional[Literal["open", "won", "lost", "abandoned", "all"]] = Field(
        None, description="Filter by status"
    )
    assigned_to: Optional[str] = Field(None, description="User ID the opportunity is assigned to")
    limit: Optional[int] = Field(None, ge=1, le=100, description="Maximum number of results")


class OpportunityIdArgs(ToolArgs):
    opportunityId: str = Field(description="The unique ID of the opportunity")


class CreateOpportunityArgs(ToolArgs):
    name: str = Field(description="Opportunity name")
    pipelineId: str = Field(description="Pipeline the opportunity belongs to")
    contactId: str = Field(description="Contact associated with the opportunity")
    pipelineStageId: Optional[str] = Field(None, description="Initial pipeline stage")
    status: OpportunityStatus = Field("open", description="Initial status")
    monetaryValue: Optional[float] = Field(None, ge=0, description="Deal value")
    assignedTo: Optional[str] = Field(None, description="User ID to assign the opportunity to")


class UpdateOpportunityStatusArgs(ToolArgs):
    opportunityId: str = Field(description="The unique ID of the opportunity")
    status: OpportunityStatus = Field(description="New status")


class OpportunityTools(ToolProvider):
    category = "Opportunities"

    @tool(
        "ghl_search_opportunities",
        "Search opportunities in the configured location by text, pipeline, stage, status or owner.",
        args=SearchOpportunitiesArgs,
    )
    async def search_opportunities(self, params: SearchOpportunitiesArgs) -> Dict[str, Any]:
        return await self.client.search_opportunities(params.payload())

    @tool("ghl_get_pipelines", "List all sales pipelines and their stages.")
    async def get_pipelines(self, params: ToolArgs) -> Dict[str, Any]:
        return await self.client.get_pipelines()

    @tool("ghl_get_opportunity", "Get an opportunity by ID.", args=OpportunityIdArgs)
    async def get_opportunity(self, params: OpportunityIdArgs) -> Dict[str, Any]:
        return await self.client.get_opportunity(params.opportunityId)

    @tool("ghl_create_opportunity", "Create a new opportunity for a contact in a pipeline.", args=CreateOpportunityArgs)
    async def create_opportunity(self, params: CreateOpportunityArgs) -> Dict[str, Any]:
        return await self.client.create_opportunity(params.payload())

    @tool(
        "ghl_update_opportunity_status",
        "Mark an opportunity as open, won, lost or abandoned.",
        args=UpdateOpportunityStatusArgs,
    )
    async def update_opportunity_status(self, params: UpdateOpportunityStatusArgs) -> Dict[str, Any]:
        return await self.client.update_opportunity_status(params.opportunityId, params.status)

    @tool("ghl_delete_opportunity", "Delete an opportunity permanently.", args=OpportunityIdArgs)
    async def delete_opportunity(self, params: OpportunityIdArgs) -> Dict[str, Any]:
        return await self.client.delete_opportunity(params.opportunityId)
