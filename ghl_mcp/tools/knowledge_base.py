"""
Knowledge Base Tools

Manage knowledge bases and their FAQ entries. Responses are reshaped into
a summary with a human-readable message and pagination metadata, so the
model does not have to interpret raw API payloads.
"""

from typing import Any, Awaitable, Dict, Optional

from pydantic import Field

from ..base import ExecutionError, ToolArgs, ToolProvider, tool
from ..client import GHLApiError

MAX_KNOWLEDGE_BASES_PER_LOCATION = 15

_LOCATION_HELP = "If not provided, uses the default location from configuration."


class KnowledgeBaseIdArgs(ToolArgs):
    knowledgeBaseId: str = Field(description="The unique ID of the knowledge base")


class UpdateKnowledgeBaseArgs(ToolArgs):
    knowledgeBaseId: str = Field(description="The unique ID of the knowledge base to update")
    name: Optional[str] = Field(None, description="Updated name for the knowledge base")
    description: Optional[str] = Field(None, description="Updated description for the knowledge base")


class ListKnowledgeBasesArgs(ToolArgs):
    locationId: Optional[str] = Field(None, description=f"The location ID to get knowledge bases for. {_LOCATION_HELP}")
    query: Optional[str] = Field(None, description="Search query to filter knowledge bases by name")
    limit: Optional[int] = Field(None, ge=1, description="Maximum number of knowledge bases to return (default: 20)")
    lastKnowledgeBaseId: Optional[str] = Field(
        None, description="ID of the last knowledge base from the previous page (for pagination)"
    )


class CreateKnowledgeBaseArgs(ToolArgs):
    name: str = Field(min_length=1, description="Name of the new knowledge base")
    description: Optional[str] = Field(None, description="Optional description for the knowledge base")
    locationId: Optional[str] = Field(
        None, description=f"The location ID to create the knowledge base in. {_LOCATION_HELP}"
    )


class ListFaqsArgs(ToolArgs):
    knowledgeBaseId: str = Field(description="Knowledge base ID")
    locationId: Optional[str] = Field(None, description=f"Location ID. {_LOCATION_HELP}")
    limit: Optional[int] = Field(None, ge=1, description="Limit the number of FAQs returned (default: 10)")
    lastFaqId: Optional[str] = Field(None, description="Last FAQ ID for pagination (cursor-based)")


class CreateFaqArgs(ToolArgs):
    knowledgeBaseId: str = Field(description="Knowledge base ID")
    question: str = Field(min_length=1, description="FAQ question")
    answer: str = Field(min_length=1, description="FAQ answer")
    locationId: Optional[str] = Field(None, description=f"Location ID. {_LOCATION_HELP}")


class UpdateFaqArgs(ToolArgs):
    faqId: str = Field(description="FAQ ID")
    question: str = Field(min_length=1, description="Updated FAQ question")
    answer: str = Field(min_length=1, description="Updated FAQ answer")


class FaqIdArgs(ToolArgs):
    faqId: str = Field(description="FAQ ID")


async def _call(action: str, request: Awaitable[Any]) -> Any:
    try:
        return await request
    except GHLApiError as e:
        raise GHLApiError(f"Failed to {action}: {e.message}", status_code=e.status_code) from e


class KnowledgeBaseTools(ToolProvider):
    category = "Knowledge Base"

    # ===== KNOWLEDGE BASE MANAGEMENT TOOLS =====

    @tool(
        "ghl_get_knowledge_base",
        "Get knowledge base by ID with full details including metadata with content counts "
        "(FAQs, URLs, rich text, files, web searches, tables).",
        args=KnowledgeBaseIdArgs,
    )
    async def get_knowledge_base(self, params: KnowledgeBaseIdArgs) -> Dict[str, Any]:
        kb = await _call("get knowledge base", self.client.get_knowledge_base(params.knowledgeBaseId))
        counts = kb.get("kbMetadata") or {}
        return {
            "success": True,
            "knowledgeBase": kb,
            "message": f"Successfully retrieved knowledge base: {kb.get('name')}",
            "metadata": {
                "contentCounts": counts,
                "totalContent": sum(v for v in counts.values() if isinstance(v, (int, float))),
                "isDefault": bool(kb.get("isDefault", False)),
                "deleted": kb.get("deleted"),
            },
        }

    @tool(
        "ghl_delete_knowledge_base",
        "Delete a knowledge base permanently. This action cannot be undone.",
        args=KnowledgeBaseIdArgs,
    )
    async def delete_knowledge_base(self, params: KnowledgeBaseIdArgs) -> Dict[str, Any]:
        await _call("delete knowledge base", self.client.delete_knowledge_base(params.knowledgeBaseId))
        return {
            "success": True,
            "message": f"Successfully deleted knowledge base with ID: {params.knowledgeBaseId}",
            "deletedId": params.knowledgeBaseId,
        }

    @tool(
        "ghl_update_knowledge_base",
        "Update a knowledge base name and/or description.",
        args=UpdateKnowledgeBaseArgs,
    )
    async def update_knowledge_base(self, params: UpdateKnowledgeBaseArgs) -> Dict[str, Any]:
        updates = {k: v for k, v in (("name", params.name), ("description", params.description)) if v}
        if not updates:
            raise ExecutionError(
                "Failed to update knowledge base: "
                "At least one field (name or description) must be provided for update",
                tool_name="ghl_update_knowledge_base",
            )
        await _call(
            "update knowledge base",
            self.client.update_knowledge_base(params.knowledgeBaseId, updates),
        )
        return {
            "success": True,
            "message": f"Successfully updated knowledge base with ID: {params.knowledgeBaseId}",
            "updatedFields": updates,
            "knowledgeBaseId": params.knowledgeBaseId,
        }

    @tool(
        "ghl_list_knowledge_bases",
        "Get all knowledge bases for a location with pagination support. "
        "Returns list with activeCount, hasMore status, and optional search filtering.",
        args=ListKnowledgeBasesArgs,
    )
    async def list_knowledge_bases(self, params: ListKnowledgeBasesArgs) -> Dict[str, Any]:
        data = await _call(
            "list knowledge bases",
            self.client.list_knowledge_bases(
                location_id=params.locationId,
                query=params.query,
                limit=params.limit,
                last_knowledge_base_id=params.lastKnowledgeBaseId,
            ),
        )
        knowledge_bases = data.get("knowledgeBases", [])
        active = data.get("activeCount", len(knowledge_bases))
        return {
            "success": True,
            "knowledgeBases": knowledge_bases,
            "totalCount": active,
            "hasMore": data.get("hasMore", False),
            "lastKnowledgeBaseId": data.get("lastKnowledgeBaseId"),
            "message": f"Successfully retrieved {len(knowledge_bases)} knowledge bases out of {active} total",
            "metadata": {
                "currentPage": len(knowledge_bases),
                "totalActive": active,
                "hasMorePages": data.get("hasMore", False),
                "searchQuery": params.query,
            },
        }

    @tool(
        "ghl_create_knowledge_base",
        f"Create a new knowledge base. Maximum {MAX_KNOWLEDGE_BASES_PER_LOCATION} knowledge bases per location.",
        args=CreateKnowledgeBaseArgs,
    )
    async def create_knowledge_base(self, params: CreateKnowledgeBaseArgs) -> Dict[str, Any]:
        try:
            kb = await self.client.create_knowledge_base(
                params.name, description=params.description, location_id=params.locationId
            )
        except GHLApiError as e:
            text = e.message.lower()
            if "limit" in text or "maximum" in text:
                raise GHLApiError(
                    "Failed to create knowledge base: Maximum limit of "
                    f"{MAX_KNOWLEDGE_BASES_PER_LOCATION} knowledge bases per location has been reached",
                    status_code=e.status_code,
                ) from e
            raise GHLApiError(f"Failed to create knowledge base: {e.message}", status_code=e.status_code) from e

        return {
            "success": True,
            "knowledgeBase": kb,
            "message": f"Successfully created knowledge base: {kb.get('name')}",
            "metadata": {
                "id": kb.get("id"),
                "name": kb.get("name"),
                "locationId": kb.get("locationId"),
                "createdAt": kb.get("createdAt"),
                "hasDescription": bool(params.description),
                "remainingSlots": f"Unknown (max {MAX_KNOWLEDGE_BASES_PER_LOCATION} per location)",
            },
        }

    # ===== KNOWLEDGE BASE FAQ MANAGEMENT TOOLS =====

    @tool(
        "ghl_list_knowledge_base_faqs",
        "Get all FAQs by knowledge base with pagination support. "
        "Retrieves FAQs for a knowledge base with cursor-based pagination.",
        args=ListFaqsArgs,
    )
    async def list_knowledge_base_faqs(self, params: ListFaqsArgs) -> Dict[str, Any]:
        data = await _call(
            "list knowledge base FAQs",
            self.client.list_knowledge_base_faqs(
                params.knowledgeBaseId,
                location_id=params.locationId,
                limit=params.limit,
                last_faq_id=params.lastFaqId,
            ),
        )
        faqs = data.get("faqs", [])
        count = data.get("count", len(faqs))
        return {
            "success": True,
            "faqs": faqs,
            "totalCount": count,
            "lastFaqId": data.get("lastFaqId"),
            "hasMore": data.get("hasMore", False),
            "message": f"Successfully retrieved {len(faqs)} FAQs out of {count} total",
            "metadata": {
                "currentPage": len(faqs),
                "totalCount": count,
                "hasMorePages": data.get("hasMore", False),
                "knowledgeBaseId": params.knowledgeBaseId,
            },
        }

    @tool(
        "ghl_create_knowledge_base_faq",
        "Create a new FAQ inside knowledge base. Add question and answer pairs to enhance the knowledge base content.",
        args=CreateFaqArgs,
    )
    async def create_knowledge_base_faq(self, params: CreateFaqArgs) -> Dict[str, Any]:
        data = await _call(
            "create knowledge base FAQ",
            self.client.create_knowledge_base_faq(
                params.knowledgeBaseId, params.question, params.answer, location_id=params.locationId
            ),
        )
        faq = data.get("faq", data)
        return {
            "success": True,
            "faq": faq,
            "message": f'Successfully created FAQ: "{faq.get("question")}"',
            "metadata": {
                "id": faq.get("id"),
                "question": faq.get("question"),
                "knowledgeBaseId": faq.get("knowledgeBaseId"),
                "locationId": faq.get("locationId"),
                "createdAt": faq.get("createdAt"),
            },
        }

    @tool(
        "ghl_update_knowledge_base_faq",
        "Update an existing knowledge base FAQ. Modify the question and/or answer of an existing FAQ.",
        args=UpdateFaqArgs,
    )
    async def update_knowledge_base_faq(self, params: UpdateFaqArgs) -> Dict[str, Any]:
        await _call(
            "update knowledge base FAQ",
            self.client.update_knowledge_base_faq(params.faqId, params.question, params.answer),
        )
        return {
            "success": True,
            "message": f"Successfully updated FAQ with ID: {params.faqId}",
            "updatedFields": {"question": params.question, "answer": params.answer},
            "faqId": params.faqId,
        }

    @tool(
        "ghl_delete_knowledge_base_faq",
        "Delete an existing knowledge base FAQ. Permanently remove a question-answer pair from the knowledge base.",
        args=FaqIdArgs,
    )
    async def delete_knowledge_base_faq(self, params: FaqIdArgs) -> Dict[str, Any]:
        await _call("delete knowledge base FAQ", self.client.delete_knowledge_base_faq(params.faqId))
        return {
            "success": True,
            "message": f"Successfully deleted FAQ with ID: {params.faqId}",
            "deletedId": params.faqId,
        }
