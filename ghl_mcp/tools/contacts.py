"""
Contact Management Tools

Create, read, update, delete and search contacts, and manage contact tags.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ..base import ToolArgs, ToolProvider, tool


class ContactFields(ToolArgs):
    firstName: Optional[str] = Field(None, description="Contact first name")
    lastName: Optional[str] = Field(None, description="Contact last name")
    email: Optional[str] = Field(None, description="Contact email address")
    phone: Optional[str] = Field(None, description="Contact phone number (E.164 preferred)")
    companyName: Optional[str] = Field(None, description="Company the contact belongs to")
    source: Optional[str] = Field(None, description="Lead source")
    tags: Optional[List[str]] = Field(None, description="Tags to apply to the contact")


class CreateContactArgs(ContactFields):
    pass


class ContactIdArgs(ToolArgs):
    contactId: str = Field(description="The unique ID of the contact")


class UpdateContactArgs(ContactFields):
    contactId: str = Field(description="The unique ID of the contact to update")


class SearchContactsArgs(ToolArgs):
    query: Optional[str] = Field(None, description="Free-text search across name, email and phone")
    limit: Optional[int] = Field(None, ge=1, le=100, description="Maximum number of contacts to return")


class ContactTagsArgs(ToolArgs):
    contactId: str = Field(description="The unique ID of the contact")
    tags: List[str] = Field(min_length=1, description="Tags to add or remove")


class ContactTools(ToolProvider):
    """Tools for the contacts endpoints."""

    category = "Contact Management"

    @tool(
        "ghl_create_contact",
        "Create a new contact in the configured location. Provide at least an email or phone.",
        args=CreateContactArgs,
    )
    async def create_contact(self, params: CreateContactArgs) -> Dict[str, Any]:
        return await self.client.create_contact(params.payload())

    @tool("ghl_get_contact", "Get a contact by ID with all stored fields and tags.", args=ContactIdArgs)
    async def get_contact(self, params: ContactIdArgs) -> Dict[str, Any]:
        return await self.client.get_contact(params.contactId)

    @tool("ghl_update_contact", "Update fields of an existing contact.", args=UpdateContactArgs)
    async def update_contact(self, params: UpdateContactArgs) -> Dict[str, Any]:
        updates = params.payload()
        contact_id = updates.pop("contactId")
        return await self.client.update_contact(contact_id, updates)

    @tool("ghl_delete_contact", "Delete a contact permanently.", args=ContactIdArgs)
    async def delete_contact(self, params: ContactIdArgs) -> Dict[str, Any]:
        return await self.client.delete_contact(params.contactId)

    @tool("ghl_search_contacts", "Search contacts in the configured location.", args=SearchContactsArgs)
    async def search_contacts(self, params: SearchContactsArgs) -> Dict[str, Any]:
        return await self.client.search_contacts(query=params.query, limit=params.limit)

    @tool("ghl_add_contact_tags", "Add tags to a contact.", args=ContactTagsArgs)
    async def add_contact_tags(self, params: ContactTagsArgs) -> Dict[str, Any]:
        return await self.client.add_contact_tags(params.contactId, params.tags)

    @tool("ghl_remove_contact_tags", "Remove tags from a contact.", args=ContactTagsArgs)
    async def remove_contact_tags(self, params: ContactTagsArgs) -> Dict[str, Any]:
        return await self.client.remove_contact_tags(params.contactId, params.tags)
