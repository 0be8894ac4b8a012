"""
MCP Tool Base Classes and Decorators

Provides the tool definition type, the provider base class with its
name -> handler lookup table, input validation and the error hierarchy
shared by every tool provider.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type

from mcp.types import Tool
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

ToolExecutor = Callable[[str, Dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDefinition:
    """Complete definition of an MCP tool."""
    name: str
    description: str
    input_schema: Dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    @classmethod
    def from_model(
        cls, name: str, description: str, model: Type[BaseModel]
    ) -> "ToolDefinition":
        """Build a definition whose input schema is generated from a pydantic model."""
        schema = model.model_json_schema()
        schema.pop("title", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        return cls(name=name, description=description, input_schema=schema)

    def to_mcp_tool(self) -> Tool:
        """Convert to the protocol Tool type returned by list_tools."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""
    def __init__(self, message: str, tool_name: str = None, details: Dict = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class ToolInputError(MCPToolError):
    """Raised when tool arguments fail schema validation."""
    pass


class ExecutionError(MCPToolError):
    """Raised when tool execution fails."""
    pass


class UnknownToolError(MCPToolError):
    """Raised by the registry when no tool is registered under a name."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", tool_name=tool_name)


class ToolArgs(BaseModel):
    """Base model for tool arguments. Unknown fields are rejected."""

    model_config = {"extra": "forbid"}

    def payload(self) -> Dict[str, Any]:
        """Arguments as a JSON-ready dict, leaving out unset optional fields."""
        return self.model_dump(exclude_none=True)


@dataclass
class ToolGroup:
    """
    A provider assembled from plain values.

    Useful for wiring an existing dispatcher function into the registry
    without writing a ToolProvider subclass.
    """
    category: str
    definitions: List[ToolDefinition]
    execute: ToolExecutor


def tool(name: str, description: str, args: Type[BaseModel] = ToolArgs):
    """
    Decorator marking a ToolProvider method as the handler of a tool.

    Usage:
        class ContactTools(ToolProvider):
            category = "Contact Management"

            @tool("ghl_get_contact", "Get a contact by ID", args=GetContactArgs)
            async def get_contact(self, params: GetContactArgs):
                return await self.client.get_contact(params.contactId)
    """
    def decorator(func: Callable):
        func.__tool_definition__ = ToolDefinition.from_model(name, description, args)
        func.__tool_args__ = args
        return func

    return decorator


class ToolProvider:
    """
    Base class for a category of tools backed by the CRM API client.

    Handlers are declared with the @tool decorator and collected once,
    in declaration order, into a name -> (handler, args model) table.
    """

    category: str = "general"

    def __init__(self, client: Any = None):
        self.client = client
        self._handlers: Dict[str, Tuple[Callable, Type[BaseModel]]] = {}
        self._definitions: List[ToolDefinition] = []

        # Base class tools come first; an override keeps its base's position
        members: Dict[str, Any] = {}
        for klass in reversed(type(self).__mro__):
            members.update(vars(klass))

        for attr in members.values():
            definition = getattr(attr, "__tool_definition__", None)
            if definition is None:
                continue
            self._handlers[definition.name] = (
                attr.__get__(self, type(self)),
                attr.__tool_args__,
            )
            self._definitions.append(definition)

    @property
    def definitions(self) -> List[ToolDefinition]:
        return list(self._definitions)

    def validate(self, tool_name: str, args: Optional[Dict[str, Any]]) -> BaseModel:
        """
        Validate raw arguments against the tool's input model.
        Raises ToolInputError if validation fails.
        """
        _, model = self._handlers[tool_name]
        try:
            return model.model_validate(args or {})
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            )
            raise ToolInputError(
                f"Invalid arguments for {tool_name}: {problems}",
                tool_name=tool_name,
                details={"errors": e.errors(include_url=False)},
            ) from e

    async def execute(self, tool_name: str, args: Optional[Dict[str, Any]]) -> Any:
        """Validate the arguments and run the handler registered for tool_name."""
        entry = self._handlers.get(tool_name)
        if entry is None:
            raise ExecutionError(
                f"Unknown {self.category} tool: {tool_name}",
                tool_name=tool_name,
            )

        handler, _ = entry
        params = self.validate(tool_name, args)
        logger.debug(f"Executing {self.category} tool {tool_name}")
        return await handler(params)
