"""
MCP Tool Registry

Single Source of Truth (SSOT) mapping tool names to the provider that executes them.
Built once at startup from an ordered list of providers; read-only afterwards.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from .base import ToolDefinition, UnknownToolError

BoundExecutor = Callable[[Dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class CategorySummary:
    """Number of tools a provider actually registered (duplicates excluded)."""
    category: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _bind(provider: Any, tool_name: str) -> BoundExecutor:
    async def executor(args: Dict[str, Any]) -> Any:
        return await provider.execute(tool_name, args)

    return executor


class ToolRegistry:
    """
    Aggregates tool providers into one name -> executor map.

    The first provider to declare a name wins; later declarations of the
    same name are logged and skipped.
    """

    def __init__(self, providers: Iterable[Any], logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._executors: Dict[str, BoundExecutor] = {}
        self._categories: Dict[str, str] = {}
        self._definitions: List[ToolDefinition] = []
        self._summary: List[CategorySummary] = []

        for provider in providers:
            registered = 0

            for definition in provider.definitions:
                if definition.name in self._executors:
                    existing = self._categories[definition.name]
                    self._logger.warning(
                        f"Duplicate tool registration detected; skipping {definition.name}",
                        extra={"meta": {
                            "tool": definition.name,
                            "existingCategory": existing,
                            "newCategory": provider.category,
                        }},
                    )
                    continue

                self._executors[definition.name] = _bind(provider, definition.name)
                self._categories[definition.name] = provider.category
                self._definitions.append(definition)
                registered += 1

            self._summary.append(CategorySummary(provider.category, registered))
            self._logger.debug(f"Registered {registered} tools for {provider.category}")

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._executors

    def get_definitions(self) -> List[ToolDefinition]:
        """All registered definitions, in provider then declaration order."""
        return list(self._definitions)

    def get_category(self, tool_name: str) -> Optional[str]:
        """Owning category of a registered tool, or None."""
        return self._categories.get(tool_name)

    def get_summary(self) -> List[CategorySummary]:
        """One entry per provider, in provider declaration order."""
        return list(self._summary)

    def get_snapshot(self) -> Dict[str, Any]:
        return {
            "total": len(self._definitions),
            "categories": [entry.to_dict() for entry in self._summary],
        }

    async def invoke(self, tool_name: str, args: Dict[str, Any]) -> Any:
        """
        Execute a tool by name.
        Raises UnknownToolError for unregistered names; provider failures
        propagate unchanged.
        """
        executor = self._executors.get(tool_name)
        if executor is None:
            raise UnknownToolError(tool_name)

        return await executor(args)
