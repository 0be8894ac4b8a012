"""
GoHighLevel tool providers.

PROVIDER_CLASSES fixes the order in which categories are registered,
which is also the order of the registry summary.
"""

from typing import List

from ..base import ToolProvider
from .calendars import CalendarTools
from .contacts import ContactTools
from .knowledge_base import KnowledgeBaseTools
from .locations import LocationTools
from .opportunities import OpportunityTools
from .payments import PaymentsTools

PROVIDER_CLASSES = [
    ContactTools,
    OpportunityTools,
    CalendarTools,
    LocationTools,
    PaymentsTools,
    KnowledgeBaseTools,
]


def build_tool_providers(client) -> List[ToolProvider]:
    """Instantiate every provider against a shared API client."""
    return [provider_cls(client) for provider_cls in PROVIDER_CLASSES]


__all__ = [
    "PROVIDER_CLASSES",
    "build_tool_providers",
    "CalendarTools",
    "ContactTools",
    "KnowledgeBaseTools",
    "LocationTools",
    "OpportunityTools",
    "PaymentsTools",
]
