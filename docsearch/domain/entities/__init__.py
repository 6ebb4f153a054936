"""Domain entities: result envelope and routing information."""

from docsearch.domain.entities.result import FetchOutcome, ResultDetails
from docsearch.domain.entities.routing import EntityContextInfo, RoutingDefinition

__all__ = [
    "EntityContextInfo",
    "FetchOutcome",
    "ResultDetails",
    "RoutingDefinition",
]
