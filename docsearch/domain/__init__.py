"""Domain layer: result envelope, routing information, and exceptions.

No dependencies on infrastructure. Used by the search infrastructure and
by callers inspecting fetch results.
"""

from docsearch.domain.entities import (
    EntityContextInfo,
    FetchOutcome,
    ResultDetails,
    RoutingDefinition,
)
from docsearch.domain.exceptions import (
    BadRequestException,
    ConfigurationException,
    DocsearchException,
    DocumentClientException,
    DocumentNotFoundException,
    MappingNotFoundException,
    RoutingMissingException,
)

__all__ = [
    "BadRequestException",
    "ConfigurationException",
    "DocsearchException",
    "DocumentClientException",
    "DocumentNotFoundException",
    "EntityContextInfo",
    "FetchOutcome",
    "MappingNotFoundException",
    "ResultDetails",
    "RoutingDefinition",
    "RoutingMissingException",
]
