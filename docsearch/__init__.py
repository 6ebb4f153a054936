"""docsearch: typed document access against a remote document-search service.

Example:
    from docsearch import DocumentSearchClient, Settings

    with DocumentSearchClient(Settings(base_url="https://es.local:9200")) as client:
        client.register(Order)
        order = client.get_document(Order, 42)
"""

from docsearch.core.config import Settings, get_settings
from docsearch.domain import (
    BadRequestException,
    DocsearchException,
    DocumentClientException,
    DocumentNotFoundException,
    EntityContextInfo,
    FetchOutcome,
    MappingNotFoundException,
    ResultDetails,
    RoutingDefinition,
    RoutingMissingException,
)
from docsearch.infrastructure.search import (
    ContextGet,
    DocumentSearchClient,
    MappingRegistry,
    SyncBridge,
)
from docsearch.schemas import GetResult
from docsearch.shared.cancellation import CancellationToken

__all__ = [
    "BadRequestException",
    "CancellationToken",
    "ContextGet",
    "DocsearchException",
    "DocumentClientException",
    "DocumentNotFoundException",
    "DocumentSearchClient",
    "EntityContextInfo",
    "FetchOutcome",
    "GetResult",
    "MappingNotFoundException",
    "MappingRegistry",
    "ResultDetails",
    "RoutingDefinition",
    "RoutingMissingException",
    "Settings",
    "SyncBridge",
    "get_settings",
]
