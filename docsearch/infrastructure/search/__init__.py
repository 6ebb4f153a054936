"""Document-search read paths (get-by-id, get-by-raw-URI) and their collaborators."""

from docsearch.infrastructure.search.client import (
    DocumentSearchClient,
    close_search_client,
    get_search_client,
    init_search_client,
)
from docsearch.infrastructure.search.context_get import ContextGet
from docsearch.infrastructure.search.error_predicates import (
    MarkerRoutingMissingPredicate,
    RoutingMissingPredicate,
)
from docsearch.infrastructure.search.mapping import (
    DocumentMapping,
    MappingRegistry,
    MappingResolver,
)
from docsearch.infrastructure.search.routing import render_routing
from docsearch.infrastructure.search.sync_bridge import SyncBridge

__all__ = [
    "ContextGet",
    "DocumentMapping",
    "DocumentSearchClient",
    "MappingRegistry",
    "MappingResolver",
    "MarkerRoutingMissingPredicate",
    "RoutingMissingPredicate",
    "SyncBridge",
    "close_search_client",
    "get_search_client",
    "init_search_client",
    "render_routing",
]
