"""Document search client (settings-driven facade over ContextGet).

DocumentSearchClient wires the HTTP transport, mapping registry, routing-missing
predicate and sync bridge from Settings. It keeps two ContextGet instances on
separate httpx.AsyncClient pools: one driven by the caller's event loop (async
methods) and one driven by the sync bridge loop (blocking methods), so both
calling conventions can be used on the same client.

A process-wide instance can be managed with init_search_client(),
get_search_client() and close_search_client().
"""

from __future__ import annotations

import asyncio
from typing import Any, TypeVar

import httpx

from docsearch.core.config import Settings, get_settings
from docsearch.domain.entities.result import ResultDetails
from docsearch.domain.entities.routing import EntityContextInfo, RoutingDefinition
from docsearch.infrastructure.search.context_get import ContextGet
from docsearch.infrastructure.search.error_predicates import MarkerRoutingMissingPredicate
from docsearch.infrastructure.search.mapping import MappingRegistry
from docsearch.infrastructure.search.sync_bridge import SyncBridge
from docsearch.schemas.get_result import GetResult
from docsearch.shared.cancellation import CancellationToken
from docsearch.shared.telemetry.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class DocumentSearchClient:
    """Typed read access to a document-search service over HTTP."""

    def __init__(
        self,
        settings: Settings,
        mappings: MappingRegistry | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        """Build the client.

        Args:
            settings: Base URL, timeout and routing-missing markers.
            mappings: Entity registry; a new empty one is created when omitted.
            http_client: Client for the async API; not closed by aclose().
            transport: Transport for the owned clients (e.g. httpx.MockTransport in tests).
            cancel_token: Token shared by every fetch made through this client.
        """
        self.settings = settings
        self.mappings = mappings or MappingRegistry()
        self.cancel_token = cancel_token or CancellationToken()
        self._bridge = SyncBridge()
        predicate = MarkerRoutingMissingPredicate(settings.routing_missing_markers)

        self._owns_async_http = http_client is None
        self._async_http = http_client or self._new_http_client(transport)
        self._sync_http = self._new_http_client(transport)

        self._async_context = ContextGet(
            settings.base_url,
            self._async_http,
            self.mappings,
            routing_missing=predicate,
            cancel_token=self.cancel_token,
        )
        self._sync_context = ContextGet(
            settings.base_url,
            self._sync_http,
            self.mappings,
            routing_missing=predicate,
            cancel_token=self.cancel_token,
            sync_bridge=self._bridge,
        )

    def _new_http_client(self, transport: httpx.AsyncBaseTransport | None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.request_timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def register(self, entity_type: type, **kwargs: Any) -> None:
        """Register entity_type in the mapping registry (see MappingRegistry.register)."""
        self.mappings.register(entity_type, **kwargs)

    def cancel(self) -> None:
        """Cancel every in-flight and future fetch made through this client."""
        self.cancel_token.cancel()

    # Blocking API

    def get_document(
        self,
        entity_type: type[T],
        entity_id: Any,
        routing: RoutingDefinition | None = None,
    ) -> T | None:
        return self._sync_context.get_document(entity_type, entity_id, routing)

    def get(self, uri: str | httpx.URL) -> GetResult | None:
        return self._sync_context.get(uri)

    # Asynchronous API

    async def get_document_async(
        self,
        entity_type: type[T],
        entity_id: Any,
        routing: RoutingDefinition | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> ResultDetails[T]:
        return await self._async_context.get_document_async(
            entity_type, entity_id, routing, cancel_token=cancel_token
        )

    async def fetch_context_async(
        self,
        context: EntityContextInfo,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> ResultDetails[Any]:
        return await self._async_context.fetch_context_async(context, cancel_token=cancel_token)

    async def get_async(
        self,
        uri: str | httpx.URL,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> ResultDetails[GetResult]:
        return await self._async_context.get_async(uri, cancel_token=cancel_token)

    # Lifecycle

    async def aclose(self) -> None:
        """Close owned HTTP clients and stop the sync bridge (do not close an injected client).

        Bridge work is waited on from a worker thread so the caller's loop keeps running.
        """
        if self._owns_async_http:
            await self._async_http.aclose()
        self._async_context.close()
        if self._bridge.running:
            await asyncio.to_thread(self._bridge.run, self._sync_http.aclose)
        await asyncio.to_thread(self._bridge.close)

    def close(self) -> None:
        """Blocking counterpart of aclose() for callers that only use the blocking API."""
        if self._owns_async_http:
            self._bridge.run(self._async_http.aclose)
        self._async_context.close()
        if self._bridge.running:
            self._bridge.run(self._sync_http.aclose)
        self._bridge.close()

    async def __aenter__(self) -> DocumentSearchClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __enter__(self) -> DocumentSearchClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_search_client: DocumentSearchClient | None = None


def init_search_client(
    settings: Settings | None = None,
    mappings: MappingRegistry | None = None,
) -> DocumentSearchClient:
    """Create the process-wide client from settings. Idempotent if already initialized."""
    global _search_client
    if _search_client is None:
        settings = settings or get_settings()
        _search_client = DocumentSearchClient(settings, mappings)
        logger.info("Document search client initialized for %s", settings.base_url)
    return _search_client


def get_search_client() -> DocumentSearchClient | None:
    """Return the process-wide client, or None if not initialized."""
    return _search_client


async def close_search_client() -> None:
    """Close the process-wide client's HTTP pools. Call from application shutdown."""
    global _search_client
    if _search_client is not None:
        await _search_client.aclose()
        _search_client = None
        logger.info("Document search client closed")
