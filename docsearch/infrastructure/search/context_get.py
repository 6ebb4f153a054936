"""Document fetcher: get-by-id and get-by-raw-URI against the document service.

Both read paths share one asynchronous pipeline:

1. Build the request URL (computed from the entity mapping, or supplied).
2. Send an HTTP GET and read the body, each step honoring the cancellation token.
3. Interpret the status into a ResultDetails envelope.

The asynchronous methods return 400/404 and other statuses as data (except a
routing-missing 400, which raises immediately). The blocking methods run the
same coroutine through a SyncBridge and raise for exactly 400 and 404.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from docsearch.domain.entities.result import FetchOutcome, ResultDetails
from docsearch.domain.entities.routing import EntityContextInfo, RoutingDefinition
from docsearch.domain.exceptions import (
    BadRequestException,
    ConfigurationException,
    DocumentNotFoundException,
    RoutingMissingException,
)
from docsearch.infrastructure.search.error_predicates import (
    MarkerRoutingMissingPredicate,
    RoutingMissingPredicate,
)
from docsearch.infrastructure.search.mapping import DocumentMapping, MappingResolver
from docsearch.infrastructure.search.routing import render_routing
from docsearch.infrastructure.search.sync_bridge import SyncBridge
from docsearch.schemas.get_result import GetResult
from docsearch.shared.cancellation import (
    CancellationToken,
    OperationCancelledError,
    run_cancellable,
)
from docsearch.shared.telemetry.logging import get_logger
from docsearch.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

T = TypeVar("T")

logger = get_logger(__name__)


def _as_status(code: int) -> HTTPStatus | int:
    """Return the HTTPStatus member for code, or the bare int for non-standard codes."""
    try:
        return HTTPStatus(code)
    except ValueError:
        return code


class ContextGet:
    """Fetches single documents by id and raw search/get responses by URI.

    The httpx.AsyncClient is bound to the event loop that first uses it:
    drive one instance either from the caller's loop (async methods) or
    through its SyncBridge (blocking methods), not both.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        mapping_resolver: MappingResolver,
        *,
        routing_missing: RoutingMissingPredicate | None = None,
        cancel_token: CancellationToken | None = None,
        sync_bridge: SyncBridge | None = None,
    ) -> None:
        base = (base_url or "").strip().rstrip("/")
        if not base:
            raise ConfigurationException("base_url must not be empty", field="base_url")
        self._base_url = base
        self._http = http_client
        self._mappings = mapping_resolver
        self._routing_missing = routing_missing or MarkerRoutingMissingPredicate()
        self._cancel_token = cancel_token or CancellationToken()
        self._owns_bridge = sync_bridge is None
        self._bridge = sync_bridge or SyncBridge()

    def close(self) -> None:
        """Stop the sync bridge thread if this instance created it.

        The HTTP client is not closed; it belongs to the caller.
        """
        if self._owns_bridge:
            self._bridge.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def cancel_token(self) -> CancellationToken:
        return self._cancel_token

    def document_url(
        self,
        entity_type: type,
        entity_id: Any,
        routing: RoutingDefinition | None = None,
    ) -> str:
        """Return `<base>/<index>/<docType>/<id><routingSuffix>` for entity_type.

        The id is percent-encoded as a single path segment.

        Raises:
            MappingNotFoundException: entity_type is not registered.
        """
        return self._document_url(self._mappings.resolve(entity_type), entity_id, routing)

    def _document_url(
        self,
        mapping: DocumentMapping,
        entity_id: Any,
        routing: RoutingDefinition | None,
    ) -> str:
        segment = quote(str(entity_id), safe="")
        return (
            f"{self._base_url}/{mapping.index}/{mapping.doc_type}/"
            f"{segment}{render_routing(routing)}"
        )

    # ------------------------------------------------------------------
    # Blocking API
    # ------------------------------------------------------------------

    def get_document(
        self,
        entity_type: type[T],
        entity_id: Any,
        routing: RoutingDefinition | None = None,
    ) -> T | None:
        """Fetch a document by id, blocking until done.

        Raises:
            DocumentNotFoundException: The service returned 404.
            BadRequestException: The service returned 400.
            RoutingMissingException: A child document was fetched without routing.
        """
        result = self._bridge.run(
            lambda: self.get_document_async(entity_type, entity_id, routing)
        )
        return self._raise_for_client_error(result)

    def get(self, uri: str | httpx.URL) -> GetResult | None:
        """Fetch a raw URI and map the body onto GetResult, blocking until done.

        Raises:
            DocumentNotFoundException: The service returned 404.
            BadRequestException: The service returned 400.
            RoutingMissingException: A child document was fetched without routing.
        """
        result = self._bridge.run(lambda: self.get_async(uri))
        return self._raise_for_client_error(result)

    @staticmethod
    def _raise_for_client_error(result: ResultDetails[T]) -> T | None:
        if result.status == HTTPStatus.NOT_FOUND:
            logger.warning("Document fetch: HTTPStatus.NOT_FOUND %s", result.request_url)
            raise DocumentNotFoundException(result.request_url)
        if result.status == HTTPStatus.BAD_REQUEST:
            logger.warning("Document fetch: HTTPStatus.BAD_REQUEST %s", result.request_url)
            raise BadRequestException(result.description, result.request_url)
        return result.payload_result

    # ------------------------------------------------------------------
    # Asynchronous API
    # ------------------------------------------------------------------

    @traced(
        "docsearch.get_document",
        attributes={"db.system": "elasticsearch"},
        record=("entity_type", "entity_id"),
    )
    async def get_document_async(
        self,
        entity_type: type[T],
        entity_id: Any,
        routing: RoutingDefinition | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> ResultDetails[T]:
        """Fetch a document by id and deserialize its `_source` into entity_type.

        Returns an envelope whose payload_result is set only for a 200
        response carrying `_source`. 404, 400 and other statuses are
        returned as data.

        Raises:
            MappingNotFoundException: entity_type is not registered.
            RoutingMissingException: The service reported a missing routing key.
        """
        logger.debug(
            "Request for select document with id: %s, type: %s",
            entity_id,
            entity_type.__qualname__,
        )
        mapping = self._mappings.resolve(entity_type)
        url = self._document_url(mapping, entity_id, routing)

        def _parse(body: str) -> T | None:
            payload = json.loads(body)
            source = payload.get("_source") if isinstance(payload, dict) else None
            if source is None:
                return None
            return self._mappings.parse_entity(source, entity_type)

        return await self._fetch(url, _parse, cancel_token or self._cancel_token)

    async def fetch_context_async(
        self,
        context: EntityContextInfo,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> ResultDetails[Any]:
        """Fetch the stored document described by an EntityContextInfo."""
        if context.entity_type is None:
            raise ValueError("EntityContextInfo.entity_type is required to fetch a document")
        return await self.get_document_async(
            context.entity_type,
            context.id,
            context.routing_definition,
            cancel_token=cancel_token,
        )

    @traced("docsearch.get", attributes={"db.system": "elasticsearch"})
    async def get_async(
        self,
        uri: str | httpx.URL,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> ResultDetails[GetResult]:
        """Fetch a caller-built URI and validate the whole body into GetResult.

        Raises:
            RoutingMissingException: The service reported a missing routing key.
        """
        logger.debug("Request for search: %s", GetResult.__name__)
        return await self._fetch(
            str(uri),
            lambda body: GetResult.model_validate(json.loads(body)),
            cancel_token or self._cancel_token,
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _open(self, url: str, token: CancellationToken) -> AsyncIterator[httpx.Response]:
        request = self._http.build_request("GET", url)
        response = await run_cancellable(self._http.send(request, stream=True), token)
        try:
            yield response
        finally:
            await response.aclose()

    @staticmethod
    async def _read_text(response: httpx.Response, token: CancellationToken) -> str:
        await run_cancellable(response.aread(), token)
        return response.text

    async def _fetch(
        self,
        url: str,
        parse: Callable[[str], T | None],
        token: CancellationToken,
    ) -> ResultDetails[T]:
        result: ResultDetails[T] = ResultDetails(request_url=url)
        try:
            logger.debug("Request HTTP GET uri: %s", url)
            async with self._open(url, token) as response:
                result.status = _as_status(response.status_code)
                add_span_attributes(**{"http.method": "GET", "http.status_code": response.status_code})
                if result.status != HTTPStatus.OK:
                    logger.warning(
                        "GET %s response status code: %s, %s",
                        url,
                        response.status_code,
                        response.reason_phrase,
                    )
                    result.description = await self._read_text(response, token)
                    if result.status == HTTPStatus.BAD_REQUEST and self._routing_missing(
                        result.description
                    ):
                        add_span_event("docsearch.routing_missing", status=response.status_code)
                        raise RoutingMissingException(result.description, url)
                    return result

                body = await self._read_text(response, token)
                logger.debug("Get request response: %s", body)
                result.payload_result = parse(body)
                return result
        except OperationCancelledError as exc:
            logger.debug("Get request cancelled: %s (%s)", url, exc)
            add_span_event("docsearch.cancelled", status=int(result.status))
            result.outcome = FetchOutcome.CANCELLED
            return result
