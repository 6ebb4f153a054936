"""DocumentSearchClient: settings-driven facade and process-wide lifecycle."""

import asyncio
from http import HTTPStatus

import httpx
import pytest

from docsearch.core.config import Settings
from docsearch.domain.exceptions import DocumentNotFoundException, RoutingMissingException
from docsearch.infrastructure.search import client as client_module
from docsearch.infrastructure.search.client import (
    DocumentSearchClient,
    close_search_client,
    get_search_client,
    init_search_client,
)
from docsearch.infrastructure.search.mapping import MappingRegistry
from tests.entities import Order


def _orders_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/orders/order/42":
        return httpx.Response(200, json={"_source": {"id": 42, "total": 9.5}})
    if request.url.path == "/orders/_search":
        return httpx.Response(200, json={"hits": {"total": 3, "hits": []}})
    if request.url.path.startswith("/orders/orderline/"):
        return httpx.Response(400, text="parent_required: child document needs routing")
    return httpx.Response(404, json={"found": False})


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url="https://es.local:9200/", routing_missing_markers=["parent_required"])


def test_blocking_api(settings: Settings) -> None:
    with DocumentSearchClient(settings, transport=httpx.MockTransport(_orders_handler)) as client:
        client.register(Order)
        assert client.get_document(Order, 42) == Order(id=42, total=9.5)
        assert client.get("https://es.local:9200/orders/_search?q=total:>5").hit_count == 3
        with pytest.raises(DocumentNotFoundException):
            client.get_document(Order, 7)


async def test_async_api(settings: Settings) -> None:
    async with DocumentSearchClient(settings, transport=httpx.MockTransport(_orders_handler)) as client:
        client.register(Order)
        found = await client.get_document_async(Order, 42)
        missing = await client.get_document_async(Order, 7)
        search = await client.get_async("https://es.local:9200/orders/_search")

    assert found.payload_result == Order(id=42, total=9.5)
    assert missing.status == HTTPStatus.NOT_FOUND
    assert search.payload_result.hit_count == 3


async def test_blocking_and_async_on_same_client(settings: Settings) -> None:
    """Blocking calls made from inside a running loop use the bridge's own pool."""
    async with DocumentSearchClient(settings, transport=httpx.MockTransport(_orders_handler)) as client:
        client.register(Order)
        assert (await client.get_document_async(Order, 42)).ok
        assert client.get_document(Order, 42) == Order(id=42, total=9.5)
        assert (await client.get_document_async(Order, 42)).ok


async def test_routing_markers_come_from_settings(settings: Settings) -> None:
    registry = MappingRegistry()
    registry.register(Order, index="orders", doc_type="orderline")
    async with DocumentSearchClient(
        settings, registry, transport=httpx.MockTransport(_orders_handler)
    ) as client:
        with pytest.raises(RoutingMissingException):
            await client.get_document_async(Order, 3)


async def test_cancel_marks_results_cancelled(settings: Settings) -> None:
    async with DocumentSearchClient(settings, transport=httpx.MockTransport(_orders_handler)) as client:
        client.register(Order)
        client.cancel()
        result = await client.get_document_async(Order, 42)

    assert result.cancelled
    assert result.status == HTTPStatus.INTERNAL_SERVER_ERROR


async def test_injected_http_client_is_not_closed(settings: Settings) -> None:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_orders_handler))
    client = DocumentSearchClient(settings, http_client=http_client)
    client.register(Order)
    assert (await client.get_document_async(Order, 42)).ok
    await client.aclose()
    assert not http_client.is_closed
    await http_client.aclose()


async def test_process_wide_client_lifecycle(
    settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(client_module, "_search_client", None)
    assert get_search_client() is None

    created = init_search_client(settings)
    assert get_search_client() is created
    assert init_search_client(settings) is created
    assert created.settings.base_url == "https://es.local:9200"

    await close_search_client()
    assert get_search_client() is None


async def test_aclose_keeps_event_loop_running(settings: Settings) -> None:
    """Closing the bridge pool waits off-loop, so other tasks keep running."""
    client = DocumentSearchClient(settings, transport=httpx.MockTransport(_orders_handler))
    client.register(Order)
    assert client.get_document(Order, 42) == Order(id=42, total=9.5)
    assert client._bridge.running

    close_pool = client._sync_http.aclose

    async def slow_close() -> None:
        await asyncio.sleep(0.2)
        await close_pool()

    client._sync_http.aclose = slow_close
    ticks = 0

    async def tick() -> None:
        nonlocal ticks
        while True:
            ticks += 1
            await asyncio.sleep(0.01)

    ticker = asyncio.create_task(tick())
    try:
        await client.aclose()
    finally:
        ticker.cancel()

    assert ticks > 5
    assert client._sync_http.is_closed
    assert not client._bridge.running
