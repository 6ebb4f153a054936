"""Pytest configuration and fixtures for docsearch.

HTTP tests run ContextGet against httpx.MockTransport; handlers are plain
functions (or coroutines) mapping an httpx.Request to an httpx.Response.
"""

from collections.abc import Callable, Iterator

import httpx
import pytest

from docsearch.infrastructure.search.context_get import ContextGet
from docsearch.infrastructure.search.mapping import MappingRegistry
from docsearch.infrastructure.search.sync_bridge import SyncBridge
from tests.entities import Order, OrderLine

BASE_URL = "https://es.local:9200"


@pytest.fixture
def registry() -> MappingRegistry:
    """Registry with Order and OrderLine registered using default names."""
    reg = MappingRegistry()
    reg.register(Order)
    reg.register(OrderLine, index="orders", doc_type="orderline")
    return reg


@pytest.fixture
def sync_bridge() -> Iterator[SyncBridge]:
    """Sync bridge stopped after the test."""
    bridge = SyncBridge()
    yield bridge
    bridge.close()


@pytest.fixture
def make_context(
    registry: MappingRegistry, sync_bridge: SyncBridge
) -> Callable[..., ContextGet]:
    """Factory: ContextGet whose HTTP client answers through the given handler."""

    def _make(handler: Callable, **kwargs) -> ContextGet:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ContextGet(
            BASE_URL,
            http_client,
            registry,
            sync_bridge=sync_bridge,
            **kwargs,
        )

    return _make
