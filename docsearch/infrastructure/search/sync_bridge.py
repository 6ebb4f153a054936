"""Blocking execution of asynchronous fetch operations.

The bridge owns a private event loop running in a daemon thread. Blocking
callers submit a coroutine to that loop and wait on a concurrent future, so
the coroutine never needs the caller's thread (or the caller's event loop,
if it has one) to make progress. The loop is long-lived so that an
httpx.AsyncClient used only through the bridge keeps its connection pool
on a single loop.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Awaitable, Callable
from typing import TypeVar

from docsearch.shared.telemetry.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class SyncBridge:
    """Runs zero-argument async operations to completion for blocking callers."""

    def __init__(self, thread_name: str = "docsearch-sync-bridge") -> None:
        self._thread_name = thread_name
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._in_flight = 0
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def in_flight(self) -> int:
        return self._in_flight

    def _ensure_loop_locked(self) -> asyncio.AbstractEventLoop:
        # Caller holds self._lock.
        if self._loop is not None and self.running:
            return self._loop
        loop = asyncio.new_event_loop()
        started = threading.Event()

        def _serve() -> None:
            asyncio.set_event_loop(loop)
            loop.call_soon(started.set)
            loop.run_forever()

        thread = threading.Thread(target=_serve, name=self._thread_name, daemon=True)
        thread.start()
        started.wait()
        self._loop = loop
        self._thread = thread
        logger.debug("Sync bridge loop started on thread %s", self._thread_name)
        return loop

    def _on_bridge_thread(self) -> bool:
        return threading.current_thread() is self._thread

    def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run operation on the bridge loop and block until it completes.

        Returns the operation's result or re-raises the exception it raised.
        A concurrent close() waits for this call to finish before stopping
        the loop.

        Raises:
            RuntimeError: If called from the bridge loop itself (would deadlock).
        """
        if self._on_bridge_thread():
            raise RuntimeError("SyncBridge.run() called from the bridge loop; await the operation instead")

        async def _invoke() -> T:
            return await operation()

        with self._lock:
            loop = self._ensure_loop_locked()
            future = asyncio.run_coroutine_threadsafe(_invoke(), loop)
            self._in_flight += 1
        try:
            return future.result()
        finally:
            with self._lock:
                self._in_flight -= 1
                if self._in_flight == 0:
                    self._idle.notify_all()

    def close(self) -> None:
        """Wait for in-flight run() calls, then stop the loop and join its thread.

        A later run() starts a new loop.

        Raises:
            RuntimeError: If called from an operation running on the bridge loop.
        """
        if self._on_bridge_thread():
            raise RuntimeError("SyncBridge.close() called from the bridge loop")
        with self._lock:
            self._idle.wait_for(lambda: self._in_flight == 0)
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None or thread is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        loop.close()
        logger.debug("Sync bridge loop stopped on thread %s", self._thread_name)
