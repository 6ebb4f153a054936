"""Thread-safe cancellation signal shared between callers and fetch operations.

A CancellationToken can be cancelled from any thread (including a thread that
is blocked in the synchronous API) and wakes every coroutine awaiting it on
whatever event loop that coroutine runs.
"""

from __future__ import annotations

import asyncio
import inspect
import threading
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")


class OperationCancelledError(Exception):
    """Raised inside a fetch pipeline when its CancellationToken fires."""


class CancellationToken:
    """One-shot cancellation flag with thread-safe callbacks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Mark the token cancelled and run registered callbacks once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run on cancel; returns a function that unregisters it.

        The callback runs immediately when the token is already cancelled.
        """
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return lambda: self._unregister(callback)
        callback()
        return lambda: None

    def _unregister(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelledError("Operation was cancelled")

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()

        def _resolve() -> None:
            if not waiter.done():
                waiter.set_result(None)

        unregister = self.register(lambda: loop.call_soon_threadsafe(_resolve))
        try:
            await waiter
        finally:
            unregister()


async def run_cancellable(awaitable: Awaitable[T], token: CancellationToken) -> T:
    """Await `awaitable` unless `token` fires first.

    Raises:
        OperationCancelledError: The token was cancelled before the awaitable
            finished; the awaitable is cancelled and awaited before raising.
    """
    if token.cancelled and inspect.iscoroutine(awaitable):
        awaitable.close()
    token.raise_if_cancelled()
    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()
            await asyncio.wait({task})
    if task.cancelled():
        raise OperationCancelledError("Operation was cancelled")
    return task.result()
