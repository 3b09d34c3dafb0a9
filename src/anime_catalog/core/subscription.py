"""Channel-based subscription for reactive cache reads."""

import asyncio
import threading
from collections import deque
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Subscription(Generic[T]):
    """Long-lived stream of values pushed by a producer.

    The producer calls ``push`` from any thread and ``complete`` when the
    stream ends. The consumer iterates with ``async for`` and may call
    ``cancel`` at any time. Values pushed before the consumer starts
    iterating are buffered in order.

    Usage:
        with store.stream_by_id("01") as sub:
            async for item in sub:
                ...
    """

    def __init__(self, on_cancel: Optional[Callable[["Subscription[T]"], None]] = None) -> None:
        self._on_cancel = on_cancel
        self._lock = threading.Lock()
        self._buffer: deque[T] = deque()
        self._waiter: Optional[asyncio.Future] = None
        self._closed = False
        self._cancelled = False
        try:
            self._loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None

    @property
    def active(self) -> bool:
        return not self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def push(self, value: T) -> None:
        """Emit a value. Ignored once the stream is closed."""
        with self._lock:
            if self._closed:
                return
            self._buffer.append(value)
        self._wake()

    def complete(self) -> None:
        """End the stream. Buffered values are still delivered."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._wake()

    def cancel(self) -> None:
        """Detach the consumer. Safe to call more than once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._closed = True
            self._buffer.clear()
        self._wake()
        if self._on_cancel is not None:
            self._on_cancel(self)

    async def first_or_none(self) -> Optional[T]:
        """Wait for the first value, then cancel.

        Returns:
            The first emission, or None if the stream ended without one
        """
        try:
            return await self.__anext__()
        except StopAsyncIteration:
            return None
        finally:
            self.cancel()

    def _wake(self) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            self._resolve_waiter()
        else:
            loop.call_soon_threadsafe(self._resolve_waiter)

    def _resolve_waiter(self) -> None:
        waiter = self._waiter
        if waiter is not None and not waiter.done():
            waiter.set_result(None)

    def __aiter__(self) -> "Subscription[T]":
        return self

    async def __anext__(self) -> T:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()

        while True:
            with self._lock:
                if self._buffer:
                    return self._buffer.popleft()
                if self._closed:
                    raise StopAsyncIteration
                waiter = self._loop.create_future()
                self._waiter = waiter
            try:
                await waiter
            finally:
                self._waiter = None

    def __enter__(self) -> "Subscription[T]":
        return self

    def __exit__(self, *args) -> None:
        self.cancel()
