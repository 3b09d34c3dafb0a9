"""Execution contexts for blocking store work."""

import asyncio
import functools
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

T = TypeVar("T")


class Scheduler(ABC):
    """Runs blocking calls off the caller's event loop."""

    @abstractmethod
    async def run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run ``fn`` and return its result to the awaiting caller."""
        pass


class WorkerScheduler(Scheduler):
    """Run calls on a background thread pool."""

    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="anime-catalog-io"
        )

    async def run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, functools.partial(fn, *args, **kwargs)
        )

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "WorkerScheduler":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()


class ImmediateScheduler(Scheduler):
    """Run calls inline on the current thread (tests, scripts)."""

    async def run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return fn(*args, **kwargs)
