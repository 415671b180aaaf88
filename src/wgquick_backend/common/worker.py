"""Thread pool bridge that keeps blocking work off the event loop."""

import asyncio
import functools
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from types import TracebackType
from typing import Literal, ParamSpec, TypeVar

from .logging import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


class AsyncWorker:
    """Runs blocking callables on a thread pool and awaits their results"""

    def __init__(self, max_workers: int = 4):
        self.max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Thread pool, created on first use"""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="wg-worker"
            )
            logger.debug("Worker pool started", max_workers=self.max_workers)
        return self._executor

    async def run(
        self, func: Callable[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        """Run ``func`` in the pool; exceptions propagate to the awaiter"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, functools.partial(func, *args, **kwargs)
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stop the pool; a later ``run`` starts a fresh one"""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None
            logger.debug("Worker pool stopped")

    def __enter__(self) -> "AsyncWorker":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        self.shutdown()
        return False
