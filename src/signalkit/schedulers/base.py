from __future__ import annotations

"""Common interface for the objects that launch signal callbacks.

A scheduler decides *when* a callback runs once a Signal has decided *that*
it runs. `spawn` must return without waiting for the callback to finish
(callbacks that return an awaitable keep running as asyncio tasks).

Failures are isolated here: an exception raised by one callback is logged
and never reaches the code that fired the signal.
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Set, Tuple

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Abstract base class for callback schedulers."""

    name = "base"

    def __init__(self):
        self._tasks: Set[asyncio.Future] = set()

    @abstractmethod
    def spawn(self, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        """Launch `callback(*args)` without waiting for it to complete."""
        ...

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def run_callback(self, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        try:
            result = callback(*args)
        except Exception:
            logger.exception("Signal callback %r raised", callback)
            return
        if inspect.isawaitable(result):
            self._start_task(callback, result)

    def _start_task(self, callback: Callable[..., Any], awaitable) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("Coroutine callback %r needs a running event loop; dropped", callback)
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return
        task = asyncio.ensure_future(awaitable, loop=loop)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Future) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Signal callback task %r raised", task, exc_info=exc)

    async def join(self) -> None:
        """Let deferred launches run, then wait for in-flight callback tasks."""
        await asyncio.sleep(0)
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
            await asyncio.sleep(0)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} pending={self.pending}>"
