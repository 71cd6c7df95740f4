from __future__ import annotations

import asyncio
from typing import Any, Callable, Tuple

from .base import Scheduler


class LoopScheduler(Scheduler):
    """Defers every launch to the next turn of an asyncio event loop."""

    name = "loop"

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        super().__init__()
        self._loop = loop

    def spawn(self, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        # get_running_loop raises RuntimeError outside of a loop
        loop = self._loop or asyncio.get_running_loop()
        loop.call_soon(self.run_callback, callback, args)
