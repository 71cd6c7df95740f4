from __future__ import annotations

from typing import Any, Callable, Tuple

from .base import Scheduler


class InlineScheduler(Scheduler):
    """Runs plain callbacks on the spot; coroutine callbacks become tasks.

    A plain callback has no suspension points, so it runs to completion at
    launch. Anything it does to the signal (fire, connect, disconnect) happens
    while the current pack is still being dispatched.
    """

    name = "inline"

    def spawn(self, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        self.run_callback(callback, args)
