from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Awaitable, Callable, Deque, List, Optional, Tuple

from .connection import Connection
from .errors import SignalDestroyedError
from .schedulers import Scheduler, get_scheduler

logger = logging.getLogger(__name__)


def is_signal(value: Any) -> bool:
    return isinstance(value, Signal)


def is_connection(value: Any) -> bool:
    return isinstance(value, Connection)


class Signal:
    """In-process signal: attach callbacks, then fire to launch them all.

    Callbacks are launched most-recently-connected first. Callbacks may fire,
    connect and disconnect while a fire is being dispatched:

    * a fire from inside a callback is queued and dispatched after the
      current one (fires are handled strictly in call order);
    * a connection made during dispatch only sees the next fire;
    * a disconnect during dispatch also removes the subscriber from the
      rest of the current traversal.
    """

    is_signal = staticmethod(is_signal)
    is_connection = staticmethod(is_connection)

    def __init__(self, name: str | None = None, scheduler: Scheduler | str | None = None):
        self.name = name
        if scheduler is None or isinstance(scheduler, str):
            scheduler = get_scheduler(scheduler)
        self._scheduler: Scheduler = scheduler

        self._head: Optional[Connection] = None
        self._is_firing = False
        self._is_processing = False
        self._firing_queue: Optional[Deque[Tuple[Any, ...]]] = deque()
        self._staging: List[Connection] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def is_firing(self) -> bool:
        return self._is_firing

    @property
    def is_destroyed(self) -> bool:
        return self._firing_queue is None

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        state = " destroyed" if self.is_destroyed else ""
        return f"<Signal{label}{state}>"

    # ------------------------------------------------------------------
    # Subscribing
    # ------------------------------------------------------------------
    def connect(self, callback: Callable[..., Any]) -> Connection:
        if not callable(callback):
            raise TypeError(f"Signal callback must be callable, got {type(callback).__name__}")

        connection = Connection(self, callback)
        if self.is_destroyed:
            logger.warning("connect() on destroyed %r; connection is inert", self)
            connection.disconnect()
        elif self._is_firing:
            self._staging.append(connection)
        else:
            self._link(connection)
        return connection

    def once(self, callback: Callable[..., Any]) -> Connection:
        """Connect `callback` for a single invocation."""
        fired = False

        def handler(*args):
            nonlocal fired
            if fired:
                return None
            fired = True
            connection.disconnect()
            return callback(*args)

        connection = self.connect(handler)
        return connection

    def wait(self, timeout: float | None = None) -> Awaitable[Tuple[Any, ...]]:
        """Return an awaitable for the arguments of the next fire.

        The subscription is made when `wait()` is called, not when the result
        is first awaited, so a fire in between is the one delivered. Must be
        called with an event loop running.
        """
        if self.is_destroyed:
            raise SignalDestroyedError(self)

        future = asyncio.get_running_loop().create_future()

        def resume(*args):
            if not future.done():
                future.set_result(args)

        connection = self.once(resume)

        async def waiter():
            try:
                if timeout is None:
                    return await future
                return await asyncio.wait_for(future, timeout)
            finally:
                connection.disconnect()

        return waiter()

    # ------------------------------------------------------------------
    # Firing
    # ------------------------------------------------------------------
    def fire(self, *args: Any) -> None:
        if self._firing_queue is None:
            raise SignalDestroyedError(self)
        self._firing_queue.append(args)
        self._drain()

    def _drain(self) -> None:
        # a fire from inside a callback only queues; the running loop picks it up
        if self._is_processing:
            return
        self._is_processing = True
        try:
            while self._firing_queue:
                self._dispatch(self._firing_queue.popleft())
        finally:
            self._is_firing = False
            self._link_staged()
            if self._firing_queue is not None:
                self._firing_queue.clear()
            self._is_processing = False

    def _dispatch(self, args: Tuple[Any, ...]) -> None:
        self._is_firing = True
        node = self._head
        while node is not None:
            # a disconnected node can still be reached through a stale `_next`
            if node.connected:
                self._scheduler.spawn(node._callback, args)
            node = node._next
        self._is_firing = False
        self._link_staged()

    # ------------------------------------------------------------------
    # List maintenance
    # ------------------------------------------------------------------
    def _link(self, connection: Connection) -> None:
        connection.connected = True
        connection._previous = None
        connection._next = self._head
        if self._head is not None:
            self._head._previous = connection
        self._head = connection

    def _link_staged(self) -> None:
        staged, self._staging = self._staging, []
        for connection in staged:
            # disconnected before it ever went live
            if connection._callback is None:
                continue
            self._link(connection)

    def disconnect_all(self) -> None:
        """Disconnect every subscriber; the signal stays usable."""
        node = self._head
        count = 0
        while node is not None:
            following = node._next
            node.disconnect()
            count += 1
            node = following
        self._head = None

        staged, self._staging = self._staging, []
        for connection in staged:
            connection.disconnect()
        logger.debug("%r: disconnected %d connection(s), %d staged", self, count, len(staged))

    def destroy(self) -> None:
        """Disconnect everything and make further fires fail."""
        if self._firing_queue is None:
            return
        self.disconnect_all()
        self._firing_queue = None
        logger.debug("%r destroyed", self)
