from __future__ import annotations

from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .signal import Signal


class Connection:
    """One subscription to a Signal; a node in the signal's linked list."""

    __slots__ = ("_signal", "_next", "_previous", "_callback", "connected")

    def __init__(self, signal: "Signal", callback: Callable[..., Any]):
        self._signal = signal
        self._next: Optional[Connection] = None
        self._previous: Optional[Connection] = None
        self._callback: Optional[Callable[..., Any]] = callback
        # flipped to True when the signal links the node
        self.connected = False

    @property
    def signal(self) -> "Signal":
        return self._signal

    @property
    def callback(self) -> Optional[Callable[..., Any]]:
        return self._callback

    def disconnect(self) -> None:
        """Stop receiving fires. Safe to call more than once.

        The node is spliced out of the list in place, so a dispatch in
        progress will not reach it if it has not been visited yet. The
        node keeps its own `_next` so a traversal standing on it can move on.
        """
        was_linked = self.connected
        self.connected = False
        self._callback = None
        if not was_linked:
            # staged or already unlinked: neighbours may have moved on
            return

        if self._previous is not None:
            self._previous._next = self._next
        if self._next is not None:
            self._next._previous = self._previous

        signal = self._signal
        if signal._head is self:
            signal._head = self._next
        self._previous = None

    def __repr__(self) -> str:
        state = "connected" if self.connected else "disconnected"
        return f"<Connection {state} to {self._signal!r}>"
