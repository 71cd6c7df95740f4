from __future__ import annotations


class SignalError(Exception):
    """Base class for signalkit errors."""


class SignalDestroyedError(SignalError, RuntimeError):
    """Raised when a destroyed Signal is fired or waited on."""

    def __init__(self, signal=None):
        self.signal = signal
        super().__init__(f"Cannot use {signal!r}: signal has been destroyed")
