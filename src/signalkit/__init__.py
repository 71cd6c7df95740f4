from __future__ import annotations

"""In-process signals with re-entrancy-safe dispatch.

Library loggers live under ``signalkit.*`` and emit nothing on their own;
call ``setup_logger()`` once at startup to print them at SIGNALKIT_LOG_LEVEL.
"""

from .connection import Connection
from .errors import SignalDestroyedError, SignalError
from .schedulers import InlineScheduler, LoopScheduler, Scheduler, get_scheduler
from .settings import SignalSettings, get_settings
from .signal import Signal, is_connection, is_signal
from .utils.logger import setup_logger

__all__ = [
    "create_signal",
    "Signal",
    "Connection",
    "is_signal",
    "is_connection",
    "SignalError",
    "SignalDestroyedError",
    "Scheduler",
    "InlineScheduler",
    "LoopScheduler",
    "get_scheduler",
    "SignalSettings",
    "get_settings",
    "setup_logger",
]

__version__ = "0.1.0"


def create_signal(name: str | None = None, scheduler: Scheduler | str | None = None) -> Signal:
    """Return a new, empty Signal."""
    return Signal(name=name, scheduler=scheduler)
