from __future__ import annotations

"""Factory helpers for callback schedulers."""

from .base import Scheduler
from .inline import InlineScheduler
from .loop import LoopScheduler
from ..settings import get_settings

__all__ = [
    "get_scheduler",
    "Scheduler",
    "InlineScheduler",
    "LoopScheduler",
]


def get_scheduler(name: str | None = None) -> Scheduler:
    """Return a new scheduler for the given name (default from settings)."""

    name = (name or get_settings().scheduler).lower()

    if name == "inline":
        return InlineScheduler()
    if name in {"loop", "asyncio"}:
        return LoopScheduler()

    raise ValueError(f"Unknown scheduler: {name}")
