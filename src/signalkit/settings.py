from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

SCHEDULER_NAMES = ("inline", "loop", "asyncio")


class SignalSettings(BaseModel):
    """Process-wide defaults for new signals."""

    scheduler: str = "inline"
    log_level: str = "INFO"

    @field_validator("scheduler")
    @classmethod
    def _check_scheduler(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in SCHEDULER_NAMES:
            raise ValueError(f"Unknown scheduler {value!r}; expected one of {', '.join(SCHEDULER_NAMES)}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level {value!r}")
        return value

    @classmethod
    def from_env(cls) -> "SignalSettings":
        return cls(
            scheduler=os.getenv("SIGNALKIT_SCHEDULER", "inline"),
            log_level=os.getenv("SIGNALKIT_LOG_LEVEL", "INFO"),
        )

    def to_dict(self):
        return self.model_dump()


@lru_cache(maxsize=None)
def load_env_file(path: str = ".env") -> bool:
    """Load SIGNALKIT_* overrides from `path` once; the environment wins."""
    return load_dotenv(path, override=False)


def get_settings() -> SignalSettings:
    """Return settings read from the current environment (and `.env`)."""
    load_env_file()
    return SignalSettings.from_env()
