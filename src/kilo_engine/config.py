"""Editor configuration loaded from ``KILO_ENGINE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "KILO_ENGINE_"

DEFAULT_TAB_STOP = 8
DEFAULT_QUIT_TIMES = 3
DEFAULT_MESSAGE_TIMEOUT = 5.0
DEFAULT_FILENAME_WIDTH = 20
VERSION = "0.0.1"


def _env_int(key: str, fallback: int, *, minimum: int = 0) -> int:
    value = os.environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed >= minimum else fallback


def _env_float(key: str, fallback: float) -> float:
    value = os.environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Static knobs shared by the document, compositor and editor session."""

    tab_stop: int = DEFAULT_TAB_STOP
    quit_times: int = DEFAULT_QUIT_TIMES
    message_timeout: float = DEFAULT_MESSAGE_TIMEOUT
    filename_width: int = DEFAULT_FILENAME_WIDTH
    version: str = VERSION

    def __post_init__(self) -> None:
        if self.tab_stop < 1:
            raise ValueError("tab_stop must be at least 1")
        if self.quit_times < 0:
            raise ValueError("quit_times cannot be negative")

    @classmethod
    def from_env(cls, *, tab_stop: Optional[int] = None) -> "EditorConfig":
        config = cls(
            tab_stop=_env_int("TAB_STOP", DEFAULT_TAB_STOP, minimum=1),
            quit_times=_env_int("QUIT_TIMES", DEFAULT_QUIT_TIMES),
            message_timeout=_env_float("MESSAGE_TIMEOUT", DEFAULT_MESSAGE_TIMEOUT),
        )
        if tab_stop is not None:
            config = replace(config, tab_stop=tab_stop)
        return config


__all__ = ["EditorConfig", "VERSION"]
