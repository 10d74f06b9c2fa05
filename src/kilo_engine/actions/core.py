"""Core action implementations shared across modes."""

from __future__ import annotations

from kilo_engine.keys import KeyEvent
from kilo_engine.modes.base_mode import ModeContext, ModeResult


def noop_action(context: ModeContext, event: KeyEvent) -> ModeResult:
    del context, event
    return ModeResult(consumed=True, status="noop")


__all__ = ["noop_action"]
