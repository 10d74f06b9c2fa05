"""Mode protocol: what a mode receives, what it returns, how it signals hosts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from kilo_engine.editor.state import EditorState
from kilo_engine.keymaps.registry import KeymapRegistry
from kilo_engine.keys import KeyEvent


@dataclass(slots=True)
class ModeResult:
    """Outcome of one key press.

    ``switch_to`` names the mode the manager should activate next; ``status``
    is a short machine-readable tag and ``message`` optional text for hosts.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


Listener = Callable[[object], None]


class ModeBus:
    """Named signals (``document.saved``, ``mode.switch`` ...) fanned out to listeners."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in tuple(self._listeners.get(event, ())):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Editor state plus the services shared between modes and actions."""

    state: EditorState
    bus: ModeBus
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def keymap_registry(self) -> KeymapRegistry:
        registry = self.extras.get("keymap_registry")
        if not isinstance(registry, KeymapRegistry):
            raise RuntimeError("ModeContext.extras missing 'keymap_registry'")
        return registry


class Mode:
    """Subclasses set ``name`` and implement ``handle_key``."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def state(self) -> EditorState:
        return self.context.state

    def on_enter(self, previous: Optional[str]) -> None:
        pass

    def on_exit(self, next_mode: Optional[str]) -> None:
        pass

    def handle_key(self, event: KeyEvent) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError


__all__ = ["Mode", "ModeBus", "ModeContext", "ModeResult"]
