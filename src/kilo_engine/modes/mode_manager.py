"""Routes key events to the active mode and follows the switches it requests."""

from __future__ import annotations

from typing import Dict, Optional, Type

from kilo_engine.keymaps import KeymapRegistry, load_default_keymaps
from kilo_engine.keys import KeyEvent
from kilo_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class ModeManager:
    """Holds one instance per registered mode class; exactly one is active.

    Without an explicit ``keymap_registry`` a fresh one is created and, if
    ``load_defaults`` is set, filled with the built-in edit bindings. The
    registry and the manager are published in ``context.extras`` for modes
    and actions to find.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        load_defaults: bool = True,
    ) -> None:
        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="kilo_engine.keymaps")
            if load_defaults:
                load_default_keymaps(keymap_registry)
        self.context = context
        self.keymap_registry = keymap_registry
        self.logger = telemetry.get_logger("kilo_engine.modes")
        self._modes: Dict[str, Mode] = {}
        self._current: Optional[Mode] = None
        context.extras.setdefault("keymap_registry", keymap_registry)
        context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._current

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        """Instantiate ``mode_cls``; the first mode registered becomes active."""

        if mode_cls.name in self._modes:
            raise ValueError(f"Mode '{mode_cls.name}' already registered")
        mode = mode_cls(self.context)
        self._modes[mode.name] = mode
        if self._current is None:
            self._current = mode
            mode.on_enter(None)
        return mode

    def get_mode(self, name: str) -> Mode:
        mode = self._modes.get(name)
        if mode is None:
            raise KeyError(f"Unknown mode '{name}'")
        return mode

    def switch_mode(self, name: str) -> None:
        target = self.get_mode(name)
        previous = self._current
        if target is previous:
            return
        if previous is not None:
            previous.on_exit(name)
        self._current = target
        target.on_enter(previous.name if previous is not None else None)
        self.context.bus.emit("mode.switch", name)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous.name if previous is not None else None, "to": name},
            logger_name="kilo_engine.modes",
        )

    def handle_key(self, event: KeyEvent) -> ModeResult:
        mode = self._current
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            logger_name="kilo_engine.modes",
            component=True,
            metadata={"key": event.token},
        ):
            result = mode.handle_key(event)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["ModeManager"]
