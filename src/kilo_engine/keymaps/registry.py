"""Registry mapping ``(mode, key)`` pairs to named editor actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from kilo_engine.keys import Key
from kilo_engine.runtime.telemetry import span

from .models import ActionRef, Binding, ResolutionMatch

Slot = Tuple[str, Key]


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding claims a key that another binding already owns in that mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"{binding.mode}:{binding.key.value} is bound by '{existing.id}', "
            f"cannot bind '{binding.id}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Actions by id, bindings by id, and the slot each binding occupies."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[Slot, Binding] = {}
        self._logger_name = logger_name

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Bind ``binding.key`` in ``binding.mode``.

        ``replace`` lets the binding take over its id and its slot from
        whatever held them; otherwise either collision raises.
        """

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            slot = (binding.mode, binding.key)
            holder = self._slots.get(slot)
            if holder is not None and holder.id != binding.id and not replace:
                raise KeymapConflictError(binding, holder)

            for stale in (holder, self._bindings.get(binding.id)):
                if stale is not None:
                    self._drop(stale)
            self._bindings[binding.id] = binding
            self._slots[slot] = binding
            return binding

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is not None:
            self._drop(binding)
        return binding

    def resolve(self, mode: str, key: Key) -> Optional[ResolutionMatch]:
        binding = self._slots.get((mode, key))
        if binding is None:
            return None
        return ResolutionMatch(binding=binding, action=self._actions[binding.action_id])

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({mode for mode, _ in self._slots})),
        )

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        slot = (binding.mode, binding.key)
        if self._slots.get(slot) is binding:
            del self._slots[slot]


__all__ = ["KeymapRegistry", "KeymapConflictError", "RegistryStats"]
