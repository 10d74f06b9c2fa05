"""Named actions and the key bindings that trigger them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from kilo_engine.keys import Key


@dataclass(frozen=True, slots=True)
class ActionRef:
    """An action handler registered under a dotted id such as ``file.save``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """One logical key in one mode, pointing at an action id."""

    id: str
    mode: str
    key: Key
    action_id: str
    source: str | None = None

    def __post_init__(self) -> None:
        for label, value in (("id", self.id), ("mode", self.mode), ("action_id", self.action_id)):
            if not value:
                raise ValueError(f"binding {label} cannot be empty")
        if self.key is Key.CHAR:
            raise ValueError("printable bytes are inserted, not bound")


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


__all__ = ["ActionRef", "Binding", "ResolutionMatch"]
