"""Structured status messages and their rendered text."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class MessageKind(str, Enum):
    HELP = "help"
    CLEAR = "clear"
    SAVED = "saved"
    SAVE_FAILED = "save_failed"
    SAVE_ABORTED = "save_aborted"
    OPEN_FAILED = "open_failed"
    NEW_FILE = "new_file"
    QUIT_WARNING = "quit_warning"
    SEARCH_PROMPT = "search_prompt"
    SAVE_AS_PROMPT = "save_as_prompt"


TEMPLATES: Mapping[MessageKind, str] = MappingProxyType(
    {
        MessageKind.HELP: "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find",
        MessageKind.CLEAR: "",
        MessageKind.SAVED: "{bytes} bytes written to disk",
        MessageKind.SAVE_FAILED: "Can't save! I/O error: {error}",
        MessageKind.SAVE_ABORTED: "Save aborted",
        MessageKind.OPEN_FAILED: "Can't open {path}: {error}",
        MessageKind.NEW_FILE: "New file: {path}",
        MessageKind.QUIT_WARNING: (
            "WARNING!!! File has unsaved changes. "
            "Press Ctrl-Q {times} more time to quit."
        ),
        MessageKind.SEARCH_PROMPT: "Search: {query} (ESC/Arrows/Enter)",
        MessageKind.SAVE_AS_PROMPT: "Save as: {query} (ESC to cancel)",
    }
)


def render_message(kind: MessageKind, params: Mapping[str, object]) -> str:
    return TEMPLATES[kind].format(**params)


@dataclass(frozen=True, slots=True)
class StatusMessage:
    """A transient message: kind + parameters, stamped with the post time."""

    kind: MessageKind
    posted_at: float
    params: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def text(self) -> str:
        return render_message(self.kind, self.params)


__all__ = ["MessageKind", "StatusMessage", "TEMPLATES", "render_message"]
