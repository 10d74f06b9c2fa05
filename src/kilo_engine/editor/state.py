"""Mutable editor state owned by one session."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from kilo_engine.config import EditorConfig
from kilo_engine.document.document import Document
from kilo_engine.document.state import Cursor
from kilo_engine.syntax.registry import SyntaxRegistry
from kilo_engine.view.viewport import Viewport

from .messages import MessageKind, StatusMessage


@dataclass(slots=True)
class EditorState:
    document: Document
    cursor: Cursor = field(default_factory=Cursor)
    viewport: Viewport = field(default_factory=Viewport)
    config: EditorConfig = field(default_factory=EditorConfig)
    syntax: SyntaxRegistry = field(default_factory=SyntaxRegistry)
    filename: Optional[str] = None
    message: Optional[StatusMessage] = None
    quit_remaining: int = 0
    should_quit: bool = False
    clock: Callable[[], float] = time.monotonic

    def post(self, kind: MessageKind, **params: object) -> StatusMessage:
        self.message = StatusMessage(kind=kind, posted_at=self.clock(), params=params)
        return self.message

    def reset_quit_confirmations(self) -> None:
        self.quit_remaining = self.config.quit_times

    def select_profile(self) -> None:
        self.document.set_profile(self.syntax.select(self.filename))


__all__ = ["EditorState"]
