"""Explicit editor session owning the document, cursor, viewport and modes."""

from __future__ import annotations

import os
import time
from typing import Callable, Iterable, Optional

from kilo_engine.config import EditorConfig
from kilo_engine.document.coords import CoordinateMapper
from kilo_engine.document.document import Document, LineLike
from kilo_engine.document.persistence import PersistenceError, PathLike, read_lines
from kilo_engine.document.state import Cursor
from kilo_engine.keymaps import KeymapRegistry
from kilo_engine.keys import KeyEvent
from kilo_engine.modes import (
    EditMode,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    SaveAsMode,
    SearchMode,
)
from kilo_engine.runtime import telemetry
from kilo_engine.syntax.defaults import default_registry
from kilo_engine.syntax.registry import SyntaxRegistry
from kilo_engine.view.compositor import Compositor
from kilo_engine.view.frame import Frame
from kilo_engine.view.viewport import Viewport

from .messages import MessageKind
from .state import EditorState


class EditorSession:
    """One editing session: every key goes in, one frame comes out.

    Hosts (the raw terminal loop, the Textual app, tests) only talk to this
    object: ``handle_key`` feeds a decoded key event through the active mode
    and ``render`` composes the next frame.
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        *,
        syntax: Optional[SyntaxRegistry] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
        screen_rows: int = 24,
        screen_cols: int = 80,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EditorConfig()
        self.clock = clock
        self.mapper = CoordinateMapper(tab_stop=self.config.tab_stop)
        self.state = EditorState(
            document=Document(mapper=self.mapper),
            cursor=Cursor(),
            viewport=Viewport.for_screen(screen_rows, screen_cols),
            config=self.config,
            syntax=syntax or default_registry(),
            clock=clock,
        )
        self.state.reset_quit_confirmations()
        self.bus = ModeBus()
        self.context = ModeContext(state=self.state, bus=self.bus, extras={})
        self.manager = ModeManager(self.context, keymap_registry=keymap_registry)
        self.manager.register_mode(EditMode)
        self.manager.register_mode(SearchMode)
        self.manager.register_mode(SaveAsMode)
        self.compositor = Compositor(self.config, clock=clock)
        self.logger = telemetry.get_logger("kilo_engine.editor")

    # -- convenience accessors -----------------------------------------

    @property
    def document(self) -> Document:
        return self.state.document

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def viewport(self) -> Viewport:
        return self.state.viewport

    @property
    def filename(self) -> Optional[str]:
        return self.state.filename

    @property
    def mode(self) -> str:
        active = self.manager.active_mode
        return active.name if active else ""

    @property
    def should_quit(self) -> bool:
        return self.state.should_quit

    @property
    def message_text(self) -> str:
        message = self.state.message
        return message.text if message else ""

    # -- loading -------------------------------------------------------

    def load_lines(
        self, lines: Iterable[LineLike], *, filename: Optional[str] = None
    ) -> Document:
        """Replace the document with ``lines`` and reset cursor and scroll."""

        self.state.filename = filename
        document = Document.from_lines(
            lines,
            name=filename or "[No Name]",
            profile=self.state.syntax.select(filename),
            mapper=self.mapper,
        )
        self.state.document = document
        self.state.cursor.move_to(0, 0)
        self.state.viewport.restore((0, 0))
        self.state.reset_quit_confirmations()
        return document

    def open(self, path: PathLike) -> Document:
        """Load ``path``; a missing file starts an empty document under that name."""

        filename = os.fspath(path)
        try:
            lines = read_lines(path)
        except PersistenceError as exc:
            document = self.load_lines((), filename=filename)
            if isinstance(exc.__cause__, FileNotFoundError):
                self.state.post(MessageKind.NEW_FILE, path=filename)
            else:
                self.state.post(MessageKind.OPEN_FAILED, path=filename, error=exc.reason)
            return document

        document = self.load_lines(lines, filename=filename)
        telemetry.record_event(
            "document.opened",
            data={"path": filename, "rows": document.row_count},
            logger_name="kilo_engine.editor",
        )
        return document

    def show_help(self) -> None:
        self.state.post(MessageKind.HELP)

    # -- input / output ------------------------------------------------

    def handle_key(self, event: KeyEvent) -> ModeResult:
        return self.manager.handle_key(event)

    def feed(self, events: Iterable[KeyEvent]) -> None:
        for event in events:
            self.handle_key(event)
            if self.should_quit:
                break

    def resize(self, screen_rows: int, screen_cols: int) -> None:
        self.state.viewport.resize(screen_rows, screen_cols)
        telemetry.record_event(
            "viewport.resized",
            level="debug",
            data={"rows": screen_rows, "cols": screen_cols},
            logger_name="kilo_engine.editor",
        )

    def render(self, *, now: Optional[float] = None) -> Frame:
        message = self.state.message
        return self.compositor.compose(
            self.state.document,
            self.state.viewport,
            self.state.cursor,
            filename=self.state.filename,
            message=message.text if message else "",
            message_posted_at=message.posted_at if message else None,
            now=now,
        )


__all__ = ["EditorSession"]
