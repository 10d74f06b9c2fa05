"""Single-line prompt modes: incremental search and save-as."""

from __future__ import annotations

from typing import Optional

from kilo_engine.actions.file import write_current
from kilo_engine.document.state import Cursor
from kilo_engine.editor.messages import MessageKind
from kilo_engine.keymaps.defaults import EDIT_MODE
from kilo_engine.keys import Key, KeyEvent
from kilo_engine.runtime import telemetry
from kilo_engine.search.session import SearchSession, SearchStep

from .base_mode import Mode, ModeContext, ModeResult

ERASE_KEYS = frozenset({Key.BACKSPACE, Key.DELETE})
CTRL_H = 0x08


class PromptMode(Mode):
    """Collects a line of input in the message bar.

    Subclasses react through ``on_update`` (every key), ``on_accept`` and
    ``on_cancel``.
    """

    prompt_kind: MessageKind = MessageKind.CLEAR

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.buffer = bytearray()

    @property
    def text(self) -> str:
        return self.buffer.decode("latin-1")

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        self.buffer.clear()
        self._show_prompt()

    def handle_key(self, event: KeyEvent) -> ModeResult:
        if event.key in ERASE_KEYS or (event.key is Key.CHAR and event.byte == CTRL_H):
            if self.buffer:
                del self.buffer[-1]
        elif event.key is Key.ESCAPE:
            self.state.post(MessageKind.CLEAR)
            self.on_update(event)
            self.on_cancel()
            return ModeResult(consumed=True, switch_to=EDIT_MODE, status="prompt_cancel")
        elif event.key is Key.ENTER:
            if self.buffer:
                self.state.post(MessageKind.CLEAR)
                self.on_update(event)
                return self.on_accept(self.text)
        elif event.is_printable:
            assert event.byte is not None
            self.buffer.append(event.byte)

        self._show_prompt()
        self.on_update(event)
        return ModeResult(consumed=True, status="prompt_edit")

    def _show_prompt(self) -> None:
        self.state.post(self.prompt_kind, query=self.text)

    def on_update(self, event: KeyEvent) -> None:
        del event

    def on_accept(self, text: str) -> ModeResult:
        del text
        return ModeResult(consumed=True, switch_to=EDIT_MODE, status="prompt_accept")

    def on_cancel(self) -> None:
        pass


SEARCH_STEPS = {
    Key.MOVE_RIGHT: SearchStep.NEXT,
    Key.MOVE_DOWN: SearchStep.NEXT,
    Key.MOVE_LEFT: SearchStep.PREVIOUS,
    Key.MOVE_UP: SearchStep.PREVIOUS,
    Key.ENTER: SearchStep.ACCEPT,
    Key.ESCAPE: SearchStep.CANCEL,
}


class SearchMode(PromptMode):
    name = "search"
    prompt_kind = MessageKind.SEARCH_PROMPT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.session: Optional[SearchSession] = None
        self._saved_cursor: Optional[Cursor] = None
        self._saved_viewport: Optional[tuple[int, int]] = None

    def on_enter(self, previous: Optional[str]) -> None:
        self._saved_cursor = self.state.cursor.copy()
        self._saved_viewport = self.state.viewport.save()
        self.session = SearchSession(self.state.document)
        self.session.begin()
        self.context.extras["search_session"] = self.session
        super().on_enter(previous)

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self.context.extras.pop("search_session", None)
        self.session = None

    def on_update(self, event: KeyEvent) -> None:
        assert self.session is not None
        step = SEARCH_STEPS.get(event.key, SearchStep.EDIT)
        hit = self.session.on_query_changed(bytes(self.buffer), step)
        if hit is None:
            return
        self.state.cursor.move_to(hit.row, hit.raw_column)
        # pushes the offset past the end so scrolling lands the match on top
        self.state.viewport.row_offset = self.state.document.row_count
        telemetry.record_event(
            "search.hit", level="debug", data={"row": hit.row, "col": hit.raw_column}
        )

    def on_accept(self, text: str) -> ModeResult:
        assert self.session is not None
        self.session.end(commit=True)
        return ModeResult(
            consumed=True, switch_to=EDIT_MODE, status="search_accept", message=text
        )

    def on_cancel(self) -> None:
        assert self.session is not None
        self.session.end(commit=False)
        if self._saved_cursor is not None:
            self.state.cursor.move_to(self._saved_cursor.row, self._saved_cursor.col)
        if self._saved_viewport is not None:
            self.state.viewport.restore(self._saved_viewport)


class SaveAsMode(PromptMode):
    name = "save_as"
    prompt_kind = MessageKind.SAVE_AS_PROMPT

    def on_accept(self, text: str) -> ModeResult:
        self.state.filename = text
        self.state.select_profile()
        result = write_current(self.context)
        result.switch_to = EDIT_MODE
        return result

    def on_cancel(self) -> None:
        self.state.post(MessageKind.SAVE_ABORTED)


__all__ = ["PromptMode", "SearchMode", "SaveAsMode", "SEARCH_STEPS"]
