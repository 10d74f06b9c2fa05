"""Textual adapter that feeds key presses into an EditorSession and paints frames."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from rich.text import Text

from kilo_engine.editor.session import EditorSession
from kilo_engine.keys import Key, KeyEvent
from kilo_engine.modes import ModeResult
from kilo_engine.syntax.models import Highlight
from kilo_engine.view.frame import (
    PLACEHOLDER,
    ControlGlyph,
    EmptyRow,
    Frame,
    TextRun,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


TEXTUAL_KEYS: Mapping[str, Key] = MappingProxyType(
    {
        "up": Key.MOVE_UP,
        "down": Key.MOVE_DOWN,
        "left": Key.MOVE_LEFT,
        "right": Key.MOVE_RIGHT,
        "home": Key.HOME,
        "end": Key.END,
        "pageup": Key.PAGE_UP,
        "pagedown": Key.PAGE_DOWN,
        "delete": Key.DELETE,
        "backspace": Key.BACKSPACE,
        "ctrl+h": Key.BACKSPACE,
        "enter": Key.ENTER,
        "escape": Key.ESCAPE,
        "ctrl+q": Key.QUIT,
        "ctrl+s": Key.SAVE,
        "ctrl+f": Key.FIND,
        "ctrl+l": Key.REFRESH,
    }
)

STYLES: Mapping[Highlight, str] = MappingProxyType(
    {
        Highlight.PLAIN: "",
        Highlight.LINE_COMMENT: "cyan",
        Highlight.BLOCK_COMMENT: "cyan",
        Highlight.KEYWORD_PRIMARY: "yellow",
        Highlight.KEYWORD_SECONDARY: "green",
        Highlight.STRING: "magenta",
        Highlight.NUMBER: "red",
        Highlight.MATCH: "blue",
    }
)

BUS_EVENTS = ("document.saved", "document.save_failed", "editor.quit", "mode.switch")


def translate_key(key: str, character: Optional[str] = None) -> Optional[KeyEvent]:
    """Map a Textual key name (plus its character) onto an editor key event."""

    mapped = TEXTUAL_KEYS.get(key)
    if mapped is not None:
        return KeyEvent(mapped)
    if key == "tab":
        return KeyEvent.char("\t")
    if character and len(character) == 1:
        code = ord(character)
        if 32 <= code < 256 and code != 127:
            return KeyEvent.char(code)
    return None


def frame_to_text(frame: Frame) -> Text:
    """Render a frame as rich ``Text``; the cursor cell is shown in reverse video."""

    lines: List[Text] = []
    for primitives in frame.text_rows():
        line = Text(no_wrap=True, overflow="crop")
        for primitive in primitives:
            if isinstance(primitive, TextRun):
                line.append(primitive.text.decode("latin-1"), style=STYLES[primitive.highlight])
            elif isinstance(primitive, ControlGlyph):
                line.append(primitive.glyph, style="reverse")
            elif isinstance(primitive, EmptyRow):
                if primitive.banner:
                    if primitive.padding:
                        line.append(PLACEHOLDER + " " * (primitive.padding - 1))
                    line.append(primitive.banner)
                else:
                    line.append(PLACEHOLDER, style="dim")
        lines.append(line)

    cursor = frame.cursor
    if 1 <= cursor.row <= len(lines):
        line = lines[cursor.row - 1]
        if len(line) < cursor.col:
            line.append(" " * (cursor.col - len(line)))
        line.stylize("reverse", cursor.col - 1, cursor.col)

    lines.append(Text(frame.status.text, style="reverse", no_wrap=True, overflow="crop"))
    lines.append(Text(frame.message.text, no_wrap=True, overflow="crop"))
    return Text("\n").join(lines)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges an EditorSession and its bus events to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self, key: str, *, text: Optional[str] = None
    ) -> Optional[ModeResult]:
        """Translate a Textual key press and dispatch it; unknown keys are ignored."""

        event = translate_key(key, text)
        self._log_state("key ->", key=key, text=text)
        if event is None:
            return None
        result = self.session.handle_key(event)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def resize(self, rows: int, cols: int) -> None:
        self.session.resize(rows, cols)
        self.refresh()

    def refresh(self, *, now: Optional[float] = None) -> Frame:
        frame = self.session.render(now=now)
        self.hooks.update_frame(frame)
        return frame

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self.refresh()

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "mode": session.mode,
            "cursor": session.cursor.as_tuple(),
            "rows": session.document.row_count,
            "dirty": session.document.dirty,
            "file": session.filename,
        }


__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "frame_to_text",
    "translate_key",
]
