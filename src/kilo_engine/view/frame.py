"""Display primitives making up one composed frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from kilo_engine.syntax.models import Highlight

PLACEHOLDER = "~"


@dataclass(frozen=True, slots=True)
class TextRun:
    """Consecutive printable display bytes sharing one classification."""

    text: bytes
    highlight: Highlight = Highlight.PLAIN


@dataclass(frozen=True, slots=True)
class ControlGlyph:
    """A control byte, painted as a reverse-video substitute glyph."""

    byte: int
    highlight: Highlight = Highlight.PLAIN

    @property
    def glyph(self) -> str:
        return chr(ord("@") + self.byte) if self.byte <= 26 else "?"


@dataclass(frozen=True, slots=True)
class EmptyRow:
    """Screen row past the end of the document."""

    banner: str = ""
    padding: int = 0


@dataclass(frozen=True, slots=True)
class EndOfRow:
    """Terminates one screen row (renderers clear to end of line here)."""


@dataclass(frozen=True, slots=True)
class StatusBar:
    left: str
    right: str
    width: int

    @property
    def text(self) -> str:
        left = self.left[: self.width]
        length = len(left)
        parts = [left]
        while length < self.width:
            if self.width - length == len(self.right):
                parts.append(self.right)
                break
            parts.append(" ")
            length += 1
        return "".join(parts)


@dataclass(frozen=True, slots=True)
class MessageBar:
    text: str = ""


@dataclass(frozen=True, slots=True)
class CursorPosition:
    """1-based screen coordinates."""

    row: int
    col: int


Primitive = Union[
    TextRun, ControlGlyph, EmptyRow, EndOfRow, StatusBar, MessageBar, CursorPosition
]


@dataclass(frozen=True, slots=True)
class Frame:
    """One complete, ordered frame; sinks must emit it in a single write."""

    width: int
    height: int
    primitives: Tuple[Primitive, ...]

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self.primitives)

    def text_rows(self) -> List[List[Primitive]]:
        """Group the document-area primitives by screen row."""

        rows: List[List[Primitive]] = []
        current: List[Primitive] = []
        for primitive in self.primitives:
            if isinstance(primitive, EndOfRow):
                rows.append(current)
                current = []
            elif isinstance(primitive, (StatusBar, MessageBar, CursorPosition)):
                break
            else:
                current.append(primitive)
        return rows

    def _find(self, kind: type) -> Optional[Primitive]:
        for primitive in self.primitives:
            if isinstance(primitive, kind):
                return primitive
        return None

    @property
    def status(self) -> StatusBar:
        found = self._find(StatusBar)
        assert isinstance(found, StatusBar)
        return found

    @property
    def message(self) -> MessageBar:
        found = self._find(MessageBar)
        assert isinstance(found, MessageBar)
        return found

    @property
    def cursor(self) -> CursorPosition:
        found = self._find(CursorPosition)
        assert isinstance(found, CursorPosition)
        return found


def row_text(primitives: List[Primitive]) -> str:
    """Plain-text rendering of one grouped row, handy for hosts and tests."""

    parts: List[str] = []
    for primitive in primitives:
        if isinstance(primitive, TextRun):
            parts.append(primitive.text.decode("latin-1"))
        elif isinstance(primitive, ControlGlyph):
            parts.append(primitive.glyph)
        elif isinstance(primitive, EmptyRow):
            if primitive.banner:
                if primitive.padding:
                    parts.append(PLACEHOLDER + " " * (primitive.padding - 1))
                parts.append(primitive.banner)
            else:
                parts.append(PLACEHOLDER)
    return "".join(parts)


__all__ = [
    "TextRun",
    "ControlGlyph",
    "EmptyRow",
    "EndOfRow",
    "StatusBar",
    "MessageBar",
    "CursorPosition",
    "Primitive",
    "Frame",
    "row_text",
    "PLACEHOLDER",
]
