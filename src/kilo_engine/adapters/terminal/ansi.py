"""Encodes a composed frame as one ANSI/VT100 byte string."""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Optional

from kilo_engine.syntax.models import Highlight
from kilo_engine.view.frame import (
    PLACEHOLDER,
    ControlGlyph,
    CursorPosition,
    EmptyRow,
    EndOfRow,
    Frame,
    MessageBar,
    StatusBar,
    TextRun,
)

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
HOME = b"\x1b[H"
CLEAR_SCREEN = b"\x1b[2J"
ERASE_LINE = b"\x1b[K"
REVERSE = b"\x1b[7m"
RESET = b"\x1b[m"
DEFAULT_FOREGROUND = b"\x1b[39m"
NEWLINE = b"\r\n"

COLORS: Mapping[Highlight, int] = MappingProxyType(
    {
        Highlight.LINE_COMMENT: 36,
        Highlight.BLOCK_COMMENT: 36,
        Highlight.KEYWORD_PRIMARY: 33,
        Highlight.KEYWORD_SECONDARY: 32,
        Highlight.STRING: 35,
        Highlight.NUMBER: 31,
        Highlight.MATCH: 34,
    }
)
FALLBACK_COLOR = 37


def color_for(highlight: Highlight) -> Optional[int]:
    """SGR foreground code for a tag; ``None`` means the terminal default."""

    if highlight is Highlight.PLAIN:
        return None
    return COLORS.get(highlight, FALLBACK_COLOR)


def _sgr(code: int) -> bytes:
    return f"\x1b[{code}m".encode("ascii")


def move_cursor(row: int, col: int) -> bytes:
    return f"\x1b[{row};{col}H".encode("ascii")


def encode_frame(frame: Frame) -> bytes:
    """Render every primitive of ``frame`` into a single buffer.

    The caller must hand the result to exactly one write so the terminal
    never shows a half-painted frame.
    """

    out: List[bytes] = [HIDE_CURSOR, HOME]
    current: Optional[int] = None

    for primitive in frame:
        if isinstance(primitive, TextRun):
            color = color_for(primitive.highlight)
            if color != current:
                out.append(DEFAULT_FOREGROUND if color is None else _sgr(color))
                current = color
            out.append(primitive.text)
        elif isinstance(primitive, ControlGlyph):
            out.append(REVERSE + primitive.glyph.encode("ascii") + RESET)
            if current is not None:
                out.append(_sgr(current))
        elif isinstance(primitive, EmptyRow):
            if primitive.banner:
                if primitive.padding:
                    out.append(PLACEHOLDER.encode("ascii"))
                    out.append(b" " * (primitive.padding - 1))
                out.append(primitive.banner.encode("latin-1"))
            else:
                out.append(PLACEHOLDER.encode("ascii"))
        elif isinstance(primitive, EndOfRow):
            if current is not None:
                out.append(DEFAULT_FOREGROUND)
                current = None
            out.append(ERASE_LINE + NEWLINE)
        elif isinstance(primitive, StatusBar):
            out.append(ERASE_LINE + REVERSE)
            out.append(primitive.text.encode("latin-1", "replace"))
            out.append(RESET + NEWLINE)
        elif isinstance(primitive, MessageBar):
            out.append(ERASE_LINE)
            out.append(primitive.text.encode("latin-1", "replace"))
        elif isinstance(primitive, CursorPosition):
            out.append(move_cursor(primitive.row, primitive.col))

    out.append(SHOW_CURSOR)
    return b"".join(out)


__all__ = [
    "COLORS",
    "CLEAR_SCREEN",
    "HOME",
    "color_for",
    "encode_frame",
    "move_cursor",
]
