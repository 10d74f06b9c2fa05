"""Viewport, frame primitives and the frame compositor."""

from .compositor import Compositor, is_control
from .frame import (
    PLACEHOLDER,
    ControlGlyph,
    CursorPosition,
    EmptyRow,
    EndOfRow,
    Frame,
    MessageBar,
    Primitive,
    StatusBar,
    TextRun,
    row_text,
)
from .viewport import RESERVED_ROWS, Viewport

__all__ = [
    "Compositor",
    "is_control",
    "Viewport",
    "RESERVED_ROWS",
    "Frame",
    "Primitive",
    "TextRun",
    "ControlGlyph",
    "EmptyRow",
    "EndOfRow",
    "StatusBar",
    "MessageBar",
    "CursorPosition",
    "row_text",
    "PLACEHOLDER",
]
