"""Logical key events delivered to the editor by its hosts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Key(str, Enum):
    """Closed set of decoded keys; ``CHAR`` carries a printable byte."""

    CHAR = "char"
    MOVE_UP = "up"
    MOVE_DOWN = "down"
    MOVE_LEFT = "left"
    MOVE_RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    DELETE = "delete"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESCAPE = "escape"
    QUIT = "quit"
    SAVE = "save"
    FIND = "find"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Normalized key event passed to modes."""

    key: Key
    byte: Optional[int] = None

    def __post_init__(self) -> None:
        if self.key is Key.CHAR:
            if self.byte is None or not 0 <= self.byte <= 255:
                raise ValueError("CHAR events need a byte value in 0..255")
        elif self.byte is not None:
            raise ValueError(f"{self.key.name} events do not carry a byte")

    @classmethod
    def char(cls, value: int | str) -> "KeyEvent":
        if isinstance(value, str):
            encoded = value.encode("latin-1")
            if len(encoded) != 1:
                raise ValueError("KeyEvent.char expects a single character")
            value = encoded[0]
        return cls(Key.CHAR, value)

    @property
    def is_printable(self) -> bool:
        return self.key is Key.CHAR and self.byte is not None and 32 <= self.byte < 127

    @property
    def token(self) -> str:
        if self.key is Key.CHAR:
            return f"char:{self.byte}"
        return self.key.value


__all__ = ["Key", "KeyEvent"]
