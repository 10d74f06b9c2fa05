"""Cursor position inside a document."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Cursor:
    """Position in raw content; ``row`` may equal the row count (virtual last line)."""

    row: int = 0
    col: int = 0

    def move_to(self, row: int, col: int) -> None:
        self.row = row
        self.col = col

    def copy(self) -> "Cursor":
        return Cursor(self.row, self.col)

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)
