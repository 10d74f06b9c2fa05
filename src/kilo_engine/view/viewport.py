"""Scroll offsets and the visible slice of the document."""

from __future__ import annotations

from dataclasses import dataclass

from kilo_engine.document.document import Document
from kilo_engine.document.state import Cursor

RESERVED_ROWS = 2  # status bar + message bar


@dataclass(slots=True)
class Viewport:
    """Visible text area; ``rows`` excludes the two bar rows."""

    rows: int = 22
    cols: int = 80
    row_offset: int = 0
    col_offset: int = 0

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError("viewport needs at least one row and one column")

    @classmethod
    def for_screen(cls, height: int, width: int) -> "Viewport":
        return cls(rows=max(1, height - RESERVED_ROWS), cols=max(1, width))

    def resize(self, height: int, width: int) -> None:
        self.rows = max(1, height - RESERVED_ROWS)
        self.cols = max(1, width)

    def recompute(self, cursor: Cursor, document: Document) -> int:
        """Scroll just enough to keep the cursor visible; return its display column."""

        display_col = 0
        if cursor.row < document.row_count:
            display_col = document.display_column(cursor.row, cursor.col)
        self.scroll_to(cursor.row, display_col)
        return display_col

    def scroll_to(self, row: int, display_col: int) -> None:
        if row < self.row_offset:
            self.row_offset = row
        if row >= self.row_offset + self.rows:
            self.row_offset = row - self.rows + 1
        if display_col < self.col_offset:
            self.col_offset = display_col
        if display_col >= self.col_offset + self.cols:
            self.col_offset = display_col - self.cols + 1

    def visible_rows(self) -> range:
        return range(self.row_offset, self.row_offset + self.rows)

    def save(self) -> tuple[int, int]:
        return (self.row_offset, self.col_offset)

    def restore(self, saved: tuple[int, int]) -> None:
        self.row_offset, self.col_offset = saved


__all__ = ["Viewport", "RESERVED_ROWS"]
