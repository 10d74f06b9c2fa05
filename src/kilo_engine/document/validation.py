"""Range checks shared across document services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .row import Row
from .state import Cursor

if TYPE_CHECKING:  # pragma: no cover
    from .document import Document


class DocumentRangeError(RuntimeError):
    """Raised by strict callers when a row or column is out of range."""

    def __init__(
        self, message: str, *, row: int | None = None, column: int | None = None
    ) -> None:
        super().__init__(message)
        self.row = row
        self.column = column


def clamp_column(column: int, length: int) -> int:
    return max(0, min(column, length))


def row_in_range(document: "Document", index: int, *, allow_end: bool = False) -> bool:
    limit = document.row_count + (1 if allow_end else 0)
    return 0 <= index < limit


def ensure_row(document: "Document", index: int) -> Row:
    if not row_in_range(document, index):
        raise DocumentRangeError("Row out of range", row=index)
    return document.rows[index]


def ensure_cursor(document: "Document", cursor: Cursor) -> Cursor:
    if not row_in_range(document, cursor.row, allow_end=True):
        raise DocumentRangeError("Row out of range", row=cursor.row, column=cursor.col)
    length = document.row_size(cursor.row)
    if cursor.col < 0 or cursor.col > length:
        raise DocumentRangeError(
            "Column out of range", row=cursor.row, column=cursor.col
        )
    return cursor
