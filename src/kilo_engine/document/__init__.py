"""Row store, coordinate mapping, cursor state and file persistence."""

from .coords import CoordinateMapper
from .document import Document, split_lines, strip_line_ending
from .persistence import PersistenceError, load_document, read_lines, write_document
from .row import Row
from .state import Cursor
from .validation import (
    DocumentRangeError,
    clamp_column,
    ensure_cursor,
    ensure_row,
    row_in_range,
)

__all__ = [
    "Row",
    "Document",
    "CoordinateMapper",
    "Cursor",
    "DocumentRangeError",
    "PersistenceError",
    "clamp_column",
    "ensure_cursor",
    "ensure_row",
    "row_in_range",
    "load_document",
    "read_lines",
    "write_document",
    "split_lines",
    "strip_line_ending",
]
