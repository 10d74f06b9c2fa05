"""Text editing verbs operating at the cursor."""

from __future__ import annotations

from kilo_engine.editor.state import EditorState
from kilo_engine.keys import Key, KeyEvent
from kilo_engine.modes.base_mode import ModeContext, ModeResult

from .motion import step_cursor


def insert_byte(state: EditorState, byte: int) -> None:
    """Insert at the cursor, materializing the virtual last row if needed."""

    document = state.document
    cursor = state.cursor
    if cursor.row == document.row_count:
        document.insert_row(document.row_count, b"")
    document.insert_char(cursor.row, cursor.col, byte)
    cursor.col += 1


def delete_before_cursor(state: EditorState) -> bool:
    document = state.document
    cursor = state.cursor
    if cursor.row == document.row_count:
        return False
    if cursor.col == 0 and cursor.row == 0:
        return False
    if cursor.col > 0:
        document.delete_char(cursor.row, cursor.col - 1)
        cursor.col -= 1
        return True
    join_col = document.join_row_into_previous(cursor.row)
    if join_col is None:
        return False
    cursor.move_to(cursor.row - 1, join_col)
    return True


def insert_char(context: ModeContext, event: KeyEvent) -> ModeResult:
    assert event.byte is not None
    insert_byte(context.state, event.byte)
    return ModeResult(consumed=True, status="insert")


def insert_newline(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    state = context.state
    document = state.document
    cursor = state.cursor
    if cursor.row >= document.row_count:
        document.insert_row(document.row_count, b"")
    else:
        document.split_row(cursor.row, cursor.col)
    cursor.move_to(cursor.row + 1, 0)
    return ModeResult(consumed=True, status="newline")


def delete_backward(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    changed = delete_before_cursor(context.state)
    return ModeResult(consumed=True, status="delete" if changed else "noop")


def delete_forward(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    state = context.state
    step_cursor(state, Key.MOVE_RIGHT)
    changed = delete_before_cursor(state)
    return ModeResult(consumed=True, status="delete" if changed else "noop")


__all__ = [
    "insert_byte",
    "delete_before_cursor",
    "insert_char",
    "insert_newline",
    "delete_backward",
    "delete_forward",
]
