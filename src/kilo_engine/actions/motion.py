"""Cursor motion verbs."""

from __future__ import annotations

from kilo_engine.editor.state import EditorState
from kilo_engine.keys import Key, KeyEvent
from kilo_engine.modes.base_mode import ModeContext, ModeResult


def _clamp_column(state: EditorState) -> None:
    length = state.document.row_size(state.cursor.row)
    if state.cursor.col > length:
        state.cursor.col = length


def step_cursor(state: EditorState, key: Key) -> None:
    """Move one step; left/right wrap across row boundaries."""

    cursor = state.cursor
    document = state.document
    row = document.row(cursor.row)

    if key is Key.MOVE_LEFT:
        if cursor.col != 0:
            cursor.col -= 1
        elif cursor.row > 0:
            cursor.row -= 1
            cursor.col = document.row_size(cursor.row)
    elif key is Key.MOVE_RIGHT:
        if row is not None and cursor.col < row.size:
            cursor.col += 1
        elif row is not None and cursor.col == row.size:
            cursor.row += 1
            cursor.col = 0
    elif key is Key.MOVE_UP:
        if cursor.row != 0:
            cursor.row -= 1
    elif key is Key.MOVE_DOWN:
        if cursor.row < document.row_count:
            cursor.row += 1

    _clamp_column(state)


def move(context: ModeContext, event: KeyEvent) -> ModeResult:
    step_cursor(context.state, event.key)
    return ModeResult(consumed=True, status="move")


def home(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    context.state.cursor.col = 0
    return ModeResult(consumed=True, status="move")


def end(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    state = context.state
    if state.cursor.row < state.document.row_count:
        state.cursor.col = state.document.row_size(state.cursor.row)
    return ModeResult(consumed=True, status="move")


def page(context: ModeContext, event: KeyEvent) -> ModeResult:
    state = context.state
    viewport = state.viewport
    if event.key is Key.PAGE_UP:
        state.cursor.row = viewport.row_offset
        direction = Key.MOVE_UP
    else:
        state.cursor.row = min(
            viewport.row_offset + viewport.rows - 1, state.document.row_count
        )
        direction = Key.MOVE_DOWN
    for _ in range(viewport.rows):
        step_cursor(state, direction)
    return ModeResult(consumed=True, status="page")


__all__ = ["step_cursor", "move", "home", "end", "page"]
