"""Editing, motion and file verbs reused across modes."""

from .core import noop_action
from .editing import (
    delete_backward,
    delete_before_cursor,
    delete_forward,
    insert_byte,
    insert_char,
    insert_newline,
)
from .file import quit_editor, save, start_find, write_current
from .motion import end, home, move, page, step_cursor

__all__ = [
    "noop_action",
    "insert_byte",
    "insert_char",
    "insert_newline",
    "delete_backward",
    "delete_before_cursor",
    "delete_forward",
    "move",
    "home",
    "end",
    "page",
    "step_cursor",
    "save",
    "write_current",
    "quit_editor",
    "start_find",
]
