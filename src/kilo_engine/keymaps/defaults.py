"""Built-in keymap for edit mode."""

from __future__ import annotations

from typing import Iterable

from kilo_engine.keys import Key

from .models import ActionRef, Binding
from .registry import KeymapRegistry

EDIT_MODE = "edit"

# (binding id, key, action id)
DEFAULT_BINDINGS: tuple[tuple[str, Key, str], ...] = (
    ("edit.up", Key.MOVE_UP, "motion.move"),
    ("edit.down", Key.MOVE_DOWN, "motion.move"),
    ("edit.left", Key.MOVE_LEFT, "motion.move"),
    ("edit.right", Key.MOVE_RIGHT, "motion.move"),
    ("edit.home", Key.HOME, "motion.home"),
    ("edit.end", Key.END, "motion.end"),
    ("edit.page_up", Key.PAGE_UP, "motion.page"),
    ("edit.page_down", Key.PAGE_DOWN, "motion.page"),
    ("edit.enter", Key.ENTER, "editing.insert_newline"),
    ("edit.backspace", Key.BACKSPACE, "editing.delete_backward"),
    ("edit.delete", Key.DELETE, "editing.delete_forward"),
    ("edit.save", Key.SAVE, "file.save"),
    ("edit.quit", Key.QUIT, "file.quit"),
    ("edit.find", Key.FIND, "file.find"),
    ("edit.escape", Key.ESCAPE, "core.noop"),
    ("edit.refresh", Key.REFRESH, "core.noop"),
)


def default_actions() -> tuple[ActionRef, ...]:
    # actions import the modes package, which imports this module
    from kilo_engine.actions import core, editing, file, motion

    return (
        ActionRef(id="core.noop", handler=core.noop_action, description="Do nothing"),
        ActionRef(id="motion.move", handler=motion.move, description="Move the cursor"),
        ActionRef(id="motion.home", handler=motion.home, description="Start of row"),
        ActionRef(id="motion.end", handler=motion.end, description="End of row"),
        ActionRef(id="motion.page", handler=motion.page, description="Scroll one screen"),
        ActionRef(
            id="editing.insert_newline",
            handler=editing.insert_newline,
            description="Split the row at the cursor",
        ),
        ActionRef(
            id="editing.delete_backward",
            handler=editing.delete_backward,
            description="Delete the byte before the cursor",
        ),
        ActionRef(
            id="editing.delete_forward",
            handler=editing.delete_forward,
            description="Delete the byte under the cursor",
        ),
        ActionRef(id="file.save", handler=file.save, description="Save the document"),
        ActionRef(id="file.quit", handler=file.quit_editor, description="Quit"),
        ActionRef(id="file.find", handler=file.start_find, description="Search"),
    )


def _iter_bindings() -> Iterable[Binding]:
    for binding_id, key, action_id in DEFAULT_BINDINGS:
        yield Binding(
            id=binding_id,
            mode=EDIT_MODE,
            key=key,
            action_id=action_id,
            source="defaults",
        )


def load_default_keymaps(registry: KeymapRegistry) -> KeymapRegistry:
    for action in default_actions():
        registry.register_action(action, replace=True)
    for binding in _iter_bindings():
        registry.register_binding(binding, replace=True)
    return registry


__all__ = ["DEFAULT_BINDINGS", "EDIT_MODE", "default_actions", "load_default_keymaps"]
