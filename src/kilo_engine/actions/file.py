"""Save, quit and find verbs."""

from __future__ import annotations

from kilo_engine.document.persistence import PersistenceError, write_document
from kilo_engine.editor.messages import MessageKind
from kilo_engine.keys import KeyEvent
from kilo_engine.modes.base_mode import ModeContext, ModeResult
from kilo_engine.runtime import telemetry


def write_current(context: ModeContext) -> ModeResult:
    """Persist the document under ``state.filename``; failures become messages."""

    state = context.state
    assert state.filename is not None
    try:
        written = write_document(state.document, state.filename)
    except PersistenceError as exc:
        state.post(MessageKind.SAVE_FAILED, error=exc.reason)
        context.bus.emit("document.save_failed", {"path": exc.path, "error": exc.reason})
        return ModeResult(consumed=True, status="save_failed", message=exc.reason)

    state.document.mark_clean()
    state.post(MessageKind.SAVED, bytes=written)
    context.bus.emit("document.saved", {"path": state.filename, "bytes": written})
    telemetry.record_event(
        "document.saved", data={"path": state.filename, "bytes": written}
    )
    return ModeResult(consumed=True, status="saved")


def save(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    if context.state.filename is None:
        return ModeResult(consumed=True, switch_to="save_as", status="save_as")
    return write_current(context)


def quit_editor(context: ModeContext, event: KeyEvent) -> ModeResult:
    """Quit, unless unsaved changes still need confirming."""

    del event
    state = context.state
    if state.document.is_dirty and state.quit_remaining > 0:
        state.post(MessageKind.QUIT_WARNING, times=state.quit_remaining)
        state.quit_remaining -= 1
        return ModeResult(consumed=True, status="quit_refused")
    state.should_quit = True
    context.bus.emit("editor.quit", {"dirty": state.document.dirty})
    return ModeResult(consumed=True, status="quit")


def start_find(context: ModeContext, event: KeyEvent) -> ModeResult:
    del context, event
    return ModeResult(consumed=True, switch_to="search", status="find")


__all__ = ["write_current", "save", "quit_editor", "start_find"]
