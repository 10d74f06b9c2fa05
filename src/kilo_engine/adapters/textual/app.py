"""Executable Textual app that hosts an editor session."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from kilo_engine.config import EditorConfig
from kilo_engine.editor.session import EditorSession
from kilo_engine.runtime import telemetry
from kilo_engine.view.frame import Frame

from .controller import TextualEditorAdapter, TextualUIHooks, frame_to_text


class KiloEditorApp(App[None], inherit_bindings=False):
    """Full-screen Textual UI painting the same frames as the raw terminal host.

    Built-in bindings are dropped so Ctrl-Q reaches the editor and goes
    through the unsaved-changes confirmation.
    """

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
		width: 1fr;
	}
	"""

    def __init__(
        self,
        *,
        path: Optional[str] = None,
        config: Optional[EditorConfig] = None,
    ) -> None:
        super().__init__()
        self.session = EditorSession(config or EditorConfig.from_env())
        self.path = path
        self.adapter: TextualEditorAdapter | None = None
        self._view: Static | None = None
        self.logger = telemetry.get_logger("kilo_engine.textual")

    def compose(self) -> ComposeResult:
        self._view = Static("", id="editor-view")
        yield self._view

    def on_mount(self) -> None:
        if self.path:
            self.session.open(self.path)
        self.session.show_help()
        self.session.resize(self.size.height, self.size.width)
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        # lets the transient message expire without a key press
        self.set_interval(1.0, self._tick)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.height, event.size.width)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(event.key, text=event.character)
        event.stop()
        if self.session.should_quit:
            self.exit()

    def _tick(self) -> None:
        if self.adapter:
            self.adapter.refresh()

    def _update_frame(self, frame: Frame) -> None:
        if self._view:
            self._view.update(frame_to_text(frame))

    def _handle_event(self, name: str, payload: object | None) -> None:
        telemetry.record_event(
            "textual.bus_event",
            level="debug",
            data={"event": name, "payload": payload},
            logger_name="kilo_engine.textual",
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kilo-textual", description="Run the kilo editor inside a Textual app."
    )
    parser.add_argument("file", nargs="?", help="File to open (created on first save)")
    parser.add_argument(
        "--tab-stop",
        type=int,
        default=None,
        help="Columns per tab stop (default: $KILO_ENGINE_TAB_STOP or 8)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write structured logs to this file (default: $KILO_ENGINE_LOG_FILE)",
    )
    args = parser.parse_args(argv)
    if args.tab_stop is not None and args.tab_stop < 1:
        parser.error("--tab-stop must be at least 1")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="terminal", log_file=args.log_file)
    app = KiloEditorApp(
        path=args.file, config=EditorConfig.from_env(tab_stop=args.tab_stop)
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
