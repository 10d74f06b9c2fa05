"""Raw-mode terminal host and the ``kilo`` command line entry point."""

from __future__ import annotations

import argparse
import os
import shutil
import signal
import sys
import termios
from typing import Any, List, Optional, Sequence

from kilo_engine.config import EditorConfig
from kilo_engine.editor.session import EditorSession
from kilo_engine.keys import KeyEvent
from kilo_engine.runtime import telemetry

from .ansi import CLEAR_SCREEN, HOME, encode_frame
from .decoder import KeyDecoder


class TerminalError(RuntimeError):
    """The terminal could not be configured; the editor cannot run."""


class TerminalHost:
    """Owns the controlling terminal while a session runs.

    Raw mode is entered in ``__enter__`` and the saved attributes are put
    back in ``__exit__`` whatever happened in between.
    """

    def __init__(self, fd_in: Optional[int] = None, fd_out: Optional[int] = None) -> None:
        self.fd_in = sys.stdin.fileno() if fd_in is None else fd_in
        self.fd_out = sys.stdout.fileno() if fd_out is None else fd_out
        self._saved: Optional[List[Any]] = None
        self._old_sigwinch: Any = None
        self._resize_pending = False
        self.logger = telemetry.get_logger("kilo_engine.terminal")

    # -- raw mode ------------------------------------------------------

    def __enter__(self) -> "TerminalHost":
        self.enable_raw_mode()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disable_raw_mode()

    def enable_raw_mode(self) -> None:
        if not os.isatty(self.fd_in):
            raise TerminalError("standard input is not a terminal")
        try:
            self._saved = termios.tcgetattr(self.fd_in)
            raw = termios.tcgetattr(self.fd_in)
            raw[0] &= ~(
                termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
            )
            raw[1] &= ~termios.OPOST
            raw[2] |= termios.CS8
            raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
            # reads return after at most 100ms, with or without a byte
            raw[6][termios.VMIN] = 0
            raw[6][termios.VTIME] = 1
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, raw)
        except termios.error as exc:
            self._saved = None
            raise TerminalError(f"unable to enter raw mode: {exc}") from exc

        self._old_sigwinch = signal.signal(signal.SIGWINCH, self._on_sigwinch)
        telemetry.record_event("terminal.raw_mode", level="debug", data={"enabled": True})

    def disable_raw_mode(self) -> None:
        if self._old_sigwinch is not None:
            signal.signal(signal.SIGWINCH, self._old_sigwinch)
            self._old_sigwinch = None
        if self._saved is None:
            return
        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, self._saved)
        finally:
            self._saved = None
            telemetry.record_event(
                "terminal.raw_mode", level="debug", data={"enabled": False}
            )

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        del signum, frame
        self._resize_pending = True

    # -- I/O -----------------------------------------------------------

    def window_size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the terminal."""

        try:
            size = os.get_terminal_size(self.fd_out)
        except OSError:
            size = shutil.get_terminal_size()
        if size.lines < 1 or size.columns < 1:
            raise TerminalError("unable to query the terminal size")
        return size.lines, size.columns

    def read_byte(self) -> Optional[int]:
        try:
            data = os.read(self.fd_in, 1)
        except InterruptedError:
            return None
        except OSError as exc:
            raise TerminalError(f"read from terminal failed: {exc}") from exc
        return data[0] if data else None

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            try:
                written = os.write(self.fd_out, view)
            except OSError as exc:
                raise TerminalError(f"write to terminal failed: {exc}") from exc
            view = view[written:]

    def read_key(self, decoder: KeyDecoder) -> Optional[KeyEvent]:
        """Wait for the next key; ``None`` when a resize interrupted the wait."""

        while True:
            event = decoder.read_key()
            if event is not None:
                return event
            if self._resize_pending:
                return None

    # -- main loop -----------------------------------------------------

    def run(self, session: EditorSession) -> None:
        decoder = KeyDecoder(self.read_byte)
        session.resize(*self.window_size())
        with telemetry.span("terminal::run", component="terminal"):
            while not session.should_quit:
                if self._resize_pending:
                    self._resize_pending = False
                    session.resize(*self.window_size())
                self.write(encode_frame(session.render()))
                event = self.read_key(decoder)
                if event is not None:
                    session.handle_key(event)
        self.write(CLEAR_SCREEN + HOME)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kilo", description="Edit a file in a small terminal text editor."
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


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset="terminal", log_file=args.log_file)

    session = EditorSession(EditorConfig.from_env(tab_stop=args.tab_stop))
    if args.file:
        session.open(args.file)
    session.show_help()

    host = TerminalHost()
    try:
        with host:
            host.run(session)
    except TerminalError as exc:
        telemetry.record_event("terminal.fatal", level="error", data={"error": str(exc)})
        sys.stderr.write(f"kilo: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
