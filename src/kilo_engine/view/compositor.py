"""Turns document, viewport and cursor state into one frame of primitives."""

from __future__ import annotations

import time
from typing import Callable, List, Optional

from kilo_engine.config import EditorConfig
from kilo_engine.document.document import Document
from kilo_engine.document.row import Row
from kilo_engine.document.state import Cursor
from kilo_engine.runtime import telemetry

from .frame import (
    ControlGlyph,
    CursorPosition,
    EmptyRow,
    EndOfRow,
    Frame,
    MessageBar,
    Primitive,
    StatusBar,
    TextRun,
)
from .viewport import Viewport

NO_NAME = "[No Name]"
NO_FILETYPE = "no ft"


def is_control(byte: int) -> bool:
    return byte < 32 or byte == 127


class Compositor:
    """Builds frames; ``clock`` is injectable so message expiry is testable."""

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EditorConfig()
        self.clock = clock
        self.logger = telemetry.get_logger("kilo_engine.view")

    def compose(
        self,
        document: Document,
        viewport: Viewport,
        cursor: Cursor,
        *,
        filename: Optional[str] = None,
        message: str = "",
        message_posted_at: Optional[float] = None,
        now: Optional[float] = None,
    ) -> Frame:
        display_col = viewport.recompute(cursor, document)
        primitives: List[Primitive] = []
        for screen_row in range(viewport.rows):
            file_row = screen_row + viewport.row_offset
            if file_row >= document.row_count:
                primitives.append(self._empty_row(document, viewport, screen_row))
            else:
                primitives.extend(self._row_spans(document.rows[file_row], viewport))
            primitives.append(EndOfRow())

        primitives.append(self.status_bar(document, cursor, viewport.cols, filename))
        primitives.append(
            self.message_bar(message, message_posted_at, viewport.cols, now=now)
        )
        primitives.append(
            CursorPosition(
                row=cursor.row - viewport.row_offset + 1,
                col=display_col - viewport.col_offset + 1,
            )
        )
        return Frame(width=viewport.cols, height=viewport.rows, primitives=tuple(primitives))

    def _row_spans(self, row: Row, viewport: Viewport) -> List[Primitive]:
        start = viewport.col_offset
        end = start + viewport.cols
        text = row.display[start:end]
        tokens = row.tokens[start:end]
        spans: List[Primitive] = []
        run = bytearray()
        run_tag = None
        for byte, tag in zip(text, tokens):
            if is_control(byte):
                if run:
                    spans.append(TextRun(bytes(run), run_tag))
                    run = bytearray()
                    run_tag = None
                spans.append(ControlGlyph(byte, tag))
                continue
            if run and tag != run_tag:
                spans.append(TextRun(bytes(run), run_tag))
                run = bytearray()
            run.append(byte)
            run_tag = tag
        if run:
            spans.append(TextRun(bytes(run), run_tag))
        return spans

    def _empty_row(self, document: Document, viewport: Viewport, screen_row: int) -> EmptyRow:
        if document.row_count == 0 and screen_row == viewport.rows // 3:
            banner = f"Kilo editor -- version {self.config.version}"[: viewport.cols]
            return EmptyRow(banner=banner, padding=(viewport.cols - len(banner)) // 2)
        return EmptyRow()

    def status_bar(
        self,
        document: Document,
        cursor: Cursor,
        width: int,
        filename: Optional[str] = None,
    ) -> StatusBar:
        label = (filename or NO_NAME)[: self.config.filename_width]
        modified = "(modified)" if document.is_dirty else ""
        left = f"{label} - {document.row_count} lines {modified}"
        filetype = document.profile.name if document.profile else NO_FILETYPE
        right = f"{filetype} | {cursor.row + 1}/{document.row_count}"
        return StatusBar(left=left, right=right, width=width)

    def message_bar(
        self,
        message: str,
        posted_at: Optional[float],
        width: int,
        *,
        now: Optional[float] = None,
    ) -> MessageBar:
        if not message or posted_at is None:
            return MessageBar()
        current = self.clock() if now is None else now
        if current - posted_at >= self.config.message_timeout:
            return MessageBar()
        return MessageBar(message[:width])


__all__ = ["Compositor", "is_control", "NO_NAME", "NO_FILETYPE"]
