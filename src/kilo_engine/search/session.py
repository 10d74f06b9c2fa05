"""Incremental search over a document with a single restorable overlay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional

from kilo_engine.document.document import Document
from kilo_engine.runtime import telemetry
from kilo_engine.syntax.models import Highlight


class Direction(IntEnum):
    FORWARD = 1
    BACKWARD = -1


class SearchStep(str, Enum):
    """How the latest prompt key should move the search."""

    NEXT = "next"
    PREVIOUS = "previous"
    ACCEPT = "accept"
    CANCEL = "cancel"
    EDIT = "edit"


@dataclass(slots=True)
class SearchOverlay:
    row: int
    saved_tokens: List[Highlight]


@dataclass(frozen=True, slots=True)
class SearchHit:
    row: int
    raw_column: int
    display_column: int
    length: int


class SearchSession:
    """Transient state of one find prompt.

    Saving and restoring the caller's cursor/viewport on cancel is the
    caller's job; the session only guarantees that at most one row carries
    ``Highlight.MATCH`` at a time.
    """

    def __init__(self, document: Document) -> None:
        self.document = document
        self.query = b""
        self.last_match: Optional[int] = None
        self.direction = Direction.FORWARD
        self.overlay: Optional[SearchOverlay] = None
        self.active = False

    def begin(self) -> None:
        self.query = b""
        self.last_match = None
        self.direction = Direction.FORWARD
        self.overlay = None
        self.active = True
        telemetry.record_event("search.begin", level="debug")

    def on_query_changed(
        self, query: bytes | str, step: SearchStep = SearchStep.EDIT
    ) -> Optional[SearchHit]:
        """Apply one prompt update and return the new hit, if any."""

        self._restore_overlay()
        self.query = query.encode("latin-1") if isinstance(query, str) else bytes(query)

        if step in (SearchStep.ACCEPT, SearchStep.CANCEL):
            self.last_match = None
            self.direction = Direction.FORWARD
            return None
        if step is SearchStep.NEXT:
            self.direction = Direction.FORWARD
        elif step is SearchStep.PREVIOUS:
            self.direction = Direction.BACKWARD
        else:
            self.last_match = None
            self.direction = Direction.FORWARD

        if self.last_match is None:
            self.direction = Direction.FORWARD
        return self._scan()

    def end(self, commit: bool) -> None:
        self._restore_overlay()
        self.active = False
        self.last_match = None
        self.direction = Direction.FORWARD
        telemetry.record_event(
            "search.end",
            level="debug",
            data={"commit": commit, "query": self.query},
        )

    def _scan(self) -> Optional[SearchHit]:
        count = self.document.row_count
        if not self.query or count == 0:
            return None
        current = -1 if self.last_match is None else self.last_match
        for _ in range(count):
            current += int(self.direction)
            if current == -1:
                current = count - 1
            elif current == count:
                current = 0
            row = self.document.rows[current]
            offset = row.display.find(self.query)
            if offset == -1:
                continue
            self.last_match = current
            self.overlay = SearchOverlay(row=current, saved_tokens=list(row.tokens))
            self.document.overlay_tokens(current, offset, len(self.query), Highlight.MATCH)
            return SearchHit(
                row=current,
                raw_column=self.document.mapper.display_to_raw(row, offset),
                display_column=offset,
                length=len(self.query),
            )
        telemetry.record_event(
            "search.miss", level="debug", data={"query": self.query}
        )
        return None

    def _restore_overlay(self) -> None:
        if self.overlay is None:
            return
        self.document.restore_tokens(self.overlay.row, self.overlay.saved_tokens)
        self.overlay = None


__all__ = ["Direction", "SearchStep", "SearchOverlay", "SearchHit", "SearchSession"]
