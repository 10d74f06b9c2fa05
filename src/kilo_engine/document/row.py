"""Single editor row: raw bytes plus derived display form and tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from kilo_engine.syntax.models import Highlight


@dataclass(slots=True)
class Row:
    """One line of the document.

    ``display`` and ``tokens`` are derived from ``raw`` by the owning
    document and always have equal length. ``open_comment`` records whether a
    block comment is still open at the end of the row.
    """

    index: int
    raw: bytearray = field(default_factory=bytearray)
    display: bytes = b""
    tokens: List[Highlight] = field(default_factory=list)
    open_comment: bool = False

    @property
    def size(self) -> int:
        return len(self.raw)

    @property
    def display_size(self) -> int:
        return len(self.display)

    def text(self) -> str:
        return self.raw.decode("latin-1")
