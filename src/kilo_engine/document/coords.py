"""Raw column <-> display column mapping (tab expansion)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .row import Row

TAB = 0x09

RawSource = Union[Row, bytes, bytearray]


def _raw_of(source: RawSource) -> Union[bytes, bytearray]:
    return source.raw if isinstance(source, Row) else source


@dataclass(frozen=True, slots=True)
class CoordinateMapper:
    """Stateless conversions sharing one tab-stop rule."""

    tab_stop: int = 8

    def __post_init__(self) -> None:
        if self.tab_stop < 1:
            raise ValueError("tab_stop must be at least 1")

    def advance(self, column: int, byte: int) -> int:
        if byte == TAB:
            return column + self.tab_stop - (column % self.tab_stop)
        return column + 1

    def expand(self, source: RawSource) -> bytes:
        """Return the display form: tabs become spaces up to the next stop."""

        raw = _raw_of(source)
        if TAB not in raw:
            return bytes(raw)
        out = bytearray()
        for byte in raw:
            if byte == TAB:
                out.append(0x20)
                while len(out) % self.tab_stop:
                    out.append(0x20)
            else:
                out.append(byte)
        return bytes(out)

    def raw_to_display(self, source: RawSource, raw_column: int) -> int:
        raw = _raw_of(source)
        limit = max(0, min(raw_column, len(raw)))
        column = 0
        for index in range(limit):
            column = self.advance(column, raw[index])
        return column

    def display_to_raw(self, source: RawSource, display_column: int) -> int:
        """Map a display column back to raw; columns inside a tab resolve to the tab."""

        raw = _raw_of(source)
        column = 0
        for index, byte in enumerate(raw):
            column = self.advance(column, byte)
            if column > display_column:
                return index
        return len(raw)


__all__ = ["CoordinateMapper", "TAB"]
