"""Mutable row store with derived display/tokens and dirty tracking."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Union

from kilo_engine.runtime import telemetry
from kilo_engine.syntax.highlighter import Highlighter
from kilo_engine.syntax.models import Highlight, SyntaxProfile

from .coords import CoordinateMapper
from .row import Row
from .validation import clamp_column, row_in_range

LineLike = Union[bytes, bytearray, str]

LINE_ENDINGS = b"\r\n"


def _as_bytes(content: LineLike) -> bytes:
    if isinstance(content, str):
        return content.encode("latin-1")
    return bytes(content)


def strip_line_ending(line: LineLike) -> bytes:
    """Drop any run of trailing CR/LF bytes."""

    return _as_bytes(line).rstrip(LINE_ENDINGS)


def split_lines(data: bytes) -> List[bytes]:
    """Split file content into rows; a final newline does not start a new row."""

    if not data:
        return []
    lines = data.split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    return [strip_line_ending(line) for line in lines]


class Document:
    """Ordered, dense sequence of rows.

    Every mutator re-derives the touched rows' display form and tokens and
    bumps ``dirty``. Out-of-range requests are no-ops that return ``False``
    (or ``None``) and leave the document untouched.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        profile: Optional[SyntaxProfile] = None,
        mapper: Optional[CoordinateMapper] = None,
    ) -> None:
        self.name = name
        self.rows: List[Row] = []
        self.dirty = 0
        self.mapper = mapper or CoordinateMapper()
        self._profile = profile
        self._highlighter = Highlighter(profile)
        self.logger = telemetry.get_logger("kilo_engine.document")

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[LineLike],
        *,
        name: str = "default",
        profile: Optional[SyntaxProfile] = None,
        mapper: Optional[CoordinateMapper] = None,
    ) -> "Document":
        document = cls(name=name, profile=profile, mapper=mapper)
        with telemetry.span(
            "document::load", component="document", metadata={"document": name}
        ) as handle:
            for line in lines:
                document._insert_row(document.row_count, strip_line_ending(line))
            handle.add_metadata("rows", document.row_count)
        document.dirty = 0
        return document

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        *,
        name: str = "default",
        profile: Optional[SyntaxProfile] = None,
        mapper: Optional[CoordinateMapper] = None,
    ) -> "Document":
        return cls.from_lines(split_lines(data), name=name, profile=profile, mapper=mapper)

    # -- inspection -----------------------------------------------------

    @property
    def profile(self) -> Optional[SyntaxProfile]:
        return self._profile

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_dirty(self) -> bool:
        return self.dirty > 0

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def row(self, index: int) -> Optional[Row]:
        if row_in_range(self, index):
            return self.rows[index]
        return None

    def row_size(self, index: int) -> int:
        """Raw length of row ``index``; the virtual row past the end is empty."""

        row = self.row(index)
        return row.size if row is not None else 0

    def lines(self) -> Sequence[bytes]:
        return tuple(bytes(row.raw) for row in self.rows)

    def display_column(self, row_index: int, raw_column: int) -> int:
        row = self.row(row_index)
        if row is None:
            return 0
        return self.mapper.raw_to_display(row, raw_column)

    def raw_column(self, row_index: int, display_column: int) -> int:
        row = self.row(row_index)
        if row is None:
            return 0
        return self.mapper.display_to_raw(row, display_column)

    def to_bytes(self) -> bytes:
        """Flat text for persistence: every row followed by a single newline."""

        return b"".join(bytes(row.raw) + b"\n" for row in self.rows)

    def mark_clean(self) -> None:
        self.dirty = 0

    # -- syntax ---------------------------------------------------------

    def set_profile(self, profile: Optional[SyntaxProfile]) -> None:
        """Swap the active profile and re-highlight every row."""

        self._profile = profile
        self._highlighter = Highlighter(profile)
        if self.rows:
            self._highlighter.highlight_rows(
                self.rows, 0, force_through=self.row_count - 1
            )

    def restore_tokens(self, index: int, tokens: Sequence[Highlight]) -> bool:
        """Put back a saved token snapshot (used to drop overlays)."""

        row = self.row(index)
        if row is None or len(tokens) != row.display_size:
            return False
        row.tokens = list(tokens)
        return True

    def overlay_tokens(self, index: int, start: int, length: int, tag: Highlight) -> bool:
        row = self.row(index)
        if row is None:
            return False
        end = min(row.display_size, start + length)
        if start < 0 or start >= end:
            return False
        row.tokens[start:end] = [tag] * (end - start)
        return True

    # -- mutation -------------------------------------------------------

    def insert_row(self, at: int, content: LineLike = b"") -> bool:
        if not row_in_range(self, at, allow_end=True):
            self._reject("insert_row", row=at)
            return False
        with telemetry.span(
            "document::insert_row",
            component="document",
            metadata={"document": self.name, "row": at},
        ):
            self._insert_row(at, _as_bytes(content))
            self.dirty += 1
        return True

    def delete_row(self, at: int) -> bool:
        if not row_in_range(self, at):
            self._reject("delete_row", row=at)
            return False
        with telemetry.span(
            "document::delete_row",
            component="document",
            metadata={"document": self.name, "row": at},
        ):
            self._delete_row(at)
            self.dirty += 1
        return True

    def insert_char(self, row_index: int, col: int, ch: Union[int, str, bytes]) -> bool:
        row = self.row(row_index)
        if row is None:
            self._reject("insert_char", row=row_index, column=col)
            return False
        value = ch if isinstance(ch, int) else _as_bytes(ch)[0]
        col = clamp_column(col, row.size)
        row.raw.insert(col, value)
        self._update_row(row_index)
        self.dirty += 1
        return True

    def delete_char(self, row_index: int, col: int) -> bool:
        row = self.row(row_index)
        if row is None or col < 0 or col >= row.size:
            self._reject("delete_char", row=row_index, column=col)
            return False
        del row.raw[col]
        self._update_row(row_index)
        self.dirty += 1
        return True

    def append_to_row(self, row_index: int, data: LineLike) -> bool:
        row = self.row(row_index)
        if row is None:
            self._reject("append_to_row", row=row_index)
            return False
        row.raw.extend(_as_bytes(data))
        self._update_row(row_index)
        self.dirty += 1
        return True

    def split_row(self, row_index: int, col: int) -> bool:
        """Move ``raw[col:]`` of a row into a new row right below it."""

        row = self.row(row_index)
        if row is None:
            self._reject("split_row", row=row_index, column=col)
            return False
        with telemetry.span(
            "document::split_row",
            component="document",
            metadata={"document": self.name, "row": row_index, "col": col},
        ):
            col = clamp_column(col, row.size)
            tail = bytes(row.raw[col:])
            del row.raw[col:]
            row.display = self.mapper.expand(row)
            self.rows.insert(row_index + 1, Row(index=row_index + 1, raw=bytearray(tail)))
            self._renumber(row_index + 1)
            self.rows[row_index + 1].display = self.mapper.expand(self.rows[row_index + 1])
            self._highlighter.highlight_rows(
                self.rows, row_index, force_through=row_index + 2
            )
            self.dirty += 1
        return True

    def join_row_into_previous(self, row_index: int) -> Optional[int]:
        """Append a row to its predecessor and drop it; return the join column."""

        if row_index < 1 or row_index >= self.row_count:
            self._reject("join_row_into_previous", row=row_index)
            return None
        with telemetry.span(
            "document::join_rows",
            component="document",
            metadata={"document": self.name, "row": row_index},
        ):
            previous = self.rows[row_index - 1]
            current = self.rows[row_index]
            join_col = previous.size
            previous.raw.extend(current.raw)
            previous.display = self.mapper.expand(previous)
            del self.rows[row_index]
            self._renumber(row_index)
            self._highlighter.highlight_rows(
                self.rows, row_index - 1, force_through=row_index
            )
            self.dirty += 1
        return join_col

    # -- internals ------------------------------------------------------

    def _insert_row(self, at: int, content: bytes) -> None:
        row = Row(index=at, raw=bytearray(content))
        row.display = self.mapper.expand(row)
        self.rows.insert(at, row)
        self._renumber(at + 1)
        self._highlighter.highlight_rows(self.rows, at, force_through=at + 1)

    def _delete_row(self, at: int) -> None:
        del self.rows[at]
        self._renumber(at)
        if at < self.row_count:
            self._highlighter.highlight_rows(self.rows, at, force_through=at)

    def _update_row(self, index: int) -> None:
        row = self.rows[index]
        row.display = self.mapper.expand(row)
        self._highlighter.highlight_rows(self.rows, index)

    def _renumber(self, start: int) -> None:
        for index in range(start, len(self.rows)):
            self.rows[index].index = index

    def _reject(self, operation: str, **data: object) -> None:
        telemetry.record_event(
            "document.rejected",
            level="debug",
            data={"operation": operation, "rows": self.row_count, **data},
            logger_name="kilo_engine.document",
        )


__all__ = ["Document", "split_lines", "strip_line_ending"]
