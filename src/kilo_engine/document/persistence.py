"""Reading and writing documents as plain text files."""

from __future__ import annotations

import os
from typing import List, Optional

from kilo_engine.runtime import telemetry
from kilo_engine.syntax.models import SyntaxProfile

from .coords import CoordinateMapper
from .document import Document, split_lines

PathLike = str | os.PathLike[str]


class PersistenceError(RuntimeError):
    """Raised when a file cannot be read or written; the document is left as-is."""

    def __init__(self, message: str, *, path: PathLike, reason: str = "") -> None:
        super().__init__(message)
        self.path = os.fspath(path)
        self.reason = reason


def read_lines(path: PathLike) -> List[bytes]:
    """Return the file's rows with CR/LF line endings stripped."""

    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        telemetry.record_event(
            "file.read_failed",
            level="warning",
            data={"path": os.fspath(path), "error": exc.strerror or str(exc)},
        )
        raise PersistenceError(
            f"Can't open {os.fspath(path)}", path=path, reason=exc.strerror or str(exc)
        ) from exc
    return split_lines(data)


def load_document(
    path: PathLike,
    *,
    profile: Optional[SyntaxProfile] = None,
    mapper: Optional[CoordinateMapper] = None,
) -> Document:
    lines = read_lines(path)
    return Document.from_lines(
        lines, name=os.fspath(path), profile=profile, mapper=mapper
    )


def write_document(document: Document, path: PathLike) -> int:
    """Write ``document.to_bytes()`` to ``path`` and return the byte count.

    Resetting the dirty counter is left to the caller.
    """

    data = document.to_bytes()
    with telemetry.span(
        "document::save",
        component="document",
        metadata={"path": os.fspath(path), "bytes": len(data)},
    ):
        try:
            with open(path, "wb") as handle:
                handle.write(data)
        except OSError as exc:
            raise PersistenceError(
                f"Can't save {os.fspath(path)}",
                path=path,
                reason=exc.strerror or str(exc),
            ) from exc
    return len(data)


__all__ = ["PersistenceError", "read_lines", "load_document", "write_document"]
