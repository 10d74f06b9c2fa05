"""Classification tags and declarative per-language highlighting rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Tuple


class Highlight(IntEnum):
    """Per-display-byte classification used only to pick a color."""

    PLAIN = 0
    LINE_COMMENT = 1
    BLOCK_COMMENT = 2
    KEYWORD_PRIMARY = 3
    KEYWORD_SECONDARY = 4
    STRING = 5
    NUMBER = 6
    MATCH = 7


def _normalize_patterns(patterns: Iterable[str]) -> tuple[str, ...]:
    result: list[str] = []
    for pattern in patterns:
        cleaned = pattern.strip()
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return tuple(result)


def _normalize_keywords(keywords: Iterable[str]) -> frozenset[str]:
    return frozenset(word for word in (k.strip() for k in keywords) if word)


@dataclass(frozen=True, slots=True)
class SyntaxProfile:
    """Immutable description of one language's highlighting rules.

    ``file_match`` entries starting with ``.`` are compared against the file
    name's extension; any other entry matches as a substring of the name.
    """

    name: str
    file_match: Tuple[str, ...] = ()
    primary_keywords: frozenset[str] = frozenset()
    secondary_keywords: frozenset[str] = frozenset()
    line_comment: Optional[str] = None
    block_comment: Optional[Tuple[str, str]] = None
    highlight_numbers: bool = False
    highlight_strings: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("profile name cannot be empty")
        object.__setattr__(self, "file_match", _normalize_patterns(self.file_match))
        object.__setattr__(
            self, "primary_keywords", _normalize_keywords(self.primary_keywords)
        )
        object.__setattr__(
            self, "secondary_keywords", _normalize_keywords(self.secondary_keywords)
        )
        if self.line_comment == "":
            object.__setattr__(self, "line_comment", None)
        if self.block_comment is not None:
            start, end = self.block_comment
            if not start or not end:
                raise ValueError("block_comment needs both a start and an end marker")
            object.__setattr__(self, "block_comment", (start, end))

    @classmethod
    def from_keyword_table(
        cls, name: str, file_match: Iterable[str], keywords: Iterable[str], **rules
    ) -> "SyntaxProfile":
        """Build a profile from a flat table where ``word|`` marks a secondary keyword."""

        primary: list[str] = []
        secondary: list[str] = []
        for keyword in keywords:
            if keyword.endswith("|"):
                secondary.append(keyword[:-1])
            else:
                primary.append(keyword)
        return cls(
            name=name,
            file_match=tuple(file_match),
            primary_keywords=frozenset(primary),
            secondary_keywords=frozenset(secondary),
            **rules,
        )

    def matches(self, filename: str) -> bool:
        dot = filename.rfind(".")
        extension = filename[dot:] if dot != -1 else None
        for pattern in self.file_match:
            if pattern.startswith("."):
                if extension is not None and extension == pattern:
                    return True
            elif pattern in filename:
                return True
        return False


__all__ = ["Highlight", "SyntaxProfile"]
