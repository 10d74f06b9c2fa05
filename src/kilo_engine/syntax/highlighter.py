"""Row classifier and the multi-row block-comment cascade."""

from __future__ import annotations

from typing import List, MutableSequence, Optional, Protocol, Tuple

from .models import Highlight, SyntaxProfile

SEPARATORS = frozenset(b",.()+-/*=~%<>[];")
WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")
QUOTES = frozenset(b"\"'")
DIGITS = frozenset(b"0123456789")
BACKSLASH = ord("\\")
DOT = ord(".")


def is_separator(byte: int) -> bool:
    return byte == 0 or byte in WHITESPACE or byte in SEPARATORS


class HighlightTarget(Protocol):
    """What the cascade needs from a row."""

    display: bytes
    tokens: List[Highlight]
    open_comment: bool


class Highlighter:
    """Turns display bytes into tokens for a given (possibly absent) profile."""

    def __init__(self, profile: Optional[SyntaxProfile] = None) -> None:
        self.profile = profile
        self._line_comment = b""
        self._block_start = b""
        self._block_end = b""
        self._keywords: list[tuple[bytes, Highlight]] = []
        if profile is not None:
            self._compile(profile)

    def _compile(self, profile: SyntaxProfile) -> None:
        if profile.line_comment:
            self._line_comment = profile.line_comment.encode("latin-1")
        if profile.block_comment:
            start, end = profile.block_comment
            self._block_start = start.encode("latin-1")
            self._block_end = end.encode("latin-1")
        keywords = [
            (word.encode("latin-1"), Highlight.KEYWORD_PRIMARY)
            for word in profile.primary_keywords
        ]
        keywords.extend(
            (word.encode("latin-1"), Highlight.KEYWORD_SECONDARY)
            for word in profile.secondary_keywords
        )
        # longest first; ties broken so primary wins and order is stable
        keywords.sort(key=lambda item: (-len(item[0]), item[1], item[0]))
        self._keywords = keywords

    def classify(
        self, display: bytes, in_comment: bool = False
    ) -> Tuple[List[Highlight], bool]:
        """Classify one row; return its tokens and whether a block comment is still open."""

        size = len(display)
        tokens = [Highlight.PLAIN] * size
        profile = self.profile
        if profile is None:
            return tokens, False

        scs = self._line_comment
        mcs = self._block_start
        mce = self._block_end
        prev_sep = True
        in_string = 0
        i = 0
        while i < size:
            c = display[i]
            prev_hl = tokens[i - 1] if i > 0 else Highlight.PLAIN

            if scs and not in_string and not in_comment:
                if display.startswith(scs, i):
                    tokens[i:] = [Highlight.LINE_COMMENT] * (size - i)
                    break

            if mcs and mce and not in_string:
                if in_comment:
                    tokens[i] = Highlight.BLOCK_COMMENT
                    if display.startswith(mce, i):
                        end = min(size, i + len(mce))
                        tokens[i:end] = [Highlight.BLOCK_COMMENT] * (end - i)
                        i += len(mce)
                        in_comment = False
                        prev_sep = True
                    else:
                        i += 1
                    continue
                if display.startswith(mcs, i):
                    end = min(size, i + len(mcs))
                    tokens[i:end] = [Highlight.BLOCK_COMMENT] * (end - i)
                    i += len(mcs)
                    in_comment = True
                    continue

            if profile.highlight_strings:
                if in_string:
                    tokens[i] = Highlight.STRING
                    if c == BACKSLASH and i + 1 < size:
                        tokens[i + 1] = Highlight.STRING
                        i += 2
                        continue
                    if c == in_string:
                        in_string = 0
                    i += 1
                    prev_sep = True
                    continue
                if c in QUOTES:
                    in_string = c
                    tokens[i] = Highlight.STRING
                    i += 1
                    continue

            if profile.highlight_numbers:
                if (c in DIGITS and (prev_sep or prev_hl == Highlight.NUMBER)) or (
                    c == DOT and prev_hl == Highlight.NUMBER
                ):
                    tokens[i] = Highlight.NUMBER
                    i += 1
                    prev_sep = False
                    continue

            if prev_sep:
                matched = self._match_keyword(display, i)
                if matched is not None:
                    length, tag = matched
                    tokens[i : i + length] = [tag] * length
                    i += length
                    prev_sep = False
                    continue

            prev_sep = is_separator(c)
            i += 1

        return tokens, in_comment

    def _match_keyword(self, display: bytes, index: int) -> Optional[Tuple[int, Highlight]]:
        size = len(display)
        for keyword, tag in self._keywords:
            length = len(keyword)
            if not display.startswith(keyword, index):
                continue
            after = index + length
            if after >= size or is_separator(display[after]):
                return length, tag
        return None

    def highlight_rows(
        self,
        rows: MutableSequence[HighlightTarget],
        start: int,
        *,
        force_through: Optional[int] = None,
    ) -> int:
        """Re-derive tokens from ``start`` and cascade while exit state changes.

        Rows up to ``force_through`` are always re-derived, which structural
        edits use when a row's predecessor changed underneath it. Returns the
        number of rows processed. Runs as a loop, so depth stays bounded by the
        row count.
        """

        if start < 0 or start >= len(rows):
            return 0
        last_forced = start if force_through is None else max(start, force_through)
        index = start
        processed = 0
        while index < len(rows):
            row = rows[index]
            entering = index > 0 and rows[index - 1].open_comment
            tokens, still_open = self.classify(row.display, entering)
            row.tokens = tokens
            changed = still_open != row.open_comment
            row.open_comment = still_open
            processed += 1
            if not changed and index >= last_forced:
                break
            index += 1
        return processed


__all__ = ["Highlighter", "HighlightTarget", "is_separator", "SEPARATORS"]
