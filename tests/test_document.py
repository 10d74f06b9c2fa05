import pytest

from kilo_engine.document import (
    CoordinateMapper,
    Document,
    DocumentRangeError,
    ensure_cursor,
    ensure_row,
    split_lines,
    strip_line_ending,
)
from kilo_engine.document.state import Cursor
from kilo_engine.syntax import C_PROFILE, Highlight

H = Highlight


def make_document(*lines: bytes, profile=C_PROFILE) -> Document:
    return Document.from_lines(lines, name="test", profile=profile)


def assert_consistent(document: Document) -> None:
    """Every row matches what a fresh top-to-bottom highlight would produce."""

    fresh = Document.from_lines(document.lines(), profile=document.profile)
    for index, (row, expected) in enumerate(zip(document.rows, fresh.rows)):
        assert row.index == index
        assert len(row.tokens) == len(row.display)
        assert row.display == document.mapper.expand(row.raw)
        assert row.tokens == expected.tokens, f"row {index}"
        assert row.open_comment == expected.open_comment, f"row {index}"


def test_from_lines_strips_line_endings_and_is_clean() -> None:
    document = make_document(b"one\r\n", b"two\n", b"three")

    assert document.lines() == (b"one", b"two", b"three")
    assert document.dirty == 0
    assert document.is_dirty is False
    assert [row.index for row in document] == [0, 1, 2]


def test_split_lines_drops_only_one_trailing_newline() -> None:
    assert split_lines(b"") == []
    assert split_lines(b"a\nb\n") == [b"a", b"b"]
    assert split_lines(b"a\r\nb") == [b"a", b"b"]
    assert split_lines(b"a\n\n") == [b"a", b""]
    assert strip_line_ending(b"x\r\r\n") == b"x"


def test_to_bytes_round_trip_normalizes_line_endings() -> None:
    data = b"int main() {\r\n\treturn 0;\r\n}\n"
    document = Document.from_bytes(data, profile=C_PROFILE)

    assert document.to_bytes() == b"int main() {\n\treturn 0;\n}\n"
    assert Document().to_bytes() == b""


def test_insert_row_renumbers_and_marks_dirty() -> None:
    document = make_document(b"a", b"c")

    assert document.insert_row(1, b"b") is True
    assert document.insert_row(3, "d") is True

    assert document.lines() == (b"a", b"b", b"c", b"d")
    assert [row.index for row in document] == [0, 1, 2, 3]
    assert document.dirty == 2


def test_insert_row_out_of_range_is_noop() -> None:
    document = make_document(b"a")

    assert document.insert_row(5, b"x") is False
    assert document.insert_row(-1, b"x") is False
    assert document.lines() == (b"a",)
    assert document.dirty == 0


def test_delete_row() -> None:
    document = make_document(b"a", b"b", b"c")

    assert document.delete_row(1) is True
    assert document.delete_row(2) is False

    assert document.lines() == (b"a", b"c")
    assert document.rows[1].index == 1
    assert document.dirty == 1


def test_insert_char_clamps_column() -> None:
    document = make_document(b"ab")

    assert document.insert_char(0, 99, "c") is True
    assert document.insert_char(0, -4, ord("_")) is True

    assert document.lines() == (b"_abc",)
    assert document.dirty == 2


def test_insert_char_on_missing_row_is_noop() -> None:
    document = make_document()

    assert document.insert_char(0, 0, "x") is False
    assert document.row_count == 0
    assert document.dirty == 0


def test_delete_char_out_of_range_is_noop() -> None:
    document = make_document(b"abc")

    assert document.delete_char(0, 3) is False
    assert document.delete_char(0, 1) is True
    assert document.lines() == (b"ac",)
    assert document.dirty == 1


def test_tab_insert_updates_display_and_tokens() -> None:
    document = make_document(b"xy")

    document.insert_char(0, 1, "\t")
    row = document.rows[0]

    assert row.raw == bytearray(b"x\ty")
    assert row.display == b"x" + b" " * 7 + b"y"
    assert len(row.tokens) == len(row.display)
    assert document.display_column(0, 2) == 8
    assert document.raw_column(0, 5) == 1


def test_append_to_row() -> None:
    document = make_document(b"foo")

    assert document.append_to_row(0, b"bar") is True
    assert document.append_to_row(1, b"x") is False
    assert document.lines() == (b"foobar",)


def test_split_row_moves_tail_to_new_row() -> None:
    document = make_document(b"hello world", b"next")

    assert document.split_row(0, 5) is True

    assert document.lines() == (b"hello", b" world", b"next")
    assert [row.index for row in document] == [0, 1, 2]
    assert document.dirty == 1
    assert_consistent(document)


def test_join_row_into_previous_returns_join_column() -> None:
    document = make_document(b"abc", b"def", b"g")

    assert document.join_row_into_previous(1) == 3
    assert document.join_row_into_previous(0) is None
    assert document.join_row_into_previous(5) is None

    assert document.lines() == (b"abcdef", b"g")
    assert document.dirty == 1


def test_opening_a_comment_cascades_through_following_rows() -> None:
    document = make_document(b"int a;", b"b", b"c", b"*/ int d;")

    document.insert_char(1, 0, "*")
    document.insert_char(1, 0, "/")

    assert document.rows[1].open_comment is True
    assert document.rows[2].tokens == [H.BLOCK_COMMENT]
    assert document.rows[3].tokens[:2] == [H.BLOCK_COMMENT] * 2
    assert document.rows[3].tokens[3:6] == [H.KEYWORD_SECONDARY] * 3
    assert_consistent(document)


def test_closing_a_comment_cascades_back_to_plain() -> None:
    document = make_document(b"/* a", b"b", b"c */", b"d")

    document.delete_char(0, 0)

    assert document.rows[1].tokens == [H.PLAIN]
    assert document.rows[2].open_comment is False
    assert_consistent(document)


def test_structural_edits_keep_highlight_consistent() -> None:
    document = make_document(b"ab/* cd", b"ef */", b"gh", b"/* x", b"y */ 12")

    document.split_row(0, 2)
    assert_consistent(document)
    document.join_row_into_previous(1)
    assert_consistent(document)
    document.delete_row(2)
    assert_consistent(document)
    document.insert_row(0, b"/*")
    assert_consistent(document)
    document.delete_row(0)
    assert_consistent(document)
    document.split_row(3, 3)
    assert_consistent(document)
    document.append_to_row(0, b" */")
    assert_consistent(document)


def test_set_profile_rehighlights_every_row() -> None:
    document = make_document(b"int x;", b"/* c", b"d */", profile=None)
    assert all(tag == H.PLAIN for row in document for tag in row.tokens)

    document.set_profile(C_PROFILE)

    assert document.rows[0].tokens[:3] == [H.KEYWORD_SECONDARY] * 3
    assert document.rows[2].tokens == [H.BLOCK_COMMENT] * 4
    assert_consistent(document)


def test_overlay_and_restore_tokens() -> None:
    document = make_document(b"find me")
    saved = list(document.rows[0].tokens)

    assert document.overlay_tokens(0, 5, 2, H.MATCH) is True
    assert document.rows[0].tokens[5:] == [H.MATCH, H.MATCH]
    assert document.restore_tokens(0, saved) is True
    assert document.rows[0].tokens == saved
    assert document.restore_tokens(0, saved[:2]) is False
    assert document.overlay_tokens(3, 0, 1, H.MATCH) is False


def test_custom_tab_stop() -> None:
    document = Document.from_lines([b"\tx"], mapper=CoordinateMapper(tab_stop=4))

    assert document.rows[0].display == b"    x"


def test_strict_range_helpers() -> None:
    document = make_document(b"abc")

    assert ensure_row(document, 0) is document.rows[0]
    with pytest.raises(DocumentRangeError) as excinfo:
        ensure_row(document, 1)
    assert excinfo.value.row == 1

    assert ensure_cursor(document, Cursor(1, 0)).row == 1
    with pytest.raises(DocumentRangeError):
        ensure_cursor(document, Cursor(0, 4))
