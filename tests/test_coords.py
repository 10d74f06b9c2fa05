import pytest

from kilo_engine.document import CoordinateMapper, Row


def make_row(raw: bytes) -> Row:
    mapper = CoordinateMapper()
    return Row(index=0, raw=bytearray(raw), display=mapper.expand(raw))


def test_expand_replaces_tabs_with_spaces_up_to_next_stop() -> None:
    mapper = CoordinateMapper(tab_stop=8)

    assert mapper.expand(b"\tx") == b" " * 8 + b"x"
    assert mapper.expand(b"abc\tx") == b"abc" + b" " * 5 + b"x"
    assert mapper.expand(b"abcdefgh\t") == b"abcdefgh" + b" " * 8


def test_expand_without_tabs_is_identity() -> None:
    assert CoordinateMapper().expand(b"plain text") == b"plain text"


def test_raw_to_display_counts_tab_width() -> None:
    mapper = CoordinateMapper(tab_stop=4)
    row = b"a\tb\tc"

    assert mapper.raw_to_display(row, 0) == 0
    assert mapper.raw_to_display(row, 1) == 1
    assert mapper.raw_to_display(row, 2) == 4
    assert mapper.raw_to_display(row, 4) == 8
    assert mapper.raw_to_display(row, 99) == 9


def test_display_to_raw_inside_tab_resolves_to_tab() -> None:
    mapper = CoordinateMapper(tab_stop=8)
    row = b"x\ty"

    for column in range(1, 8):
        assert mapper.display_to_raw(row, column) == 1
    assert mapper.display_to_raw(row, 8) == 2
    assert mapper.display_to_raw(row, 50) == 3


@pytest.mark.parametrize(
    "raw",
    [b"", b"hello", b"\t\t", b"a\tbc\t\td", b"int\tmain(void)\t{", b"\x01\t\x7f"],
)
@pytest.mark.parametrize("tab_stop", [1, 4, 8])
def test_display_to_raw_inverts_raw_to_display(raw: bytes, tab_stop: int) -> None:
    mapper = CoordinateMapper(tab_stop=tab_stop)

    for column in range(len(raw) + 1):
        assert mapper.display_to_raw(raw, mapper.raw_to_display(raw, column)) == column


def test_mapper_accepts_rows() -> None:
    mapper = CoordinateMapper()
    row = make_row(b"\tz")

    assert mapper.raw_to_display(row, 1) == 8
    assert mapper.display_to_raw(row, 8) == 1
    assert len(row.display) == 9


def test_tab_stop_must_be_positive() -> None:
    with pytest.raises(ValueError):
        CoordinateMapper(tab_stop=0)
