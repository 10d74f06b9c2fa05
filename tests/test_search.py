from typing import List

from kilo_engine.document import Document
from kilo_engine.search import Direction, SearchSession, SearchStep
from kilo_engine.syntax import C_PROFILE, Highlight

H = Highlight


def make_session(*lines: bytes) -> SearchSession:
    document = Document.from_lines(lines, profile=C_PROFILE)
    session = SearchSession(document)
    session.begin()
    return session


def match_rows(session: SearchSession) -> List[int]:
    return [
        row.index for row in session.document if H.MATCH in row.tokens
    ]


def test_first_hit_scans_forward_from_top() -> None:
    session = make_session(b"alpha", b"beta x", b"gamma x")

    hit = session.on_query_changed("x")

    assert hit is not None
    assert (hit.row, hit.raw_column, hit.display_column, hit.length) == (1, 5, 5, 1)
    assert session.last_match == 1


def test_forward_navigation_wraps_to_the_only_match() -> None:
    session = make_session(b"aaa", b"x", b"bbb")

    first = session.on_query_changed("x")
    assert first is not None and first.row == 1
    for _ in range(5):
        hit = session.on_query_changed("x", SearchStep.NEXT)
        assert hit is not None
        assert hit.row == 1


def test_backward_navigation_wraps_around_the_start() -> None:
    session = make_session(b"x0", b"none", b"x2")

    assert session.on_query_changed("x").row == 0  # type: ignore[union-attr]
    hit = session.on_query_changed("x", SearchStep.PREVIOUS)

    assert hit is not None and hit.row == 2
    assert session.direction is Direction.BACKWARD
    hit = session.on_query_changed("x", SearchStep.PREVIOUS)
    assert hit is not None and hit.row == 0


def test_no_match_leaves_document_untouched() -> None:
    session = make_session(b"one", b"two")
    before = [list(row.tokens) for row in session.document]

    assert session.on_query_changed("zzz") is None
    assert session.on_query_changed("") is None
    assert [list(row.tokens) for row in session.document] == before
    assert session.overlay is None


def test_overlay_marks_the_match_and_is_restored_on_next_step() -> None:
    session = make_session(b"int x;", b"int y;", b"int x;")
    original = [list(row.tokens) for row in session.document]

    session.on_query_changed("x")
    assert session.document.rows[0].tokens[4] == H.MATCH
    assert match_rows(session) == [0]

    session.on_query_changed("x", SearchStep.NEXT)
    assert match_rows(session) == [2]
    assert session.document.rows[0].tokens == original[0]


def test_new_query_text_resets_the_anchor() -> None:
    session = make_session(b"ab", b"ab", b"abc")

    session.on_query_changed("a")
    session.on_query_changed("a", SearchStep.NEXT)
    hit = session.on_query_changed("ab")

    assert hit is not None and hit.row == 0


def test_accept_and_cancel_clear_the_overlay() -> None:
    session = make_session(b"needle")
    original = list(session.document.rows[0].tokens)

    session.on_query_changed("needle")
    assert session.on_query_changed("needle", SearchStep.ACCEPT) is None
    assert session.document.rows[0].tokens == original
    assert session.last_match is None

    session.on_query_changed("needle")
    session.end(commit=False)
    assert session.document.rows[0].tokens == original
    assert session.active is False


def test_match_after_tab_maps_back_to_raw_column() -> None:
    session = make_session(b"\tfoo")

    hit = session.on_query_changed(b"foo")

    assert hit is not None
    assert hit.display_column == 8
    assert hit.raw_column == 1


def test_empty_document() -> None:
    session = make_session()

    assert session.on_query_changed("x") is None
