from pathlib import Path
from typing import List

from kilo_engine.config import EditorConfig
from kilo_engine.editor.session import EditorSession
from kilo_engine.keys import Key, KeyEvent
from kilo_engine.syntax import Highlight


def make_session(*lines: bytes, rows: int = 24, cols: int = 80, **config: object) -> EditorSession:
    session = EditorSession(
        EditorConfig(**config),  # type: ignore[arg-type]
        screen_rows=rows,
        screen_cols=cols,
        clock=lambda: 0.0,
    )
    if lines:
        session.load_lines(lines)
    return session


def press(session: EditorSession, *keys: Key) -> None:
    for key in keys:
        session.handle_key(KeyEvent(key))


def type_text(session: EditorSession, text: str) -> None:
    for char in text:
        session.handle_key(KeyEvent.char(char))


def test_typing_into_empty_document_creates_first_row() -> None:
    session = make_session()

    type_text(session, "hi")

    assert session.document.lines() == (b"hi",)
    assert session.cursor.as_tuple() == (0, 2)
    assert session.document.is_dirty


def test_enter_splits_row_and_moves_to_next_line() -> None:
    session = make_session(b"hello world")
    session.cursor.move_to(0, 5)

    press(session, Key.ENTER)

    assert session.document.lines() == (b"hello", b" world")
    assert session.cursor.as_tuple() == (1, 0)


def test_enter_at_column_zero_opens_empty_row_above() -> None:
    session = make_session(b"abc")

    press(session, Key.ENTER)

    assert session.document.lines() == (b"", b"abc")
    assert session.cursor.as_tuple() == (1, 0)


def test_enter_on_virtual_last_row_appends_row() -> None:
    session = make_session(b"a")
    session.cursor.move_to(1, 0)

    press(session, Key.ENTER)

    assert session.document.lines() == (b"a", b"")
    assert session.cursor.as_tuple() == (2, 0)


def test_backspace_joins_with_previous_row() -> None:
    session = make_session(b"ab", b"cd")
    session.cursor.move_to(1, 0)

    press(session, Key.BACKSPACE)

    assert session.document.lines() == (b"abcd",)
    assert session.cursor.as_tuple() == (0, 2)


def test_backspace_at_document_start_is_noop() -> None:
    session = make_session(b"ab")

    press(session, Key.BACKSPACE)

    assert session.document.lines() == (b"ab",)
    assert session.document.dirty == 0


def test_delete_removes_byte_under_cursor() -> None:
    session = make_session(b"abc")
    session.cursor.move_to(0, 1)

    press(session, Key.DELETE)

    assert session.document.lines() == (b"ac",)
    assert session.cursor.as_tuple() == (0, 1)


def test_horizontal_motion_wraps_across_rows() -> None:
    session = make_session(b"ab", b"cd")
    session.cursor.move_to(1, 0)

    press(session, Key.MOVE_LEFT)
    assert session.cursor.as_tuple() == (0, 2)

    press(session, Key.MOVE_RIGHT)
    assert session.cursor.as_tuple() == (1, 0)


def test_vertical_motion_clamps_column() -> None:
    session = make_session(b"long line", b"ab")
    session.cursor.move_to(0, 9)

    press(session, Key.MOVE_DOWN)
    assert session.cursor.as_tuple() == (1, 2)

    press(session, Key.MOVE_DOWN, Key.MOVE_DOWN)
    assert session.cursor.as_tuple() == (2, 0)

    press(session, Key.MOVE_UP, Key.MOVE_UP, Key.MOVE_UP, Key.MOVE_UP)
    assert session.cursor.as_tuple() == (0, 0)


def test_home_and_end() -> None:
    session = make_session(b"abcdef")
    session.cursor.move_to(0, 3)

    press(session, Key.END)
    assert session.cursor.col == 6
    press(session, Key.HOME)
    assert session.cursor.col == 0


def test_page_down_and_up() -> None:
    session = make_session(*[b"row" for _ in range(20)], rows=7)

    press(session, Key.PAGE_DOWN)
    assert session.cursor.row == 9

    session.render()
    assert session.viewport.row_offset == 5

    press(session, Key.PAGE_UP)
    assert session.cursor.row == 0


def test_quit_requires_confirmation_when_dirty() -> None:
    session = make_session(b"x")
    quits: List[object] = []
    session.bus.subscribe("editor.quit", quits.append)
    type_text(session, "y")

    for remaining in (3, 2, 1):
        press(session, Key.QUIT)
        assert not session.should_quit
        assert session.message_text == (
            "WARNING!!! File has unsaved changes. "
            f"Press Ctrl-Q {remaining} more time to quit."
        )

    press(session, Key.QUIT)
    assert session.should_quit
    assert quits == [{"dirty": 1}]


def test_other_keys_reset_quit_confirmation() -> None:
    session = make_session(b"x")
    type_text(session, "y")

    press(session, Key.QUIT, Key.QUIT, Key.MOVE_LEFT, Key.QUIT)

    assert "3 more time" in session.message_text


def test_clean_document_quits_immediately() -> None:
    session = make_session(b"x")

    press(session, Key.QUIT)

    assert session.should_quit


def test_open_existing_file_selects_profile(tmp_path: Path) -> None:
    path = tmp_path / "main.c"
    path.write_bytes(b"int main;\n/* x\n*/\n")
    session = make_session()

    session.open(path)

    assert session.filename == str(path)
    assert session.document.row_count == 3
    assert session.document.profile is not None
    assert session.document.profile.name == "c"
    assert session.document.rows[1].open_comment is True
    assert session.document.dirty == 0


def test_open_missing_file_starts_new_document(tmp_path: Path) -> None:
    session = make_session()
    path = tmp_path / "new.py"

    session.open(path)

    assert session.document.row_count == 0
    assert session.filename == str(path)
    assert session.document.profile is not None
    assert session.message_text == f"New file: {path}"


def test_open_unreadable_path_reports_failure(tmp_path: Path) -> None:
    session = make_session()

    session.open(tmp_path)

    assert session.message_text.startswith(f"Can't open {tmp_path}: ")
    assert session.document.row_count == 0


def test_save_writes_file_and_resets_dirty(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    session = make_session()
    session.open(path)
    saved: List[object] = []
    session.bus.subscribe("document.saved", saved.append)

    type_text(session, "abc")
    press(session, Key.SAVE)

    assert path.read_bytes() == b"abc\n"
    assert session.document.dirty == 0
    assert session.message_text == "4 bytes written to disk"
    assert saved == [{"path": str(path), "bytes": 4}]


def test_save_failure_keeps_document_dirty(tmp_path: Path) -> None:
    session = make_session()
    session.open(tmp_path / "missing-dir" / "f.txt")

    type_text(session, "x")
    press(session, Key.SAVE)

    assert session.message_text.startswith("Can't save! I/O error: ")
    assert session.document.is_dirty


def test_save_without_name_prompts_for_one(tmp_path: Path) -> None:
    session = make_session()
    type_text(session, "x")
    target = tmp_path / "out.c"

    press(session, Key.SAVE)
    assert session.mode == "save_as"
    assert session.message_text == "Save as:  (ESC to cancel)"

    type_text(session, str(target) + "Z")
    press(session, Key.BACKSPACE)
    assert session.message_text == f"Save as: {target} (ESC to cancel)"
    press(session, Key.ENTER)

    assert session.mode == "edit"
    assert session.filename == str(target)
    assert target.read_bytes() == b"x\n"
    assert session.document.profile is not None
    assert session.document.profile.name == "c"
    assert session.message_text == "2 bytes written to disk"


def test_save_as_escape_aborts() -> None:
    session = make_session()
    type_text(session, "x")

    press(session, Key.SAVE)
    type_text(session, "name")
    press(session, Key.ESCAPE)

    assert session.mode == "edit"
    assert session.filename is None
    assert session.message_text == "Save aborted"
    assert session.document.is_dirty


def test_save_as_enter_with_empty_answer_keeps_prompting() -> None:
    session = make_session()
    type_text(session, "x")

    press(session, Key.SAVE, Key.ENTER)

    assert session.mode == "save_as"


def test_search_wraps_to_only_match_and_cancel_restores_cursor() -> None:
    session = make_session(b"aaa", b"x", b"bbb")
    session.cursor.move_to(2, 1)

    press(session, Key.FIND)
    assert session.mode == "search"
    type_text(session, "x")
    assert session.cursor.as_tuple() == (1, 0)

    for _ in range(4):
        press(session, Key.MOVE_DOWN)
        assert session.cursor.as_tuple() == (1, 0)
        assert Highlight.MATCH in session.document.rows[1].tokens

    press(session, Key.ESCAPE)

    assert session.mode == "edit"
    assert session.cursor.as_tuple() == (2, 1)
    assert all(Highlight.MATCH not in row.tokens for row in session.document)
    assert session.message_text == ""


def test_search_accept_keeps_match_position() -> None:
    session = make_session(b"alpha", b"beta", b"gamma")

    press(session, Key.FIND)
    type_text(session, "mm")
    press(session, Key.ENTER)

    assert session.mode == "edit"
    assert session.cursor.as_tuple() == (2, 2)
    assert all(Highlight.MATCH not in row.tokens for row in session.document)


def test_search_prompt_backspace_edits_query() -> None:
    session = make_session(b"abc", b"abd")

    press(session, Key.FIND)
    type_text(session, "abd")
    assert session.cursor.row == 1
    press(session, Key.BACKSPACE)
    type_text(session, "c")

    assert session.cursor.row == 0
    assert session.message_text == "Search: abc (ESC/Arrows/Enter)"


def test_search_hit_scrolls_match_row_to_top() -> None:
    session = make_session(*[b"." for _ in range(30)], b"target", rows=12)

    press(session, Key.FIND)
    type_text(session, "target")
    session.render()

    assert session.viewport.row_offset == 30


def test_render_shows_help_and_status() -> None:
    session = make_session(b"int x;")
    session.show_help()

    frame = session.render()

    assert frame.message.text == "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"
    assert frame.status.left.startswith("[No Name] - 1 lines")
    assert frame.cursor.row == 1 and frame.cursor.col == 1


def test_resize_changes_visible_rows() -> None:
    session = make_session(b"a")

    session.resize(10, 30)
    frame = session.render()

    assert len(frame.text_rows()) == 8
    assert frame.width == 30


def test_custom_tab_stop_flows_into_document() -> None:
    session = make_session(b"\tx", tab_stop=4)

    assert session.document.rows[0].display == b"    x"
