import pytest

from kilo_engine.adapters.terminal import KeyDecoder, decode, encode_frame
from kilo_engine.adapters.terminal.ansi import color_for, move_cursor
from kilo_engine.adapters.terminal.host import _parse_args
from kilo_engine.config import EditorConfig
from kilo_engine.document import Cursor, Document
from kilo_engine.keys import Key, KeyEvent
from kilo_engine.syntax import C_PROFILE, Highlight
from kilo_engine.view import Compositor, Viewport


def keys(data: bytes) -> list[Key]:
    return [event.key for event in decode(data)]


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"\x1b[A", Key.MOVE_UP),
        (b"\x1b[B", Key.MOVE_DOWN),
        (b"\x1b[C", Key.MOVE_RIGHT),
        (b"\x1b[D", Key.MOVE_LEFT),
        (b"\x1b[H", Key.HOME),
        (b"\x1b[F", Key.END),
        (b"\x1bOH", Key.HOME),
        (b"\x1bOF", Key.END),
        (b"\x1b[1~", Key.HOME),
        (b"\x1b[7~", Key.HOME),
        (b"\x1b[4~", Key.END),
        (b"\x1b[8~", Key.END),
        (b"\x1b[3~", Key.DELETE),
        (b"\x1b[5~", Key.PAGE_UP),
        (b"\x1b[6~", Key.PAGE_DOWN),
        (b"\x7f", Key.BACKSPACE),
        (b"\x08", Key.BACKSPACE),
        (b"\r", Key.ENTER),
        (b"\x11", Key.QUIT),
        (b"\x13", Key.SAVE),
        (b"\x06", Key.FIND),
        (b"\x0c", Key.REFRESH),
    ],
)
def test_decode_known_sequences(data: bytes, expected: Key) -> None:
    assert keys(data) == [expected]


@pytest.mark.parametrize("data", [b"\x1b", b"\x1b[", b"\x1b[5", b"\x1bO"])
def test_truncated_sequences_become_escape(data: bytes) -> None:
    assert keys(data) == [Key.ESCAPE]


def test_unknown_sequences_become_escape_and_are_consumed() -> None:
    assert keys(b"\x1b[Zq") == [Key.ESCAPE, Key.CHAR]
    assert keys(b"\x1b[9~") == [Key.ESCAPE]
    assert keys(b"\x1bxy") == [Key.ESCAPE]


def test_plain_bytes_decode_to_chars() -> None:
    events = decode(b"a\tb")

    assert events == [KeyEvent.char("a"), KeyEvent.char(9), KeyEvent.char("b")]


def test_decoder_reports_timeouts_as_none() -> None:
    decoder = KeyDecoder(lambda: None)

    assert decoder.read_key() is None


def make_bytes(*lines: bytes, **kwargs: object) -> bytes:
    document = Document.from_lines(lines, profile=C_PROFILE)
    frame = Compositor(EditorConfig(), clock=lambda: 0.0).compose(
        document,
        Viewport(rows=3, cols=20),
        Cursor(),
        filename="t.c",
        **kwargs,  # type: ignore[arg-type]
    )
    return encode_frame(frame)


def test_frame_is_wrapped_in_cursor_hide_and_show() -> None:
    data = make_bytes(b"x")

    assert data.startswith(b"\x1b[?25l\x1b[H")
    assert data.endswith(b"\x1b[1;1H\x1b[?25h")


def test_rows_are_colored_and_reset() -> None:
    data = make_bytes(b"int 7")

    assert data.startswith(b"\x1b[?25l\x1b[H\x1b[32mint\x1b[39m \x1b[31m7\x1b[39m\x1b[K\r\n")


def test_empty_rows_show_placeholder() -> None:
    data = make_bytes(b"x")

    assert b"~\x1b[K\r\n~\x1b[K\r\n" in data


def test_status_bar_in_reverse_video_and_message_line() -> None:
    data = make_bytes(b"x", message="hi there", message_posted_at=0.0)

    assert b"\x1b[K\x1b[7mt.c - 1 lines " in data
    assert b"\x1b[m\r\n\x1b[Khi there\x1b[1;1H" in data


def test_control_glyph_restores_current_color() -> None:
    data = make_bytes(b'"a\x01b"')

    assert b'\x1b[35m"a\x1b[7mA\x1b[m\x1b[35mb"' in data


def test_color_table() -> None:
    assert color_for(Highlight.PLAIN) is None
    assert color_for(Highlight.BLOCK_COMMENT) == 36
    assert color_for(Highlight.MATCH) == 34
    assert move_cursor(3, 7) == b"\x1b[3;7H"


def test_cli_arguments() -> None:
    args = _parse_args(["notes.c", "--tab-stop", "4", "--log-file", "kilo.log"])

    assert args.file == "notes.c"
    assert args.tab_stop == 4
    assert args.log_file == "kilo.log"
    assert _parse_args([]).file is None


def test_cli_rejects_bad_tab_stop() -> None:
    with pytest.raises(SystemExit):
        _parse_args(["--tab-stop", "0"])
