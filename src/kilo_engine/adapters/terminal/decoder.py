"""Turns raw terminal input bytes into logical key events."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Iterable, Iterator, List, Mapping, Optional

from kilo_engine.keys import Key, KeyEvent
from kilo_engine.runtime import telemetry

ESC = 0x1B

ByteSource = Callable[[], Optional[int]]


def ctrl(letter: str) -> int:
    return ord(letter) & 0x1F


CONTROL_KEYS: Mapping[int, Key] = MappingProxyType(
    {
        127: Key.BACKSPACE,
        ctrl("h"): Key.BACKSPACE,
        ord("\r"): Key.ENTER,
        ctrl("q"): Key.QUIT,
        ctrl("s"): Key.SAVE,
        ctrl("f"): Key.FIND,
        ctrl("l"): Key.REFRESH,
        # Ctrl-C is swallowed rather than typed
        ctrl("c"): Key.REFRESH,
    }
)

# ESC [ <letter>
CSI_LETTERS: Mapping[int, Key] = MappingProxyType(
    {
        ord("A"): Key.MOVE_UP,
        ord("B"): Key.MOVE_DOWN,
        ord("C"): Key.MOVE_RIGHT,
        ord("D"): Key.MOVE_LEFT,
        ord("H"): Key.HOME,
        ord("F"): Key.END,
    }
)

# ESC [ <digit> ~
CSI_TILDE: Mapping[int, Key] = MappingProxyType(
    {
        ord("1"): Key.HOME,
        ord("7"): Key.HOME,
        ord("4"): Key.END,
        ord("8"): Key.END,
        ord("3"): Key.DELETE,
        ord("5"): Key.PAGE_UP,
        ord("6"): Key.PAGE_DOWN,
    }
)

# ESC O <letter>
SS3_LETTERS: Mapping[int, Key] = MappingProxyType(
    {ord("H"): Key.HOME, ord("F"): Key.END}
)


class KeyDecoder:
    """Reads one key at a time from a byte source.

    ``source`` returns the next byte, or ``None`` when the read timed out.
    An escape sequence cut short by a timeout, or one that is not recognized,
    decodes to ``Key.ESCAPE``.
    """

    def __init__(self, source: ByteSource) -> None:
        self.source = source

    def read_key(self) -> Optional[KeyEvent]:
        """Return the next key, or ``None`` if no byte is available yet."""

        byte = self.source()
        if byte is None:
            return None
        if byte == ESC:
            return KeyEvent(self._read_escape())
        key = CONTROL_KEYS.get(byte)
        if key is not None:
            return KeyEvent(key)
        return KeyEvent.char(byte)

    def _read_escape(self) -> Key:
        first = self.source()
        if first is None:
            return Key.ESCAPE
        second = self.source()
        if second is None:
            return self._unrecognized(first)

        if first == ord("["):
            if ord("0") <= second <= ord("9"):
                third = self.source()
                if third == ord("~") and second in CSI_TILDE:
                    return CSI_TILDE[second]
                return self._unrecognized(first, second, third)
            if second in CSI_LETTERS:
                return CSI_LETTERS[second]
        elif first == ord("O") and second in SS3_LETTERS:
            return SS3_LETTERS[second]
        return self._unrecognized(first, second)

    @staticmethod
    def _unrecognized(*sequence: Optional[int]) -> Key:
        telemetry.record_event(
            "input.unknown_sequence",
            level="debug",
            data={"bytes": bytes(b for b in sequence if b is not None)},
            logger_name="kilo_engine.terminal",
        )
        return Key.ESCAPE


def _byte_source(data: Iterable[int]) -> ByteSource:
    iterator: Iterator[int] = iter(data)

    def read() -> Optional[int]:
        return next(iterator, None)

    return read


def decode(data: bytes) -> List[KeyEvent]:
    """Decode a complete chunk of input into key events."""

    decoder = KeyDecoder(_byte_source(data))
    events: List[KeyEvent] = []
    while True:
        event = decoder.read_key()
        if event is None:
            return events
        events.append(event)


__all__ = ["KeyDecoder", "decode", "ctrl", "CONTROL_KEYS", "ESC"]
