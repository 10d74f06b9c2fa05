"""Raw terminal front end: key decoding, ANSI frame encoding and the host loop."""

from .ansi import encode_frame
from .decoder import KeyDecoder, decode
from .host import TerminalError, TerminalHost, main

__all__ = ["KeyDecoder", "TerminalError", "TerminalHost", "decode", "encode_frame", "main"]
