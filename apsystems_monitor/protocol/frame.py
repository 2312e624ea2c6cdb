# apsystems_monitor/protocol/frame.py
"""
Frame reading and validation for the ECU-R response protocol.

Every response looks like

    APS11 | LLLL | payload ... | END\\n

where LLLL is the zero-padded ASCII total length minus one (the trailing
newline is not counted by the device).
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Protocol

from apsystems_monitor.errors import FrameReadError, MalformedBodyError, TruncatedFrameError
from apsystems_monitor.protocol.encoding import ascii_int

log = logging.getLogger(__name__)

MARKER = b"APS11"
HEADER_SIZE = 9
LENGTH_FIELD = slice(5, 9)
TERMINATOR = b"END\n"
MIN_FRAME_SIZE = 8


class ByteSource(Protocol):
    def read(self, size: int) -> bytes: ...


def declared_length(frame: bytes) -> int:
    """Length announced in the header (total frame length minus one)."""
    return ascii_int(frame[LENGTH_FIELD], "body length from header")


def validate_frame(frame: bytes) -> None:
    """Raise MalformedBodyError unless ``frame`` is terminated and length-consistent."""
    if len(frame) < MIN_FRAME_SIZE:
        raise MalformedBodyError(
            f"body length less than {MIN_FRAME_SIZE} bytes, length was {len(frame)}"
        )

    if bytes(frame[-len(TERMINATOR):]) != TERMINATOR:
        raise MalformedBodyError(f"body does not end with 'END\\n', got {bytes(frame)!r}")

    expected = declared_length(frame)
    if len(frame) - 1 != expected:
        raise MalformedBodyError(
            f"body length does not match header; expected {expected}, got {len(frame) - 1}"
        )


def _read(stream: ByteSource | BinaryIO, size: int, phase: str) -> bytes:
    try:
        chunk = stream.read(size)
    except OSError as exc:
        raise FrameReadError(f"error reading {phase} from source: {exc}") from exc
    chunk = chunk or b""
    if len(chunk) != size:
        raise TruncatedFrameError(
            f"short read on {phase}: wanted {size} bytes, got {len(chunk)}"
        )
    return chunk


def read_frame(stream: ByteSource | BinaryIO) -> bytes:
    """
    Read one complete response frame from ``stream``.

    The 9-byte header is read first to learn the declared length, then the
    remainder in a single read. Any short read is a hard failure; nothing is
    buffered for a later attempt. The frame is validated before returning.
    """
    header = _read(stream, HEADER_SIZE, "header")
    if not header.startswith(MARKER):
        log.debug("Header does not start with %r: %r", MARKER, header)
    expected = declared_length(header)
    if expected + 1 < HEADER_SIZE + len(TERMINATOR):
        raise MalformedBodyError(f"header announces impossible length {expected}")

    body = _read(stream, expected - HEADER_SIZE + 1, "body")
    frame = header + body
    if len(frame) != expected + 1:
        raise MalformedBodyError(
            f"length of response did not match header (got {len(frame)}, expected {expected + 1})"
        )

    try:
        validate_frame(frame)
    except MalformedBodyError as exc:
        raise exc.with_context("could not validate body", partial=frame) from exc

    log.debug("Read %d byte frame (command %s)", len(frame), frame[9:13].decode("ascii", "replace"))
    return frame
