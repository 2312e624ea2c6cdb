# apsystems_monitor/protocol/encoding.py
"""Leaf helpers shared by the record decoders."""

from __future__ import annotations

import struct
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from apsystems_monitor.errors import MalformedBodyError, UnknownTimezoneError

DEFAULT_TZ = "UTC"
TIMESTAMP_SIZE = 7

_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")


def hex_string(data: bytes) -> str:
    """Uppercase hex of ``data`` without prefix or separators."""
    return bytes(data).hex().upper()


def ascii_int(data: bytes, what: str = "field") -> int:
    """Parse an ASCII decimal sub-field (e.g. b"0094")."""
    text = bytes(data).decode("ascii", errors="replace")
    if not text or not text.isdigit() or not text.isascii():
        raise MalformedBodyError(f"could not parse {what} from {bytes(data)!r}")
    return int(text)


def uint16_be(data: bytes, offset: int) -> int:
    try:
        return _U16.unpack_from(data, offset)[0]
    except struct.error as exc:
        raise MalformedBodyError(f"body too short for uint16 at offset {offset}") from exc


def uint32_be(data: bytes, offset: int) -> int:
    try:
        return _U32.unpack_from(data, offset)[0]
    except struct.error as exc:
        raise MalformedBodyError(f"body too short for uint32 at offset {offset}") from exc


def load_zone(tz: str | None) -> ZoneInfo:
    name = tz or DEFAULT_TZ
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UnknownTimezoneError(f"unknown time zone {name!r}") from exc


def _bcd_field(data: bytes) -> int:
    # 0x21 reads as "21" and means decimal 21, not 33
    digits = "".join(f"{b:02X}" for b in data)
    if not digits.isdigit():
        raise MalformedBodyError(f"timestamp field {digits} is not decimal-coded")
    return int(digits)


def decode_timestamp(data: bytes, tz: str | None = "") -> datetime:
    """
    Decode the ECU's 7-byte timestamp into an aware datetime in ``tz``.

    The ECU writes each calendar field so that its hex digits read as the
    decimal value: 2021-10-28 10:00:01 is 20 21 10 28 10 00 01. Fields that
    contain A-F digits or form an impossible date raise MalformedBodyError
    rather than being normalised.
    """
    if len(data) != TIMESTAMP_SIZE:
        raise MalformedBodyError(
            f"timestamp must be {TIMESTAMP_SIZE} bytes, got {len(data)}"
        )
    zone = load_zone(tz)

    year = _bcd_field(data[0:2])
    month, day, hour, minute, second = (_bcd_field(data[i:i + 1]) for i in range(2, 7))
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=zone)
    except ValueError as exc:
        raise MalformedBodyError(f"invalid timestamp {hex_string(data)}: {exc}") from exc
