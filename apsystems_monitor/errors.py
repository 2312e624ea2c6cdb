# apsystems_monitor/errors.py
from __future__ import annotations

from typing import Any


class EcuError(Exception):
    """Base error for everything raised while talking to an ECU-R.

    ``partial`` carries whatever could be decoded before the failure
    (a record with at least ``raw`` set), so callers can decide whether
    to keep it or discard it.
    """

    def __init__(self, message: str = "", partial: Any = None):
        super().__init__(message)
        self.partial = partial

    def with_context(self, message: str, partial: Any = None) -> "EcuError":
        """Return a copy of this error with ``message`` prepended."""
        return type(self)(f"{message}: {self}", partial=partial)


class MalformedBodyError(EcuError):
    """Frame or record does not match the expected binary layout."""


class UnknownInverterTypeError(EcuError):
    """Inverter record carries a model discriminator we cannot decode."""


class FrameReadError(EcuError):
    """Reading a frame from the stream failed."""


class TruncatedFrameError(FrameReadError, MalformedBodyError):
    """The stream ended before the frame announced in the header was complete."""


class NotConnectedError(EcuError):
    """A request was issued without an open connection to the ECU."""


class UnknownTimezoneError(EcuError, ValueError):
    """Time-zone identifier not present in the IANA database."""
