# apsystems_monitor/services/ecu_client.py

from __future__ import annotations

import socket
import time
from typing import Any, Callable, Optional

from apsystems_monitor.config import EcuConfig
from apsystems_monitor.errors import EcuError, NotConnectedError
from apsystems_monitor.models.ecu import EcuInfo
from apsystems_monitor.models.inverter import ArrayInfo
from apsystems_monitor.models.response import EcuResponse
from apsystems_monitor.models.signal import SignalInfo
from apsystems_monitor.protocol import commands
from apsystems_monitor.protocol.decoders import (
    decode_array_info,
    decode_ecu_info,
    decode_signal_info,
)
from apsystems_monitor.protocol.frame import read_frame

ConnectionFactory = Callable[[tuple[str, int], Optional[float]], Any]


class EcuClient:
    """
    Request/response client for the ECU-R's local TCP port.

    Each request writes one ASCII command and reads exactly one frame back.
    The ECU chokes on back-to-back requests, so get_data() pauses for
    ``cfg.cooldown`` seconds between them.
    """

    def __init__(self, cfg: EcuConfig, log: Any, connection_factory: Optional[ConnectionFactory] = None):
        self.cfg = cfg
        self.log = log
        self._connection_factory = connection_factory or socket.create_connection
        self._sock = None
        self._stream = None
        self.ecu_id: str | None = None

    # ------------------------------------------------------------------
    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        """Open the TCP connection; no data is sent."""
        address = (self.cfg.host, self.cfg.port)
        self.log.debug("Connecting to ECU at %s:%s", *address)
        self._sock = self._connection_factory(address, self.cfg.timeout)
        self._stream = self._sock.makefile("rb")

    def close(self) -> None:
        if self._sock is None:
            raise NotConnectedError("not connected to ECU-R")
        try:
            self._stream.close()
        finally:
            self._sock.close()
            self._sock = None
            self._stream = None

    def __enter__(self) -> "EcuClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.connected:
            self.close()

    # ------------------------------------------------------------------
    def _request(self, command: bytes, what: str) -> bytes:
        if self._sock is None:
            raise NotConnectedError(f"not connected to ECU-R (requesting {what})")
        self.log.debug("Sending %s request: %r", what, command)
        try:
            self._sock.sendall(command)
        except OSError as exc:
            raise EcuError(f"could not send {what} request: {exc}") from exc
        try:
            return read_frame(self._stream)
        except EcuError as exc:
            raise exc.with_context(f"reading {what} response", partial=exc.partial) from exc

    def _require_ecu_id(self) -> str:
        if not self.ecu_id:
            self.get_ecu_info()
        return self.ecu_id

    # ------------------------------------------------------------------
    def get_ecu_info(self) -> EcuInfo:
        """First call of a poll; learns the ECU id needed by the other requests."""
        raw = self._request(commands.ecu_info_command(), "ECU info")
        info = decode_ecu_info(raw)
        self.ecu_id = info.ecu_id
        self.log.debug("ECU %s firmware %s", info.ecu_id, info.version)
        return info

    def get_inverter_info(self) -> ArrayInfo:
        """Per-inverter status and per-channel power."""
        ecu_id = self._require_ecu_id()
        raw = self._request(commands.inverter_info_command(ecu_id), "inverter info")
        return decode_array_info(raw, self.cfg.timezone)

    def get_inverter_signal(self) -> SignalInfo:
        """Zigbee signal strength per inverter (0x00-0xFF)."""
        ecu_id = self._require_ecu_id()
        raw = self._request(commands.inverter_signal_command(ecu_id), "inverter signal")
        return decode_signal_info(raw)

    # ------------------------------------------------------------------
    def get_data(self) -> EcuResponse:
        """
        Run a full poll: ECU info, inverter info, signal info.

        Opens a connection if none is open and closes the one it opened.
        On failure the raised EcuError's ``partial`` is an EcuResponse with
        everything collected so far.
        """
        opened_here = not self.connected
        if opened_here:
            try:
                self.connect()
            except OSError as exc:
                self.log.warning("Could not connect to ECU: %s", exc)
                raise

        ecu_info = array_info = signal_info = None
        try:
            ecu_info = self.get_ecu_info()
            time.sleep(self.cfg.cooldown)
            array_info = self.get_inverter_info()
            time.sleep(self.cfg.cooldown)
            signal_info = self.get_inverter_signal()
        except EcuError as exc:
            step = (
                "ECU information" if ecu_info is None
                else "inverter information" if array_info is None
                else "inverter signal strength information"
            )
            self.log.warning("Could not get %s: %s", step, exc)
            # keep the partial record of the step that failed
            if ecu_info is None and isinstance(exc.partial, EcuInfo):
                ecu_info = exc.partial
            elif array_info is None and isinstance(exc.partial, ArrayInfo):
                array_info = exc.partial
            elif isinstance(exc.partial, SignalInfo):
                signal_info = exc.partial
            raise exc.with_context(
                f"could not get {step}",
                partial=EcuResponse(ecu_info=ecu_info, array_info=array_info, signal_info=signal_info),
            ) from exc
        finally:
            if opened_here and self.connected:
                self.close()

        return EcuResponse(ecu_info=ecu_info, array_info=array_info, signal_info=signal_info)
