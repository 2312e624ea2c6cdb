# apsystems_monitor/models/signal.py
from dataclasses import dataclass


@dataclass(frozen=True)
class InverterSignal:
    id: str
    signal: int   # zigbee strength, 0-255

    @property
    def signal_pct(self) -> float:
        return self.signal / 2.56


@dataclass(frozen=True)
class SignalInfo:
    status: int | None = None
    inverters: tuple[InverterSignal, ...] = ()
    raw: bytes = b""
