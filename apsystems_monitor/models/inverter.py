# apsystems_monitor/models/inverter.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar


@dataclass(frozen=True)
class InverterRecord:
    """Fields every inverter model reports."""

    model: ClassVar[str] = ""

    id: str
    online: bool

    def channel_powers(self) -> dict[str, int]:
        return {}

    @property
    def total_power_w(self) -> int:
        return sum(self.channel_powers().values())


@dataclass(frozen=True)
class _MeasuredInverter(InverterRecord):
    frequency_hz: float
    temperature_c: int
    power_a_w: int
    voltage_a_v: int
    power_b_w: int


@dataclass(frozen=True)
class Yc600Inverter(_MeasuredInverter):
    model: ClassVar[str] = "YC600"

    def channel_powers(self) -> dict[str, int]:
        return {"A": self.power_a_w, "B": self.power_b_w}


@dataclass(frozen=True)
class Yc1000Inverter(_MeasuredInverter):
    model: ClassVar[str] = "YC1000"

    power_c_w: int
    power_d_w: int

    def channel_powers(self) -> dict[str, int]:
        return {"A": self.power_a_w, "B": self.power_b_w, "C": self.power_c_w, "D": self.power_d_w}


@dataclass(frozen=True)
class Qs1Inverter(_MeasuredInverter):
    model: ClassVar[str] = "QS1"

    power_c_w: int
    power_d_w: int

    def channel_powers(self) -> dict[str, int]:
        return {"A": self.power_a_w, "B": self.power_b_w, "C": self.power_c_w, "D": self.power_d_w}


@dataclass(frozen=True)
class OtherInverter(InverterRecord):
    model: ClassVar[str] = "Other"

    discriminator: int = 0


@dataclass(frozen=True)
class ArrayInfo:
    timestamp: datetime | None = None
    inverters: tuple[InverterRecord, ...] = ()
    raw: bytes = b""
