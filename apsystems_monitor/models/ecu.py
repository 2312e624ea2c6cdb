# apsystems_monitor/models/ecu.py
from dataclasses import dataclass


@dataclass(frozen=True)
class EcuInfo:
    ecu_id: str | None = None
    version: str | None = None
    inverters_registered: int | None = None
    inverters_online: int | None = None
    lifetime_energy_wh: int | None = None
    today_energy_wh: int | None = None
    last_power_w: int | None = None
    ethernet_mac: str | None = None
    wireless_mac: str | None = None
    timezone: str | None = None   # zone name reported by the ECU, e.g. Etc/GMT-8
    raw: bytes = b""
