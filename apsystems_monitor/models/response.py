# apsystems_monitor/models/response.py
from dataclasses import dataclass

from apsystems_monitor.models.ecu import EcuInfo
from apsystems_monitor.models.inverter import ArrayInfo
from apsystems_monitor.models.signal import SignalInfo


@dataclass(frozen=True)
class EcuResponse:
    """One complete poll of the ECU: device, array and signal data."""
    ecu_info: EcuInfo | None = None
    array_info: ArrayInfo | None = None
    signal_info: SignalInfo | None = None
