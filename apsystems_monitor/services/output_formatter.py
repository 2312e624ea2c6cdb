# apsystems_monitor/services/output_formatter.py

from __future__ import annotations

import json
from typing import Optional

from tabulate import tabulate

from apsystems_monitor.models.ecu import EcuInfo
from apsystems_monitor.models.inverter import ArrayInfo, InverterRecord
from apsystems_monitor.models.response import EcuResponse
from apsystems_monitor.models.signal import InverterSignal, SignalInfo

HEADERS = ["Parameter", "Value", "Unit"]
TABLE_FMT = "psql"


def _ecu_to_dict(info: EcuInfo | None) -> Optional[dict]:
    if info is None:
        return None
    return {
        "ecu_id": info.ecu_id,
        "version": info.version,
        "inverters_registered": info.inverters_registered,
        "inverters_online": info.inverters_online,
        "lifetime_energy_wh": info.lifetime_energy_wh,
        "today_energy_wh": info.today_energy_wh,
        "last_power_w": info.last_power_w,
        "ethernet_mac": info.ethernet_mac,
        "wireless_mac": info.wireless_mac,
        "timezone": info.timezone,
    }


def _inverter_to_dict(inv: InverterRecord) -> dict:
    payload = {"id": inv.id, "online": inv.online, "model": inv.model}
    for name in ("frequency_hz", "temperature_c", "voltage_a_v"):
        if hasattr(inv, name):
            payload[name] = getattr(inv, name)
    for channel, watts in inv.channel_powers().items():
        payload[f"power_{channel.lower()}_w"] = watts
    return payload


def _array_to_dict(info: ArrayInfo | None) -> Optional[dict]:
    if info is None:
        return None
    return {
        "timestamp": info.timestamp.isoformat() if info.timestamp else None,
        "inverters": [_inverter_to_dict(inv) for inv in info.inverters],
    }


def _signal_to_dict(info: SignalInfo | None) -> Optional[dict]:
    if info is None:
        return None
    return {
        "status": info.status,
        "inverters": [{"id": s.id, "signal": s.signal} for s in info.inverters],
    }


def response_to_dict(response: EcuResponse) -> dict:
    return {
        "ecu_info": _ecu_to_dict(response.ecu_info),
        "array_info": _array_to_dict(response.array_info),
        "signal_info": _signal_to_dict(response.signal_info),
    }


def emit_json(response: EcuResponse) -> None:
    print(json.dumps(response_to_dict(response), indent=2))


# ----------------------------------------------------------------------------

def _fmt(value, spec: str = "") -> str:
    if value is None:
        return "n/a"
    return format(value, spec)


def _kwh(wh: int | None, spec: str) -> str:
    return "n/a" if wh is None else format(wh / 1000, spec)


def ecu_table(info: EcuInfo, array_info: ArrayInfo | None = None) -> str:
    last_update = None
    if array_info is not None and array_info.timestamp is not None:
        last_update = array_info.timestamp.strftime("%Y-%m-%d %H:%M:%S")
    rows = [
        ["ECU ID", _fmt(info.ecu_id), ""],
        ["Software version", _fmt(info.version), ""],
        ["Inverters", f"{_fmt(info.inverters_online)}/{_fmt(info.inverters_registered)}", "Online/Registered"],
        ["Lifetime Production", _kwh(info.lifetime_energy_wh, ".1f"), "kWh"],
        ["Today's Production", _kwh(info.today_energy_wh, ".3f"), "kWh"],
        ["Current Power", _fmt(info.last_power_w), "W"],
        ["Ethernet MAC", _fmt(info.ethernet_mac), ""],
        ["WiFi MAC", _fmt(info.wireless_mac), ""],
        ["Last update", _fmt(last_update), ""],
    ]
    return tabulate(rows, headers=HEADERS, tablefmt=TABLE_FMT, disable_numparse=True)


def inverter_table(inv: InverterRecord, signal: InverterSignal | None = None) -> str:
    rows = [
        ["Model", inv.model, ""],
        ["Online", "yes" if inv.online else "no", ""],
        ["Signal", _fmt(signal.signal_pct if signal else None, ".1f"), "%"],
        ["Frequency", _fmt(getattr(inv, "frequency_hz", None), ".2f"), "Hz"],
        ["Voltage", _fmt(getattr(inv, "voltage_a_v", None)), "V"],
        ["Temperature", _fmt(getattr(inv, "temperature_c", None)), "Celsius"],
    ]
    for channel, watts in inv.channel_powers().items():
        rows.append([f"Power{channel}", str(watts), "W"])
    return tabulate(rows, headers=HEADERS, tablefmt=TABLE_FMT, disable_numparse=True)


def signal_table(info: SignalInfo) -> str:
    rows = [[s.id, s.signal, f"{s.signal_pct:.1f}"] for s in info.inverters]
    return tabulate(rows, headers=["Inverter", "Signal", "%"], tablefmt=TABLE_FMT, disable_numparse=True)


def emit_human(response: EcuResponse) -> None:
    if response.ecu_info is not None:
        print("ECU information:")
        print(ecu_table(response.ecu_info, response.array_info))

    signals = response.signal_info.inverters if response.signal_info else ()
    if response.array_info is not None:
        # the protocol only correlates signal entries by position
        for n, inv in enumerate(response.array_info.inverters):
            signal = signals[n] if n < len(signals) else None
            print(f"\nInverter {inv.id}:")
            print(inverter_table(inv, signal))
    elif response.signal_info is not None:
        print("\nInverter signal:")
        print(signal_table(response.signal_info))
