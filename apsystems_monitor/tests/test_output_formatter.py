import json

from apsystems_monitor.models.response import EcuResponse
from apsystems_monitor.protocol.decoders import decode_array_info, decode_ecu_info, decode_signal_info
from apsystems_monitor.services.output_formatter import emit_human, emit_json, response_to_dict

from .fixtures import ARRAY_INFO_DAY, ECU_INFO_DAY, SIGNAL_INFO_DAY


def _response(**overrides):
    values = dict(
        ecu_info=decode_ecu_info(ECU_INFO_DAY),
        array_info=decode_array_info(ARRAY_INFO_DAY, "Europe/Amsterdam"),
        signal_info=decode_signal_info(SIGNAL_INFO_DAY),
    )
    values.update(overrides)
    return EcuResponse(**values)


def test_response_to_dict():
    payload = response_to_dict(_response())
    assert payload["ecu_info"]["lifetime_energy_wh"] == 4273900
    assert "raw" not in payload["ecu_info"]
    inv = payload["array_info"]["inverters"][1]
    assert inv == {
        "id": "801000030001",
        "online": True,
        "model": "QS1",
        "frequency_hz": 49.9,
        "temperature_c": 18,
        "voltage_a_v": 229,
        "power_a_w": 55,
        "power_b_w": 55,
        "power_c_w": 57,
        "power_d_w": 56,
    }
    assert payload["signal_info"]["inverters"][0] == {"id": "801000030000", "signal": 213}


def test_emit_json(capsys):
    emit_json(_response(signal_info=None))
    payload = json.loads(capsys.readouterr().out)
    assert payload["signal_info"] is None
    assert payload["array_info"]["timestamp"] == "2021-10-20T14:18:05+02:00"


def test_emit_human(capsys):
    emit_human(_response())
    out = capsys.readouterr().out
    assert "ECU information:" in out
    assert "ECU_R_1.2.19" in out
    assert "4273.9" in out          # lifetime kWh
    assert "0.690" in out           # today kWh
    assert "2/2" in out
    assert "2021-10-20 14:18:05" in out
    assert "Inverter 801000030000:" in out
    assert "83.2" in out            # 213 / 2.56


def test_emit_human_without_signal(capsys):
    emit_human(_response(signal_info=None))
    out = capsys.readouterr().out
    assert "n/a" in out


def test_emit_human_signal_only(capsys):
    emit_human(EcuResponse(signal_info=decode_signal_info(SIGNAL_INFO_DAY)))
    out = capsys.readouterr().out
    assert "801000030001" in out
    assert "223" in out
