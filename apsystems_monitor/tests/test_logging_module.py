import json
import logging

from apsystems_monitor.logging import ConsoleLog, RunLogEntry, StructuredLog
from apsystems_monitor.protocol.decoders import decode_array_info, decode_ecu_info

from .fixtures import ARRAY_INFO_DAY, ECU_INFO_NIGHT


def test_structured_log_writes_json(tmp_path):
    log_path = tmp_path / "logs" / "structured.log"
    entry = RunLogEntry(
        timestamp="2024-01-01T00:00:00Z",
        host="10.0.0.5",
        ecu_info=decode_ecu_info(ECU_INFO_NIGHT),
        array_info=decode_array_info(ARRAY_INFO_DAY, "Europe/Amsterdam"),
        signal_info=None,
        error="could not get inverter signal strength information",
    )
    StructuredLog(str(log_path), enabled=True).write(entry)

    payload = json.loads(log_path.read_text(encoding="utf-8").strip())
    assert payload["timestamp"] == entry.timestamp
    assert payload["ecu_info"]["ecu_id"] == "216000011111"
    assert payload["ecu_info"]["raw"] == ECU_INFO_NIGHT.hex().upper()
    assert payload["array_info"]["timestamp"] == "2021-10-20T14:18:05+02:00"
    assert payload["array_info"]["inverters"][0]["model"] == "QS1"
    assert payload["array_info"]["inverters"][0]["power_d_w"] == 60
    assert payload["signal_info"] is None
    assert payload["error"].startswith("could not get")


def test_structured_log_disabled_without_path(tmp_path):
    log = StructuredLog(None, enabled=True)
    assert not log.enabled
    log.write(RunLogEntry("t", None, None, None, None))


def test_console_log_quiet_skips_handlers():
    root = logging.getLogger()
    orig_handlers = list(root.handlers)
    orig_level = root.level
    try:
        log = ConsoleLog(level="INFO", quiet=True).setup()
        assert log.name == "apsystems"
        assert root.handlers == []
    finally:
        root.handlers.clear()
        root.handlers.extend(orig_handlers)
        root.setLevel(orig_level)
