import pytest

from apsystems_monitor.config import AppConfig, Config

CONF = """
[ecu]
host = 192.168.1.50
port = 8900
timezone = Europe/Amsterdam   # ECU clock zone
cooldown_ms = 50
timeout = 0

[logging]
console_level = debug
debug_modules = apsystems_monitor.protocol, apsystems_monitor.services
structured_enabled = true
structured_path = runs.jsonl
"""


def test_ecu_config(tmp_path):
    conf_path = tmp_path / "aps.conf"
    conf_path.write_text(CONF)
    cfg = Config.load(str(conf_path))
    assert cfg.ecu.host == "192.168.1.50"
    assert cfg.ecu.port == 8900
    assert cfg.ecu.timezone == "Europe/Amsterdam"
    assert cfg.ecu.cooldown == 0.05
    assert cfg.ecu.timeout is None
    assert cfg.logging.debug_modules == ["apsystems_monitor.protocol", "apsystems_monitor.services"]
    assert cfg.logging.structured_enabled is True


def test_defaults_for_empty_file(tmp_path):
    conf_path = tmp_path / "aps.conf"
    conf_path.write_text("")
    cfg = Config.load(str(conf_path))
    assert cfg == AppConfig.default()
    assert cfg.ecu.port == 8899
    assert cfg.ecu.timezone == "UTC"
    assert cfg.ecu.cooldown == 0.025


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load(str(tmp_path / "nope.conf"))


def test_negative_cooldown_rejected(tmp_path):
    conf_path = tmp_path / "aps.conf"
    conf_path.write_text("[ecu]\ncooldown_ms = -1\n")
    with pytest.raises(ValueError):
        Config.load(str(conf_path))
