# apsystems_monitor/protocol/commands.py
"""ASCII request strings understood by the ECU-R."""

CMD_ECU_INFO = "APS1100160001END\n"
CMD_INVERTER_INFO_PREFIX = "APS1100280002"
CMD_INVERTER_SIGNAL_PREFIX = "APS1100280030"
CMD_SUFFIX = "END\n"

ECU_ID_LENGTH = 12


def _with_ecu_id(prefix: str, ecu_id: str) -> bytes:
    if not ecu_id or len(ecu_id) != ECU_ID_LENGTH or not ecu_id.isascii():
        raise ValueError(f"ECU id must be {ECU_ID_LENGTH} ASCII characters, got {ecu_id!r}")
    return f"{prefix}{ecu_id}{CMD_SUFFIX}".encode("ascii")


def ecu_info_command() -> bytes:
    return CMD_ECU_INFO.encode("ascii")


def inverter_info_command(ecu_id: str) -> bytes:
    return _with_ecu_id(CMD_INVERTER_INFO_PREFIX, ecu_id)


def inverter_signal_command(ecu_id: str) -> bytes:
    return _with_ecu_id(CMD_INVERTER_SIGNAL_PREFIX, ecu_id)
