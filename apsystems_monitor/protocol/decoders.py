# apsystems_monitor/protocol/decoders.py

"""
Record decoders for the three ECU-R responses.

All offsets are byte positions inside a validated frame. They are a
bit-exact contract with the ECU firmware; keep them in the constant
blocks below so a firmware revision is a one-place change.

Every decoder raises an EcuError subclass whose ``partial`` holds the
record filled with whatever was decoded before the failure.
"""

from __future__ import annotations

import logging

from apsystems_monitor.errors import EcuError, MalformedBodyError, UnknownInverterTypeError
from apsystems_monitor.models.ecu import EcuInfo
from apsystems_monitor.models.inverter import (
    ArrayInfo,
    InverterRecord,
    OtherInverter,
    Qs1Inverter,
    Yc1000Inverter,
    Yc600Inverter,
)
from apsystems_monitor.models.signal import InverterSignal, SignalInfo
from apsystems_monitor.protocol.encoding import (
    TIMESTAMP_SIZE,
    ascii_int,
    decode_timestamp,
    hex_string,
    uint16_be,
    uint32_be,
)
from apsystems_monitor.protocol.frame import TERMINATOR, validate_frame

log = logging.getLogger(__name__)


# ============================================================================
# ECU info (command 0001)
# ============================================================================
#
# 13-24  ECU id (ASCII)
# 27-30  lifetime energy, 0.1 kWh
# 31-34  last system power, W
# 35-38  today's energy, 0.01 kWh
# 46-47  inverters registered
# 48-49  inverters online
# 52-54  version length VL (ASCII)
# 55     version, VL bytes
#        time-zone length TL (3 ASCII digits), then TL bytes of zone name
#        ethernet MAC (6), wireless MAC (6), END\n

ECU_ID = slice(13, 25)
ECU_LIFETIME_ENERGY = 27
ECU_LAST_POWER = 31
ECU_TODAY_ENERGY = 35
ECU_INVERTERS_REGISTERED = 46
ECU_INVERTERS_ONLINE = 48
ECU_VERSION_LENGTH = slice(52, 55)
ECU_VERSION = 55
ECU_TZ_LENGTH_SIZE = 3
ECU_MAC_SIZE = 6

LIFETIME_ENERGY_SCALE = 100   # 0.1 kWh -> Wh
TODAY_ENERGY_SCALE = 10       # 0.01 kWh -> Wh


def _payload_end(frame: bytes) -> int:
    return len(frame) - len(TERMINATOR)


def _take(frame: bytes, start: int, size: int, what: str) -> bytes:
    if start + size > _payload_end(frame):
        raise MalformedBodyError(f"body too short for {what} at offset {start}")
    return bytes(frame[start:start + size])


def decode_ecu_info(frame: bytes) -> EcuInfo:
    raw = bytes(frame)
    try:
        validate_frame(raw)
    except MalformedBodyError as exc:
        raise exc.with_context("invalid ECU info frame", partial=EcuInfo(raw=raw)) from exc

    fields: dict = {}
    try:
        # fixed-offset block first so a bad trailer still yields these fields
        ecu_id = _take(raw, ECU_ID.start, ECU_ID.stop - ECU_ID.start, "ECU id")
        if not ecu_id.isascii():
            raise MalformedBodyError(f"ECU id is not ASCII: {ecu_id!r}")
        fields["ecu_id"] = ecu_id.decode("ascii")
        fields["lifetime_energy_wh"] = uint32_be(raw, ECU_LIFETIME_ENERGY) * LIFETIME_ENERGY_SCALE
        fields["last_power_w"] = uint32_be(raw, ECU_LAST_POWER)
        fields["today_energy_wh"] = uint32_be(raw, ECU_TODAY_ENERGY) * TODAY_ENERGY_SCALE
        fields["inverters_registered"] = uint16_be(raw, ECU_INVERTERS_REGISTERED)
        fields["inverters_online"] = uint16_be(raw, ECU_INVERTERS_ONLINE)

        version_length = ascii_int(
            _take(raw, ECU_VERSION_LENGTH.start, 3, "version length"), "version length"
        )
        fields["version"] = _take(raw, ECU_VERSION, version_length, "version").decode("ascii", "replace")

        tz_length_at = ECU_VERSION + version_length
        tz_length = ascii_int(
            _take(raw, tz_length_at, ECU_TZ_LENGTH_SIZE, "time zone length"), "time zone length"
        )
        tz_at = tz_length_at + ECU_TZ_LENGTH_SIZE
        fields["timezone"] = _take(raw, tz_at, tz_length, "time zone").decode("ascii", "replace")

        mac_at = tz_at + tz_length
        fields["ethernet_mac"] = hex_string(_take(raw, mac_at, ECU_MAC_SIZE, "ethernet MAC"))
        fields["wireless_mac"] = hex_string(
            _take(raw, mac_at + ECU_MAC_SIZE, ECU_MAC_SIZE, "wireless MAC")
        )
    except MalformedBodyError as exc:
        raise exc.with_context("invalid ECU info body", partial=EcuInfo(raw=raw, **fields)) from exc

    return EcuInfo(raw=raw, **fields)


# ============================================================================
# Inverter records (inside the array info response)
# ============================================================================
#
#  0-5   inverter id
#  6     online flag
#  8     model discriminator, ASCII '1' YC600, '2' YC1000, '3' QS1
#  9-10  frequency, 0.1 Hz
# 11-12  temperature, C + 100
# 13-14  power A      15-16 voltage A
# 17-18  power B      further channels depend on the model

INV_ID = slice(0, 6)
INV_ONLINE = 6
INV_MODEL = 8
INV_FREQUENCY = 9
INV_TEMPERATURE = 11
INV_POWER_A = 13
INV_VOLTAGE_A = 15
INV_POWER_B = 17
QS1_POWER_C = 19
QS1_POWER_D = 21
YC1000_POWER_C = 21
YC1000_POWER_D = 25

INV_MIN_SIZE = 22
FREQUENCY_SCALE = 10
TEMPERATURE_OFFSET = 100

MODEL_YC600 = ord("1")
MODEL_YC1000 = ord("2")
MODEL_QS1 = ord("3")

# bytes each layout must be able to read
_MODEL_MIN_SIZE = {
    MODEL_YC600: INV_POWER_B + 2,
    MODEL_YC1000: YC1000_POWER_D + 2,
    MODEL_QS1: QS1_POWER_D + 2,
}


def _common_measurements(record: bytes) -> dict:
    return dict(
        frequency_hz=uint16_be(record, INV_FREQUENCY) / FREQUENCY_SCALE,
        temperature_c=uint16_be(record, INV_TEMPERATURE) - TEMPERATURE_OFFSET,
        power_a_w=uint16_be(record, INV_POWER_A),
        voltage_a_v=uint16_be(record, INV_VOLTAGE_A),
        power_b_w=uint16_be(record, INV_POWER_B),
    )


def decode_inverter(record: bytes) -> InverterRecord:
    """
    Decode one inverter sub-record.

    An unknown model byte raises UnknownInverterTypeError whose ``partial``
    is an OtherInverter carrying only id and online flag.
    """
    record = bytes(record)
    if len(record) < INV_MIN_SIZE:
        raise MalformedBodyError(
            f"body too short (<{INV_MIN_SIZE} bytes) to parse inverter, got {len(record)}"
        )

    inv_id = hex_string(record[INV_ID])
    online = record[INV_ONLINE] != 0
    model = record[INV_MODEL]

    needed = _MODEL_MIN_SIZE.get(model)
    if needed is None:
        other = OtherInverter(id=inv_id, online=online, discriminator=model)
        raise UnknownInverterTypeError(
            f"unknown inverter type {chr(model)!r} for inverter {inv_id}", partial=other
        )
    if len(record) < needed:
        raise MalformedBodyError(
            f"body too short ({len(record)} bytes) for {chr(model)!r} inverter {inv_id}",
            partial=OtherInverter(id=inv_id, online=online, discriminator=model),
        )

    common = _common_measurements(record)
    if model == MODEL_YC600:
        return Yc600Inverter(id=inv_id, online=online, **common)
    if model == MODEL_YC1000:
        return Yc1000Inverter(
            id=inv_id,
            online=online,
            power_c_w=uint16_be(record, YC1000_POWER_C),
            power_d_w=uint16_be(record, YC1000_POWER_D),
            **common,
        )
    return Qs1Inverter(
        id=inv_id,
        online=online,
        power_c_w=uint16_be(record, QS1_POWER_C),
        power_d_w=uint16_be(record, QS1_POWER_D),
        **common,
    )


# ============================================================================
# Array info (command 0002)
# ============================================================================
#
# 17-18  number of inverters
# 19-25  timestamp (hex digits read as decimal)
# 26-    one 23-byte record per inverter

ARRAY_INVERTER_COUNT = 17
ARRAY_TIMESTAMP = 19
ARRAY_RECORDS = 26
ARRAY_RECORD_SIZE = 23


def decode_array_info(frame: bytes, tz: str | None = "") -> ArrayInfo:
    raw = bytes(frame)
    try:
        validate_frame(raw)
        timestamp = decode_timestamp(
            raw[ARRAY_TIMESTAMP:ARRAY_TIMESTAMP + TIMESTAMP_SIZE], tz
        )
        count = uint16_be(raw, ARRAY_INVERTER_COUNT)
    except EcuError as exc:
        raise exc.with_context("invalid array info frame", partial=ArrayInfo(raw=raw)) from exc

    if ARRAY_RECORDS + count * ARRAY_RECORD_SIZE > _payload_end(raw):
        raise MalformedBodyError(
            f"body too short for {count} inverters ({len(raw)} bytes)",
            partial=ArrayInfo(timestamp=timestamp, raw=raw),
        )

    inverters: list[InverterRecord] = []
    for i in range(count):
        start = ARRAY_RECORDS + i * ARRAY_RECORD_SIZE
        # the window runs to the end of the payload: YC1000 channel D sits
        # past the nominal 23 bytes but never inside the terminator
        try:
            inverters.append(decode_inverter(raw[start:_payload_end(raw)]))
        except EcuError as exc:
            raise exc.with_context(
                f"could not parse inverter {i + 1} from body",
                partial=ArrayInfo(timestamp=timestamp, inverters=tuple(inverters), raw=raw),
            ) from exc

    log.debug("Decoded array info: %d inverters at %s", len(inverters), timestamp)
    return ArrayInfo(timestamp=timestamp, inverters=tuple(inverters), raw=raw)


# ============================================================================
# Inverter signal info (command 0030)
# ============================================================================
#
# 13-14  status (ASCII)
# 15-    7 bytes per inverter: 6-byte id, 1-byte zigbee strength

SIGNAL_STATUS = slice(13, 15)
SIGNAL_ENTRIES = 15
SIGNAL_ENTRY_SIZE = 7
SIGNAL_ID_SIZE = 6
SIGNAL_OVERHEAD = SIGNAL_ENTRIES + len(TERMINATOR)


def decode_signal_info(frame: bytes) -> SignalInfo:
    raw = bytes(frame)
    try:
        validate_frame(raw)
        if len(raw) < SIGNAL_OVERHEAD:
            raise MalformedBodyError(f"body too short for signal info ({len(raw)} bytes)")
        status = ascii_int(raw[SIGNAL_STATUS], "status")
    except MalformedBodyError as exc:
        raise exc.with_context("invalid signal info frame", partial=SignalInfo(raw=raw)) from exc

    count, remainder = divmod(len(raw) - SIGNAL_OVERHEAD, SIGNAL_ENTRY_SIZE)
    if remainder:
        raise MalformedBodyError(
            f"signal entries are not a multiple of {SIGNAL_ENTRY_SIZE} bytes "
            f"({remainder} trailing bytes)",
            partial=SignalInfo(status=status, raw=raw),
        )

    entries = []
    for i in range(count):
        at = SIGNAL_ENTRIES + i * SIGNAL_ENTRY_SIZE
        entries.append(
            InverterSignal(
                id=hex_string(raw[at:at + SIGNAL_ID_SIZE]),
                signal=raw[at + SIGNAL_ID_SIZE],
            )
        )

    return SignalInfo(status=status, inverters=tuple(entries), raw=raw)
