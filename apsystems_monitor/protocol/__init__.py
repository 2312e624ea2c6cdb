"""Wire-level pieces of the ECU-R protocol: framing, leaf encodings and record decoders."""

from apsystems_monitor.protocol.decoders import (
    decode_array_info,
    decode_ecu_info,
    decode_inverter,
    decode_signal_info,
)
from apsystems_monitor.protocol.encoding import decode_timestamp, hex_string
from apsystems_monitor.protocol.frame import read_frame, validate_frame

__all__ = [
    "decode_array_info",
    "decode_ecu_info",
    "decode_inverter",
    "decode_signal_info",
    "decode_timestamp",
    "hex_string",
    "read_frame",
    "validate_frame",
]
