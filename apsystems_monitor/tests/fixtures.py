# tests/fixtures.py
"""Frames captured from a live ECU-R (firmware ECU_R_1.2.18/1.2.19) with two QS1 inverters."""

ECU_INFO_NIGHT = bytes([
    65, 80, 83, 49, 49, 48, 48, 57, 52, 48, 48, 48, 49, 50, 49, 54, 48, 48, 48, 48, 49, 49, 49, 49,
    49, 48, 49, 0, 0, 166, 159, 0, 0, 0, 0, 0, 0, 1, 140, 208, 208, 208, 208, 208, 208, 208, 0, 2,
    0, 0, 49, 48, 48, 49, 50, 69, 67, 85, 95, 82, 95, 49, 46, 50, 46, 49, 56, 48, 48, 57, 69, 116,
    99, 47, 71, 77, 84, 45, 56, 128, 151, 27, 1, 164, 227, 0, 0, 0, 0, 0, 0, 69, 78, 68, 10,
])

ECU_INFO_DAY = bytes([
    65, 80, 83, 49, 49, 48, 48, 57, 52, 48, 48, 48, 49, 50, 49, 54, 48, 48, 48, 48, 49, 49, 49, 49,
    49, 48, 49, 0, 0, 166, 243, 0, 0, 1, 36, 0, 0, 0, 69, 208, 208, 208, 208, 208, 208, 208, 0, 2,
    0, 2, 49, 48, 48, 49, 50, 69, 67, 85, 95, 82, 95, 49, 46, 50, 46, 49, 57, 48, 48, 57, 69, 116,
    99, 47, 71, 77, 84, 45, 56, 128, 151, 27, 1, 164, 227, 0, 0, 0, 0, 0, 0, 69, 78, 68, 10,
])

ARRAY_INFO_NIGHT = bytes([
    65, 80, 83, 49, 49, 48, 48, 55, 53, 48, 48, 48, 50, 48, 48, 48, 49, 0, 2, 32, 33, 16, 24, 34,
    82, 16, 128, 16, 0, 3, 0, 0, 0, 48, 51, 0, 0, 0, 100, 0, 0, 0, 0, 0, 0, 0, 2, 0, 3, 128, 16, 0,
    3, 0, 1, 0, 48, 51, 0, 0, 0, 100, 0, 0, 0, 0, 0, 0, 0, 2, 0, 2, 69, 78, 68, 10,
])

ARRAY_INFO_DAY = bytes([
    65, 80, 83, 49, 49, 48, 48, 55, 53, 48, 48, 48, 50, 48, 48, 48, 49, 0, 2, 32, 33, 16, 32, 20,
    24, 5, 128, 16, 0, 3, 0, 0, 1, 48, 51, 1, 243, 0, 119, 0, 57, 0, 228, 0, 56, 0, 60, 0, 60, 128,
    16, 0, 3, 0, 1, 1, 48, 51, 1, 243, 0, 118, 0, 55, 0, 229, 0, 55, 0, 57, 0, 56, 69, 78, 68, 10,
])

# same as ARRAY_INFO_DAY but with a 0x0A inside the payload, which trips
# any reader that scans for the newline instead of trusting the header
ARRAY_INFO_EMBEDDED_NEWLINE = bytes([
    65, 80, 83, 49, 49, 48, 48, 55, 53, 48, 48, 48, 50, 48, 48, 48, 49, 0, 2, 32, 33, 16, 32, 20,
    24, 5, 128, 16, 0, 3, 0, 0, 1, 48, 51, 1, 243, 0, 119, 0, 57, 0, 228, 0, 56, 0, 60, 0, 10, 128,
    16, 0, 3, 0, 1, 1, 48, 51, 1, 243, 0, 118, 0, 55, 0, 229, 0, 55, 0, 57, 0, 56, 69, 78, 68, 10,
])

SIGNAL_INFO_DAY = bytes([
    65, 80, 83, 49, 49, 48, 48, 51, 50, 48, 48, 51, 48, 48, 48, 128, 16, 0, 3, 0, 0, 213, 128, 16,
    0, 3, 0, 1, 223, 69, 78, 68, 10,
])

ECU_ID = "216000011111"


def build_frame(payload: bytes) -> bytes:
    """Wrap ``payload`` (everything after the length field) in a valid frame."""
    total = 9 + len(payload) + 4
    return b"APS11" + f"{total - 1:04d}".encode("ascii") + payload + b"END\n"


def inverter_record(
    inv_id: bytes = bytes.fromhex("801000030000"),
    online: int = 1,
    model: bytes = b"3",
    tail: bytes = b"",
    size: int = 23,
) -> bytes:
    """Build an inverter record: id, online, '0', model, then ``tail`` padded with zeros."""
    record = inv_id + bytes([online]) + b"0" + model + tail
    return record + bytes(max(0, size - len(record)))
