"""CCSDS pseudo-random sequence removal."""

from __future__ import annotations

FRAME_BYTES = 1020


def _build_table() -> bytes:
    lfsr = 0xFF
    out = bytearray()
    for _ in range(FRAME_BYTES):
        value = 0
        for _ in range(8):
            value = (value << 1) | (lfsr & 1)
            bit = ((lfsr >> 7) ^ (lfsr >> 5) ^ (lfsr >> 3) ^ lfsr) & 1
            lfsr = (lfsr >> 1) | (bit << 7)
        out.append(value)
    return bytes(out)


class Derandomizer:
    """XORs a frame with the sequence from h(x) = x^8 + x^7 + x^5 + x^3 + 1."""

    def __init__(self) -> None:
        self.table = _build_table()

    def run(self, data: bytes | bytearray) -> bytes:
        if len(data) != len(self.table):
            raise ValueError(f"expected {len(self.table)} bytes, got {len(data)}")
        return bytes(a ^ b for a, b in zip(data, self.table))