"""CRC-16 used on LRIT/HRIT transport protocol data units."""

from __future__ import annotations


def _build_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        value = byte << 8
        for _ in range(8):
            value = ((value << 1) ^ 0x1021) if value & 0x8000 else (value << 1)
            value &= 0xFFFF
        table.append(value)
    return tuple(table)


_TABLE = _build_table()


def crc(data: bytes | bytearray | memoryview) -> int:
    """Return the CRC-16 (polynomial 0x1021, initial value 0xFFFF) of ``data``."""
    value = 0xFFFF
    for byte in bytes(data):
        value = ((value << 8) & 0xFFFF) ^ _TABLE[(value >> 8) ^ byte]
    return value