"""QBT packets carried in EMWIN fragments of the LRIT stream."""

from __future__ import annotations

import re
from dataclasses import dataclass

FRAGMENT_BYTES = 836
PACKET_BYTES = 1116

_UNSIGNED = re.compile(rb"\s*\+?(\d+)")

# Offsets and values that a QBT packet starts with.
_PREFIX = (
    (0, 0x00), (1, 0x00), (2, 0x00), (3, 0x00), (4, 0x00), (5, 0x00),
    (6, ord("/")), (7, ord("P")), (8, ord("F")),
    (21, ord("/")), (22, ord("P")), (23, ord("N")),
    (30, ord("/")), (31, ord("P")), (32, ord("T")),
    (39, ord("/")), (40, ord("C")), (41, ord("S")),
)


def diff_with_wrap(a: int, b: int, n: int) -> int:
    """Distance from ``a`` forward to ``b`` for counters that wrap at ``n``."""
    if not (0 <= a < n and 0 <= b < n):
        raise ValueError(f"counters must be in [0, {n})")
    return b - a if a <= b else n - a + b


def is_packet_prefix(buf: bytes | bytearray, pos: int) -> bool:
    """Whether a QBT packet may start at ``pos``.

    Bytes past the end of ``buf`` are not known yet and count as matching.
    """
    size = len(buf)
    return all(pos + off >= size or buf[pos + off] == value for off, value in _PREFIX)


def _parse_unsigned(raw: bytes) -> int:
    match = _UNSIGNED.match(raw)
    if match is None:
        raise ValueError(f"invalid number: {raw!r}")
    return int(match.group(1))


@dataclass(frozen=True)
class Fragment:
    """Data portion of one EMWIN S_PDU, zero padded to 836 bytes."""

    counter: int
    data: bytes

    def __post_init__(self) -> None:
        if not 0 <= self.counter < 1 << 16:
            raise ValueError("counter must fit in 16 bits")
        if len(self.data) > FRAGMENT_BYTES:
            raise ValueError("range too large")
        object.__setattr__(self, "data", bytes(self.data).ljust(FRAGMENT_BYTES, b"\x00"))


@dataclass(frozen=True)
class Packet:
    """A 1116-byte QBT packet."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != PACKET_BYTES:
            raise ValueError(f"QBT packet must be {PACKET_BYTES} bytes")
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def filename(self) -> str:
        name = self.data[9:21].decode("latin-1")
        return name[: name.find(".") + 4]

    @property
    def packet_number(self) -> int:
        return _parse_unsigned(self.data[24:30])

    @property
    def packet_total(self) -> int:
        return _parse_unsigned(self.data[33:39])

    @property
    def payload(self) -> bytes:
        return self.data[86:1110]


class Assembler:
    """Reassembles QBT packets from consecutive fragments.

    A fragment holds part of one or two QBT packets.
    """

    def __init__(self) -> None:
        self._counter = 0
        self._pending = bytearray()

    def process(self, fragment: Fragment) -> Packet | None:
        """Add a fragment; return a packet once one is complete."""
        skip = diff_with_wrap(self._counter, fragment.counter, 1 << 16)
        self._counter = fragment.counter
        if skip > 1:
            self._pending.clear()

        self._pending += fragment.data

        start = next(
            (pos for pos in range(len(self._pending)) if is_packet_prefix(self._pending, pos)),
            len(self._pending),
        )
        del self._pending[:start]

        if len(self._pending) >= PACKET_BYTES:
            packet = Packet(bytes(self._pending[:PACKET_BYTES]))
            del self._pending[:PACKET_BYTES]
            return packet
        return None