"""Virtual channel data units and a tool that lists them."""

from __future__ import annotations

import sys
from typing import BinaryIO, Iterator

VCDU_SIZE = 892


class VCDU:
    """A Reed-Solomon decoded virtual channel data unit."""

    def __init__(self, raw: bytes | bytearray) -> None:
        if len(raw) != VCDU_SIZE:
            raise ValueError(f"VCDU must be {VCDU_SIZE} bytes, got {len(raw)}")
        self.raw = bytes(raw)

    @property
    def version(self) -> int:
        return (self.raw[0] & 0xC0) >> 6

    @property
    def scid(self) -> int:
        return ((self.raw[0] & 0x3F) << 2) | ((self.raw[1] & 0xC0) >> 6)

    @property
    def vcid(self) -> int:
        return self.raw[1] & 0x3F

    @property
    def counter(self) -> int:
        return (self.raw[2] << 16) | (self.raw[3] << 8) | self.raw[4]

    @property
    def payload(self) -> bytes:
        return self.raw[6:]


def iter_vcdus(stream: BinaryIO) -> Iterator[VCDU]:
    """Yield every complete VCDU in a binary stream."""
    while True:
        chunk = stream.read(VCDU_SIZE)
        if len(chunk) < VCDU_SIZE:
            return
        yield VCDU(chunk)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("usage: packetinfo FILE", file=sys.stderr)
        return 1
    with open(args[0], "rb") as f:
        for vcdu in iter_vcdus(f):
            print(f"SCID: {vcdu.scid}, VCID: {vcdu.vcid}, counter: {vcdu.counter}")
    return 0