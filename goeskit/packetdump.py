"""Decode a soft symbol stream from stdin into five-minute packet files."""

from __future__ import annotations

import argparse
import os
import sys
import time
from typing import BinaryIO

from .packetizer import Packetizer

_ROTATE_SECONDS = 300
_NAME_FORMAT = "packets-%Y-%m-%dT%H:%M:%SZ.raw"


class PacketFileWriter:
    """Appends packets to a file per five-minute window."""

    def __init__(self, path: str | os.PathLike[str] = ".") -> None:
        self.path = os.fspath(path)
        self.current_path: str | None = None
        self._file_time: int | None = None
        self._file: BinaryIO | None = None

    def write(self, packet: bytes, timestamp: float) -> None:
        t = int(timestamp)
        t -= t % _ROTATE_SECONDS
        if t != self._file_time or self._file is None:
            self.close()
            name = time.strftime(_NAME_FORMAT, time.gmtime(t))
            self.current_path = os.path.join(self.path, name)
            self._file = open(self.current_path, "ab")
            self._file_time = t
            print(f"Writing to file: {self.current_path}", flush=True)
        self._file.write(packet)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "PacketFileWriter":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="packetdump",
        description="Decode soft symbols from stdin and write packets to the current directory.",
    )
    parser.parse_args(argv)

    with PacketFileWriter(".") as writer:
        for details in Packetizer(sys.stdin.buffer).packets():
            if details.reed_solomon_bytes > 0:
                print(f"RS corrected {details.reed_solomon_bytes} bytes", file=sys.stderr)
            elif details.reed_solomon_bytes < 0:
                print("RS unable to correct packet; dropping!", file=sys.stderr)
            if details.ok and details.packet is not None:
                writer.write(details.packet, time.time())
    return 0