"""Headers of DCS (Data Collection System) files and payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import ClassVar

_DECIMAL = re.compile(rb"\s*([+-]?\d+)")
_HEX = re.compile(rb"\s*([0-9a-fA-F]+)")


class DCSError(ValueError):
    """A DCS header is truncated or holds a malformed field."""


class _Cursor:
    def __init__(self, buf: bytes | bytearray | memoryview) -> None:
        self._buf = bytes(buf)
        self.pos = 0

    def take(self, n: int, field: str) -> bytes:
        if len(self._buf) - self.pos < n:
            raise DCSError(f"buffer too short for {field}")
        chunk = self._buf[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def text(self, n: int, field: str) -> str:
        return self.take(n, field).decode("latin-1")

    def decimal(self, n: int, field: str) -> int:
        return _parse_decimal(self.take(n, field), field)


def _parse_decimal(raw: bytes, field: str) -> int:
    match = _DECIMAL.match(raw)
    if match is None:
        raise DCSError(f"invalid number in {field}: {raw!r}")
    return int(match.group(1))


@dataclass(frozen=True)
class FileHeader:
    """Header at the beginning of a DCS file, a container of DCS payloads."""

    SIZE: ClassVar[int] = 68

    name: str
    length: int
    misc1: str
    misc2: bytes

    @classmethod
    def from_bytes(cls, buf: bytes | bytearray | memoryview) -> "FileHeader":
        """Parse the first ``FileHeader.SIZE`` bytes of ``buf``."""
        cur = _Cursor(buf)
        name = cur.text(32, "file name")
        length = cur.decimal(8, "payload length")
        misc1 = cur.text(20, "misc1")
        misc2 = cur.take(8, "misc2")
        return cls(name=name, length=length, misc1=misc1, misc2=misc2)


@dataclass(frozen=True)
class Header:
    """Header of a single DCS payload."""

    SIZE: ClassVar[int] = 37

    address: int
    time: datetime
    failure: str
    signal_strength: int
    frequency_offset: int
    modulation_index: str
    data_quality: str
    receive_channel: int
    spacecraft: str
    data_source_code: str
    data_length: int

    @classmethod
    def from_bytes(cls, buf: bytes | bytearray | memoryview) -> "Header":
        """Parse the first ``Header.SIZE`` bytes of ``buf``."""
        cur = _Cursor(buf)

        raw_address = cur.take(8, "address")
        match = _HEX.match(raw_address)
        if match is None:
            raise DCSError(f"invalid DCP address: {raw_address!r}")
        address = int(match.group(1), 16)

        # YYDDDHHMMSS, the day being the day of the year.
        year = cur.decimal(2, "year")
        day = cur.decimal(3, "day")
        hour = cur.decimal(2, "hour")
        minute = cur.decimal(2, "minute")
        second = cur.decimal(2, "second")
        start = datetime(2000 + year, 1, 1, tzinfo=timezone.utc) - timedelta(days=1)
        time = start + timedelta(days=day, hours=hour, minutes=minute, seconds=second)

        failure = cur.text(1, "failure code")
        signal_strength = cur.decimal(2, "signal strength")

        raw_offset = cur.take(2, "frequency offset")
        if raw_offset[:1] in (b"+", b"-") and raw_offset[1:2] == b"A":
            frequency_offset = 0
        else:
            frequency_offset = _parse_decimal(raw_offset, "frequency offset")

        modulation_index = cur.text(1, "modulation index")
        data_quality = cur.text(1, "data quality")
        receive_channel = cur.decimal(3, "receive channel")
        spacecraft = cur.text(1, "spacecraft")
        data_source_code = cur.text(2, "data source code")
        data_length = cur.decimal(5, "data length")

        return cls(
            address=address,
            time=time,
            failure=failure,
            signal_strength=signal_strength,
            frequency_offset=frequency_offset,
            modulation_index=modulation_index,
            data_quality=data_quality,
            receive_channel=receive_channel,
            spacecraft=spacecraft,
            data_source_code=data_source_code,
            data_length=data_length,
        )