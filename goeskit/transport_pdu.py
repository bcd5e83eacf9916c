"""Transport protocol data unit (CCSDS source packet)."""

from __future__ import annotations

from .crc import crc as _crc


class TransportPDU:
    """A source packet accumulated incrementally from a byte stream."""

    HEADER_BYTES = 6
    DATA_BYTES = 8192

    def __init__(self) -> None:
        self.header = bytearray()
        self.data = bytearray()

    def read(self, buf: bytes | bytearray | memoryview) -> int:
        """Consume bytes from ``buf``; return how many were used."""
        view = memoryview(bytes(buf))
        nread = 0
        if len(self.header) < self.HEADER_BYTES:
            take = min(self.HEADER_BYTES - len(self.header), len(view))
            self.header += view[:take]
            nread += take
        if nread < len(view) and self.header_complete():
            missing = self.length - len(self.data)
            if missing > 0:
                take = min(missing, len(view) - nread)
                self.data += view[nread:nread + take]
                nread += take
        return nread

    def header_complete(self) -> bool:
        return len(self.header) == self.HEADER_BYTES

    def data_complete(self) -> bool:
        return self.header_complete() and len(self.data) == self.length

    @property
    def version(self) -> int:
        return (self.header[0] >> 5) & 0x7

    @property
    def type(self) -> int:
        return (self.header[0] >> 4) & 0x1

    @property
    def secondary_header_flag(self) -> int:
        return (self.header[0] >> 3) & 0x1

    @property
    def apid(self) -> int:
        return ((self.header[0] & 0x7) << 8) | self.header[1]

    @property
    def sequence_flag(self) -> int:
        return (self.header[2] >> 6) & 0x3

    @property
    def sequence_count(self) -> int:
        return ((self.header[2] & 0x3F) << 8) | self.header[3]

    @property
    def length(self) -> int:
        """Length of the user data in bytes (the header field plus one)."""
        return ((self.header[4] << 8) | self.header[5]) + 1

    @property
    def crc(self) -> int:
        n = self.length
        return (self.data[n - 2] << 8) | self.data[n - 1]

    def verify_crc(self) -> bool:
        n = self.length
        if n < 2 or len(self.data) < n:
            return False
        return _crc(self.data[: n - 2]) == self.crc