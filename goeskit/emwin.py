"""EMWIN files assembled from QBT packets."""

from __future__ import annotations

from .qbt import Packet

_ZIP_END_SIGNATURE = b"PK\x05\x06"
_ZIP_END_RECORD = 22


class File:
    """An EMWIN file made of its QBT packets in order."""

    def __init__(self, packets: list[Packet]) -> None:
        if not packets:
            raise ValueError("no packets")
        self.packets = list(packets)

    @property
    def filename(self) -> str:
        return self.packets[0].filename

    @property
    def extension(self) -> str:
        name = self.filename
        return name[name.find(".") + 1:].lower()

    def data(self) -> bytes:
        """Contents of the file with the padding of its last packet removed."""
        out = b"".join(packet.payload for packet in self.packets)
        if self.extension == "zis":
            # Cut after the zip end-of-central-directory record.
            end = len(out) - _ZIP_END_RECORD
            while end >= 0 and out[end:end + 4] != _ZIP_END_SIGNATURE:
                end -= 1
            return out[: end + _ZIP_END_RECORD]
        return out.rstrip(b"\x00")


class Assembler:
    """Collects consecutive QBT packets per file name."""

    def __init__(self) -> None:
        self._pending: dict[str, list[Packet]] = {}

    def process(self, packet: Packet) -> File | None:
        """Add a packet; return the file once all its packets are in."""
        name = packet.filename
        packets = self._pending.setdefault(name, [])
        last = packets[-1].packet_number if packets else 0
        if packet.packet_number != last + 1:
            packets.clear()
            return None

        packets.append(packet)
        if len(packets) == packet.packet_total:
            del self._pending[name]
            return File(packets)
        return None