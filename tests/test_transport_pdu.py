from goeskit.crc import crc
from goeskit.transport_pdu import TransportPDU


def make_packet(apid=0x123, flag=3, seq=0x1234, payload=b"hello"):
    data = payload + crc(payload).to_bytes(2, "big")
    length = len(data) - 1
    header = bytes([
        (apid >> 8) & 0x7,
        apid & 0xFF,
        (flag << 6) | ((seq >> 8) & 0x3F),
        seq & 0xFF,
        length >> 8,
        length & 0xFF,
    ])
    return header + data


def test_fields_parsed():
    pdu = TransportPDU()
    raw = make_packet()
    assert pdu.read(raw) == len(raw)
    assert pdu.data_complete()
    assert pdu.apid == 0x123
    assert pdu.sequence_flag == 3
    assert pdu.sequence_count == 0x1234
    assert pdu.length == 7
    assert pdu.version == 0
    assert pdu.type == 0
    assert pdu.secondary_header_flag == 0
    assert pdu.verify_crc()


def test_incremental_read():
    raw = make_packet(payload=b"incremental data")
    pdu = TransportPDU()
    total = 0
    for i in range(0, len(raw), 3):
        total += pdu.read(raw[i:i + 3])
    assert total == len(raw)
    assert pdu.data_complete()
    assert bytes(pdu.data) == raw[6:]


def test_read_stops_at_end_of_packet():
    raw = make_packet()
    pdu = TransportPDU()
    assert pdu.read(raw + b"extra") == len(raw)


def test_partial_header():
    pdu = TransportPDU()
    assert pdu.read(b"\x00\x01") == 2
    assert not pdu.header_complete()
    assert not pdu.data_complete()


def test_crc_failure_detected():
    raw = bytearray(make_packet())
    raw[7] ^= 0xFF
    pdu = TransportPDU()
    pdu.read(raw)
    assert not pdu.verify_crc()


def test_short_length_fails_crc():
    pdu = TransportPDU()
    pdu.read(bytes([0, 0, 0, 0, 0, 0, 0xAB]))
    assert pdu.length == 1
    assert not pdu.verify_crc()