import pytest

from goeskit.emwin import Assembler, File
from goeskit.qbt import Packet


def make_packet(filename, number, total, payload=b""):
    head = (
        bytes(6)
        + b"/PF" + filename.ljust(12)
        + b"/PN" + str(number).encode().ljust(6)
        + b"/PT" + str(total).encode().ljust(6)
        + b"/CS" + b"12345"
    )
    head = head.ljust(86, b" ")
    return Packet(head + payload.ljust(1024, b"\x00") + b"/FD   ")


def test_file_requires_packets():
    with pytest.raises(ValueError):
        File([])


def test_file_name_and_extension():
    f = File([make_packet(b"ZONEKSTX.TXT", 1, 1)])
    assert f.filename == "ZONEKSTX.TXT"
    assert f.extension == "txt"


def test_text_data_trims_trailing_nuls():
    f = File([make_packet(b"A.TXT", 1, 2, b"A" * 1024), make_packet(b"A.TXT", 2, 2, b"B" * 10)])
    assert f.data() == b"A" * 1024 + b"B" * 10


def test_zis_data_cut_after_end_record():
    content = b"xyz" * 10 + b"PK\x05\x06" + b"\x01" * 18
    f = File([make_packet(b"FILE.ZIS", 1, 1, content)])
    assert f.data() == content


def test_assembler_completes_file():
    asm = Assembler()
    p1 = make_packet(b"A.TXT", 1, 2, b"one")
    p2 = make_packet(b"A.TXT", 2, 2, b"two")
    assert asm.process(p1) is None
    f = asm.process(p2)
    assert f.filename == "A.TXT"
    assert f.packets == [p1, p2]


def test_assembler_single_packet_file():
    p = make_packet(b"B.TXT", 1, 1, b"only")
    assert asm_process_all([p])[-1].data() == b"only"


def asm_process_all(packets):
    asm = Assembler()
    return [asm.process(p) for p in packets]


def test_assembler_ignores_out_of_order_start():
    p1 = make_packet(b"A.TXT", 1, 2, b"one")
    p2 = make_packet(b"A.TXT", 2, 2, b"two")
    results = asm_process_all([p2, p1, p2])
    assert results[0] is None
    assert results[1] is None
    assert results[2].packets == [p1, p2]


def test_assembler_resets_on_repeat():
    p1 = make_packet(b"A.TXT", 1, 2, b"one")
    p2 = make_packet(b"A.TXT", 2, 2, b"two")
    results = asm_process_all([p1, p1, p2])
    assert results == [None, None, None]


def test_assembler_keeps_files_apart():
    a1 = make_packet(b"A.TXT", 1, 2, b"a1")
    b1 = make_packet(b"B.TXT", 1, 2, b"b1")
    a2 = make_packet(b"A.TXT", 2, 2, b"a2")
    b2 = make_packet(b"B.TXT", 2, 2, b"b2")
    results = asm_process_all([a1, b1, a2, b2])
    assert results[2].packets == [a1, a2]
    assert results[3].packets == [b1, b2]