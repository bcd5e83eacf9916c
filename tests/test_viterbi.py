import pytest

from goeskit.viterbi import Viterbi

SYNC = bytes([0x1A, 0xCF, 0xFC, 0x1D])


def to_soft(encoded, bits):
    out = bytearray()
    for i in range(bits):
        out.append(255 if (encoded[i // 8] >> (7 - i % 8)) & 1 else 0)
    return out


def test_encode_length():
    assert Viterbi().encode_length(4) == 2 * (32 + 6)


def test_encoded_sync_word():
    assert Viterbi().encode(SYNC)[:8] == (0x035D49C24FF2686B).to_bytes(8, "big")


def test_round_trip():
    v = Viterbi()
    msg = b"viterbi round trip"
    bits = v.encode_length(len(msg))
    soft = to_soft(v.encode(msg), bits)
    assert v.decode_soft(soft, bits) == msg
    assert v.compare_soft(soft, msg) == 0


def test_corrects_errors():
    v = Viterbi()
    msg = bytes(range(40))
    bits = v.encode_length(len(msg))
    soft = to_soft(v.encode(msg), bits)
    for pos in (10, 80, 160, 300, 500):
        soft[pos] ^= 0xFF
    assert v.decode_soft(soft, bits) == msg
    assert v.compare_soft(soft, msg) == 5


def test_too_short():
    with pytest.raises(ValueError):
        Viterbi().decode_soft(b"\x00" * 4, 10)