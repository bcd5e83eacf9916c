import random

import pytest

from goeskit.correlator import (
    ENCODED_SYNC_WORDS,
    SYNC_WORD,
    Correlation,
    CorrelationType,
    compute_sync_words,
    correlate,
    nrzm_encode,
)


def _soft(word: int) -> bytes:
    return bytes(255 if (word >> (63 - k)) & 1 else 0 for k in range(64))


def _noise(n: int, seed: int = 1) -> bytearray:
    rng = random.Random(seed)
    return bytearray(rng.choice((0, 255)) for _ in range(n))


def test_compute_sync_words_matches_table():
    assert compute_sync_words() == ENCODED_SYNC_WORDS


def test_labels():
    assert CorrelationType.LRIT_PHASE_000.label() == "LRIT 0 deg"
    assert CorrelationType.LRIT_PHASE_180.label() == "LRIT 180 deg"
    assert CorrelationType.HRIT_PHASE_000.label() == "HRIT 0 deg"
    assert CorrelationType.HRIT_PHASE_180.label() == "HRIT 180 deg"


@pytest.mark.parametrize("kind", list(CorrelationType))
def test_correlate_finds_embedded_word(kind):
    data = _noise(400)
    data[123:187] = _soft(ENCODED_SYNC_WORDS[kind])
    result = correlate(data)
    assert result == Correlation(position=123, score=64, type=kind)


def test_correlate_prefers_earliest_position():
    data = _noise(400, seed=7)
    word = _soft(ENCODED_SYNC_WORDS[CorrelationType.HRIT_PHASE_000])
    data[10:74] = word
    data[200:264] = word
    assert correlate(data).position == 10


def test_correlate_uses_msb_only():
    word = ENCODED_SYNC_WORDS[CorrelationType.LRIT_PHASE_000]
    data = bytes(0x80 if (word >> (63 - k)) & 1 else 0x7F for k in range(64))
    result = correlate(data)
    assert result.score == 64
    assert result.type is CorrelationType.LRIT_PHASE_000


def test_correlate_short_input():
    result = correlate(b"\xff" * 63)
    assert result == Correlation(position=0, score=0, type=CorrelationType.LRIT_PHASE_000)


def test_nrzm_initial_states_are_complements():
    a = nrzm_encode(SYNC_WORD, 0)
    b = nrzm_encode(SYNC_WORD, 1)
    assert bytes(x ^ y for x, y in zip(a, b)) == b"\xff" * len(SYNC_WORD)


def test_nrzm_zero_bits_keep_level():
    assert nrzm_encode(b"\x00\x00", 0) == b"\x00\x00"
    assert nrzm_encode(b"\x00\x00", 1) == b"\xff\xff"


def test_nrzm_preserves_length():
    assert len(nrzm_encode(bytes(range(50)), 0)) == 50