"""Frame synchronisation by correlating soft symbols with encoded sync words."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

from .viterbi import Viterbi

SYNC_WORD = bytes((0x1A, 0xCF, 0xFC, 0x1D))
ENCODED_SYNC_WORD_BITS = 64
_ALL_ONES = (1 << ENCODED_SYNC_WORD_BITS) - 1


class CorrelationType(enum.IntEnum):
    """Stream type and phase that a sync word belongs to."""

    LRIT_PHASE_000 = 0
    LRIT_PHASE_180 = 1
    HRIT_PHASE_000 = 2
    HRIT_PHASE_180 = 3

    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_lrit(self) -> bool:
        return self in (CorrelationType.LRIT_PHASE_000, CorrelationType.LRIT_PHASE_180)

    @property
    def is_hrit(self) -> bool:
        return self in (CorrelationType.HRIT_PHASE_000, CorrelationType.HRIT_PHASE_180)


_LABELS = {
    CorrelationType.LRIT_PHASE_000: "LRIT 0 deg",
    CorrelationType.LRIT_PHASE_180: "LRIT 180 deg",
    CorrelationType.HRIT_PHASE_000: "HRIT 0 deg",
    CorrelationType.HRIT_PHASE_180: "HRIT 180 deg",
}

# Convolutionally encoded sync words, compared against the raw symbol stream.
# They can be reproduced with compute_sync_words().
ENCODED_SYNC_WORDS = {
    CorrelationType.LRIT_PHASE_000: 0x035D49C24FF2686B,
    CorrelationType.LRIT_PHASE_180: 0xFCA2B63DB00D9794,
    CorrelationType.HRIT_PHASE_000: 0x03B10B02F33D2076,
    CorrelationType.HRIT_PHASE_180: 0xDAFEF4FD0CC2DF89,
}


def _signs(word: int) -> np.ndarray:
    bits = [(word >> (ENCODED_SYNC_WORD_BITS - 1 - k)) & 1 for k in range(ENCODED_SYNC_WORD_BITS)]
    return np.array(bits, dtype=np.int32) * 2 - 1


_SIGNS = {t: _signs(w) for t, w in ENCODED_SYNC_WORDS.items()}


@dataclass(frozen=True)
class Correlation:
    """Best match of a sync word in a block of soft symbols."""

    position: int
    score: int
    type: CorrelationType


def correlate(data: bytes | bytearray | memoryview | np.ndarray) -> Correlation:
    """Find the position and sync word that correlate best with ``data``.

    A symbol with its most significant bit set counts as a 1. The score is the
    number of matching bits out of 64; the earliest position wins ties, and
    among sync words the first in enum order wins ties.
    """
    symbols = np.frombuffer(bytes(data), dtype=np.uint8)
    best = {t: (0, 0) for t in CorrelationType}
    if len(symbols) >= ENCODED_SYNC_WORD_BITS:
        signs = (symbols >> 7).astype(np.int32) * 2 - 1
        for kind, word in _SIGNS.items():
            matches = (np.correlate(signs, word, mode="valid") + ENCODED_SYNC_WORD_BITS) // 2
            pos = int(np.argmax(matches))
            score = int(matches[pos])
            if score > 0:
                best[kind] = (pos, score)

    chosen = CorrelationType.LRIT_PHASE_000
    for kind in CorrelationType:
        if best[kind][1] > best[chosen][1]:
            chosen = kind
    pos, score = best[chosen]
    return Correlation(position=pos, score=score, type=chosen)


def nrzm_encode(data: bytes | bytearray, initial_bit: int) -> bytes:
    """NRZ-M encode ``data``: a 1 bit flips the line level, a 0 keeps it."""
    level = initial_bit & 1
    out = bytearray()
    for byte in data:
        value = 0
        for shift in range(7, -1, -1):
            if (byte >> shift) & 1:
                level ^= 1
            value = (value << 1) | level
        out.append(value)
    return bytes(out)


def compute_sync_words() -> dict[CorrelationType, int]:
    """Derive the 64-bit encoded sync words for every stream type and phase."""
    viterbi = Viterbi()

    def first_bits(msg: bytes) -> int:
        return int.from_bytes(viterbi.encode(msg)[:8], "big")

    lrit = first_bits(SYNC_WORD)
    return {
        CorrelationType.LRIT_PHASE_000: lrit,
        CorrelationType.LRIT_PHASE_180: lrit ^ _ALL_ONES,
        CorrelationType.HRIT_PHASE_000: first_bits(nrzm_encode(SYNC_WORD, 0)),
        CorrelationType.HRIT_PHASE_180: first_bits(nrzm_encode(SYNC_WORD, 1)),
    }