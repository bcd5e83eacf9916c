"""Rate 1/2, constraint length 7 convolutional code with a soft Viterbi decoder."""

from __future__ import annotations

import numpy as np

_ORDER = 7
_POLYS = (0x4F, 0x6D)
_STATES = 1 << (_ORDER - 1)


def _parity(value: int) -> int:
    return bin(value).count("1") & 1


# Expected output symbols for arriving in state ns via predecessor high bit hb.
_EXPECTED = np.array(
    [[[_parity(((hb << 6) | ns) & p) * 255 for ns in range(_STATES)] for hb in range(2)]
     for p in _POLYS],
    dtype=np.int64,
)
_NS = np.arange(_STATES)
_PRED = np.array([(_NS >> 1) | (hb << 5) for hb in range(2)])


class Viterbi:
    """Encoder and soft-decision decoder for polynomials 0x4f and 0x6d."""

    def encode_length(self, length: int) -> int:
        """Number of encoded bits for a message of ``length`` bytes."""
        return 2 * (8 * length + _ORDER - 1)

    def _encode_bits(self, msg: bytes) -> np.ndarray:
        bits = list(np.unpackbits(np.frombuffer(bytes(msg), dtype=np.uint8)))
        bits += [0] * (_ORDER - 1)
        out = []
        reg = 0
        for bit in bits:
            reg = ((reg << 1) | int(bit)) & 0x7F
            out.extend(_parity(reg & p) for p in _POLYS)
        return np.array(out, dtype=np.uint8)

    def encode(self, msg: bytes) -> bytes:
        """Encode ``msg`` (with tail flush); return the bits packed MSB first."""
        return np.packbits(self._encode_bits(msg)).tobytes()

    def decode_soft(self, encoded: bytes, bits: int) -> bytes:
        """Decode ``bits`` soft symbols (0 means 0, 255 means 1)."""
        if len(encoded) < bits:
            raise ValueError("not enough soft symbols")
        soft = np.frombuffer(bytes(encoded[:bits]), dtype=np.uint8).astype(np.int64)
        steps = bits // 2
        metrics = np.full(_STATES, 1 << 40, dtype=np.int64)
        metrics[0] = 0
        decisions = np.zeros((steps, _STATES), dtype=np.uint8)
        for t in range(steps):
            cost = np.abs(soft[2 * t] - _EXPECTED[0]) + np.abs(soft[2 * t + 1] - _EXPECTED[1])
            cand = metrics[_PRED] + cost
            choice = np.argmin(cand, axis=0)
            decisions[t] = choice
            metrics = cand[choice, _NS]
        out = np.zeros(steps, dtype=np.uint8)
        state = int(np.argmin(metrics))
        for t in range(steps - 1, -1, -1):
            out[t] = state & 1
            state = (state >> 1) | (int(decisions[t, state]) << 5)
        nbytes = steps // 8
        return np.packbits(out[: nbytes * 8]).tobytes()

    def compare_soft(self, original: bytes, msg: bytes) -> int:
        """Count soft symbols whose sign differs from the re-encoded ``msg``."""
        bits = self.encode_length(len(msg))
        if len(original) < bits:
            raise ValueError("not enough soft symbols")
        recoded = self._encode_bits(msg)
        hard = np.frombuffer(bytes(original[:bits]), dtype=np.uint8) >> 7
        return int(np.count_nonzero(hard != recoded))