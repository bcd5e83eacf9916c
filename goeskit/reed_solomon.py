"""CCSDS Reed-Solomon (255,223) with interleave depth 4 and dual basis symbols."""

from __future__ import annotations

_N = 255
_K = 223
_PARITY = _N - _K
_FCR = 112
_GAP = 11
_DEPTH = 4
_TAL = (0b11111110, 0b01101001, 0b01101011, 0b00001101,
        0b11101111, 0b11110010, 0b01011011, 0b11000111)


class UncorrectableError(Exception):
    """A block holds more errors than the code can correct."""


def _build_field() -> tuple[list[int], list[int]]:
    exp = [0] * 512
    log = [0] * 256
    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= 0x187
    for i in range(255, 512):
        exp[i] = exp[i - 255]
    return exp, log


_EXP, _LOG = _build_field()


def _mul(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return _EXP[_LOG[a] + _LOG[b]]


def _div(a: int, b: int) -> int:
    if a == 0:
        return 0
    return _EXP[(_LOG[a] - _LOG[b]) % 255]


def _root(k: int) -> int:
    return _EXP[(_GAP * (_FCR + k)) % 255]


def _eval_low(poly: list[int], x: int) -> int:
    result = 0
    for coef in reversed(poly):
        result = _mul(result, x) ^ coef
    return result


def _syndromes(block: list[int]) -> list[int]:
    out = []
    for k in range(_PARITY):
        r = _root(k)
        s = 0
        for byte in block:
            s = _mul(s, r) ^ byte
        out.append(s)
    return out


def _build_generator() -> list[int]:
    g = [1]
    for k in range(_PARITY):
        r = _root(k)
        nxt = g + [0]
        for i in range(1, len(nxt)):
            nxt[i] ^= _mul(g[i - 1], r)
        g = nxt
    return g


_GENERATOR = _build_generator()


def _encode_block(msg: list[int]) -> list[int]:
    rem = [0] * _PARITY
    for byte in msg:
        fb = byte ^ rem[0]
        rem = rem[1:] + [0]
        if fb:
            for j in range(_PARITY):
                rem[j] ^= _mul(fb, _GENERATOR[j + 1])
    return msg + rem


def _decode_block(block: list[int]) -> list[int]:
    synd = _syndromes(block)
    if not any(synd):
        return list(block)

    c, b = [1], [1]
    length, m, last = 0, 1, 1
    for n in range(_PARITY):
        d = synd[n]
        for i in range(1, length + 1):
            if i < len(c):
                d ^= _mul(c[i], synd[n - i])
        if d == 0:
            m += 1
            continue
        coef = _div(d, last)
        new = c + [0] * max(0, len(b) + m - len(c))
        for i, bi in enumerate(b):
            new[i + m] ^= _mul(coef, bi)
        if 2 * length <= n:
            b, last, length, m = c, d, n + 1 - length, 1
        else:
            m += 1
        c = new
    if length > _PARITY // 2:
        raise UncorrectableError("too many errors")

    positions = [d for d in range(_N) if _eval_low(c, _EXP[(-_GAP * d) % 255]) == 0]
    if len(positions) != length:
        raise UncorrectableError("error locator has wrong number of roots")

    omega = [0] * _PARITY
    for i, si in enumerate(synd):
        for j, cj in enumerate(c):
            if i + j < _PARITY:
                omega[i + j] ^= _mul(si, cj)
    deriv = [c[i] if i % 2 else 0 for i in range(1, len(c))]

    out = list(block)
    for d in positions:
        lx = (_GAP * d) % 255
        xinv = _EXP[(-lx) % 255]
        denom = _eval_low(deriv, xinv)
        if denom == 0:
            raise UncorrectableError("degenerate error locator")
        factor = _EXP[(lx * (1 - _FCR)) % 255]
        out[_N - 1 - d] ^= _mul(factor, _div(_eval_low(omega, xinv), denom))
    if any(_syndromes(out)):
        raise UncorrectableError("correction failed")
    return out


def _build_dual() -> tuple[list[int], list[int]]:
    conv_to_dual = [0] * 256
    dual_to_conv = [0] * 256
    for i in range(256):
        v = 0
        for j, t in enumerate(_TAL):
            v |= (bin(i & t).count("1") & 1) << (7 - j)
        conv_to_dual[i] = v
        dual_to_conv[v] = i
    return conv_to_dual, dual_to_conv


_CONV_TO_DUAL, _DUAL_TO_CONV = _build_dual()


class ReedSolomon:
    """Encoder and decoder for 1020-byte interleaved CCSDS frames."""

    frame_bytes = _N * _DEPTH
    data_bytes = _K * _DEPTH

    def encode(self, data: bytes) -> bytes:
        """Append parity to ``data`` (892 bytes), returning a 1020-byte frame."""
        if len(data) != self.data_bytes:
            raise ValueError(f"expected {self.data_bytes} bytes, got {len(data)}")
        out = bytearray(self.frame_bytes)
        for i in range(_DEPTH):
            msg = [_DUAL_TO_CONV[data[j * _DEPTH + i]] for j in range(_K)]
            for j, sym in enumerate(_encode_block(msg)):
                out[j * _DEPTH + i] = _CONV_TO_DUAL[sym]
        return bytes(out)

    def run(self, data: bytes) -> tuple[bytes, int]:
        """Correct a 1020-byte frame; return its 892 data bytes and the
        number of corrected data bytes. Raises UncorrectableError."""
        if len(data) != self.frame_bytes:
            raise ValueError(f"expected {self.frame_bytes} bytes, got {len(data)}")
        out = bytearray(self.data_bytes)
        errors = 0
        for i in range(_DEPTH):
            block = [_DUAL_TO_CONV[data[j * _DEPTH + i]] for j in range(_N)]
            fixed = _decode_block(block)
            errors += sum(1 for a, b in zip(block[:_K], fixed[:_K]) if a != b)
            for j in range(_K):
                out[j * _DEPTH + i] = _CONV_TO_DUAL[fixed[j]]
        return bytes(out), errors