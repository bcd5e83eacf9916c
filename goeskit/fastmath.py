"""Single precision sin, cos, exp and log evaluated element-wise on arrays.

The algorithms follow the cephes single precision routines and round every
intermediate result to float32, so results are reproducible across platforms.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

_F = np.float32
_ONE = _F(1.0)
_HALF = _F(0.5)
_ZERO = _F(0.0)
_NAN = _F(np.nan)
_TINY = np.finfo(np.float32).tiny

_INV_MANT_MASK = np.int32(~0x7F800000)
_HALF_BITS = np.int32(0x3F000000)

_SQRTHF = _F(0.707106781186547524)
_LOG_P = tuple(
    _F(c)
    for c in (
        7.0376836292e-2,
        -1.1514610310e-1,
        1.1676998740e-1,
        -1.2420140846e-1,
        1.4249322787e-1,
        -1.6668057665e-1,
        2.0000714765e-1,
        -2.4999993993e-1,
        3.3333331174e-1,
    )
)
_LOG_Q1 = _F(-2.12194440e-4)
_LOG_Q2 = _F(0.693359375)

_EXP_HI = _F(88.3762626647949)
_EXP_LO = _F(-88.3762626647949)
_LOG2EF = _F(1.44269504088896341)
_EXP_C1 = _F(0.693359375)
_EXP_C2 = _F(-2.12194440e-4)
_EXP_P = tuple(
    _F(c)
    for c in (
        1.9875691500e-4,
        1.3981999507e-3,
        8.3334519073e-3,
        4.1665795894e-2,
        1.6666665459e-1,
        5.0000001201e-1,
    )
)

_MINUS_DP1 = _F(-0.78515625)
_MINUS_DP2 = _F(-2.4187564849853515625e-4)
_MINUS_DP3 = _F(-3.77489497744594108e-8)
_SINCOF = (_F(-1.9515295891e-4), _F(8.3321608736e-3), _F(-1.6666654611e-1))
_COSCOF = (_F(2.443315711809948e-005), _F(-1.388731625493765e-003), _F(4.166664568298827e-002))
_FOPI = _F(1.27323954473516)  # 4 / pi


def _prepare(x: ArrayLike) -> tuple[np.ndarray, tuple[int, ...]]:
    arr = np.asarray(x, dtype=np.float32)
    return np.atleast_1d(arr).copy(), arr.shape


def _to_uint32(y: np.ndarray) -> np.ndarray:
    """Truncating float to uint32 conversion that saturates and maps NaN to 0."""
    wide = y.astype(np.float64)
    wide = np.where(np.isnan(wide), 0.0, np.clip(wide, 0.0, 4294967295.0))
    return np.trunc(wide).astype(np.uint64).astype(np.uint32)


def log_ps(x: ArrayLike) -> np.ndarray:
    """Natural logarithm; NaN for arguments that are zero, negative or denormal."""
    x, shape = _prepare(x)
    with np.errstate(all="ignore"):
        x = np.fmax(x, _ZERO)
        x = np.where(x < _TINY, _ZERO, x).astype(np.float32)
        invalid = x <= _ZERO

        ux = x.view(np.int32)
        emm0 = ux >> 23
        ux = (ux & _INV_MANT_MASK) | _HALF_BITS
        x = ux.view(np.float32)

        e = (emm0 - np.int32(0x7F)).astype(np.float32) + _ONE

        mask = x < _SQRTHF
        tmp = np.where(mask, x, _ZERO)
        x = x - _ONE
        e = e - np.where(mask, _ONE, _ZERO)
        x = x + tmp

        z = x * x
        y = np.full_like(x, _LOG_P[0])
        for coef in _LOG_P[1:]:
            y = y * x + coef
        y = y * x
        y = y * z

        y = y + e * _LOG_Q1
        y = y - z * _HALF
        x = x + y
        x = x + e * _LOG_Q2
        x = np.where(invalid, _NAN, x)
    return x.astype(np.float32).reshape(shape)


def exp_ps(x: ArrayLike) -> np.ndarray:
    """Exponential, with the argument clamped to about +-88.376."""
    x, shape = _prepare(x)
    with np.errstate(all="ignore"):
        x = np.fmin(x, _EXP_HI)
        x = np.fmax(x, _EXP_LO)

        # exp(x) = exp(g + n*log(2))
        fx = x * _LOG2EF + _HALF
        tmp = np.trunc(fx).astype(np.float32)
        fx = tmp - np.where(tmp > fx, _ONE, _ZERO)

        x = x - fx * _EXP_C1
        x = x - fx * _EXP_C2

        y = np.full_like(x, _EXP_P[0])
        y = y * x
        z = x * x
        for coef in _EXP_P[1:-1]:
            y = y + coef
            y = y * x
        y = y + _EXP_P[-1]
        y = y * z
        y = y + x
        y = y + _ONE

        mm = (fx.astype(np.int32) + np.int32(0x7F)) << 23
        pow2n = mm.astype(np.int32).view(np.float32)
        y = y * pow2n
    return y.astype(np.float32).reshape(shape)


def sincos_ps(x: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """Sine and cosine of ``x``; precise for |x| below 8192."""
    x, shape = _prepare(x)
    with np.errstate(all="ignore"):
        sign_sin = x < _ZERO
        x = np.abs(x)

        y = x * _FOPI
        emm2 = _to_uint32(y)
        emm2 = (emm2 + np.uint32(1)) & np.uint32(0xFFFFFFFE)
        y = emm2.astype(np.float32)

        poly_mask = (emm2 & np.uint32(2)) != 0

        # Extended precision modular arithmetic.
        x = x + y * _MINUS_DP1
        x = x + y * _MINUS_DP2
        x = x + y * _MINUS_DP3

        sign_sin = sign_sin ^ ((emm2 & np.uint32(4)) != 0)
        sign_cos = ((emm2 - np.uint32(2)) & np.uint32(4)) != 0

        z = x * x
        y1 = z * _COSCOF[0]
        y2 = z * _SINCOF[0]
        y1 = y1 + _COSCOF[1]
        y2 = y2 + _SINCOF[1]
        y1 = y1 * z
        y2 = y2 * z
        y1 = y1 + _COSCOF[2]
        y2 = y2 + _SINCOF[2]
        y1 = y1 * z
        y2 = y2 * z
        y1 = y1 * z
        y2 = y2 * x
        y1 = y1 - z * _HALF
        y2 = y2 + x
        y1 = y1 + _ONE

        ys = np.where(poly_mask, y1, y2)
        yc = np.where(poly_mask, y2, y1)
        sin = np.where(sign_sin, -ys, ys)
        cos = np.where(sign_cos, yc, -yc)
    return sin.astype(np.float32).reshape(shape), cos.astype(np.float32).reshape(shape)


def sin_ps(x: ArrayLike) -> np.ndarray:
    """Sine of ``x``."""
    return sincos_ps(x)[0]


def cos_ps(x: ArrayLike) -> np.ndarray:
    """Cosine of ``x``."""
    return sincos_ps(x)[1]