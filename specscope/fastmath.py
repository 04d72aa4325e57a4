"""Fast IEEE 754 approximations of log2 and exp2, and dB conversions.

For a positive normal float32 ``x`` the raw bit pattern is roughly
``2**23 * (log2(x) + 127)``, so reading the bits as an integer gives a
cheap logarithm. The maximum error is about 0.086 log2 units (about
0.26 dB) for the logarithm and under 7 % relative for the exponential.

Every function accepts a scalar or an array-like. A scalar gives a
Python float and an array gives a float32 numpy array.
"""

import numpy as np

DBFS_SCALE = np.float32(3.0102999566398120)
"""dB = log2(power) * DBFS_SCALE (10 / log2(10))."""

DB_TO_LIN = np.float32(0.33219280948873626)
"""power = exp2(dB * DB_TO_LIN) (log2(10) / 10)."""

LOG_SAFE_FLOOR = np.float32(1e-30)
"""Smallest value handed to the logarithm, so that log(0) never happens."""

_EXPONENT_BIAS = 0x3F800000
_INV_MANTISSA = np.float32(1.1920928955078125e-7)  # 1 / (1 << 23)
_MANTISSA = np.float32(8388608.0)  # 1 << 23


def _finish(result):
    return float(result) if np.ndim(result) == 0 else result


def fast_log2f_approx(x):
    """Approximate log2 of a float32 from its bit pattern."""
    values = np.asarray(x, dtype=np.float32)
    bits = values.view(np.int32).astype(np.int64) - _EXPONENT_BIAS
    return _finish(bits.astype(np.float32) * _INV_MANTISSA)


def fast_exp2f_approx(x):
    """Approximate 2**x by building the float32 bit pattern directly."""
    values = np.asarray(x, dtype=np.float32)
    with np.errstate(invalid="ignore", over="ignore"):
        scaled = np.trunc(values * _MANTISSA).astype(np.int64) + _EXPONENT_BIAS
    bits = (scaled & 0xFFFFFFFF).astype(np.uint32)
    return _finish(bits.view(np.float32))


def db_to_linear(db):
    """Convert decibels to linear power."""
    values = np.asarray(db, dtype=np.float32)
    return fast_exp2f_approx(values * DB_TO_LIN)


def linear_to_db(lin):
    """Convert linear power to decibels, clamping tiny values to a floor."""
    values = np.asarray(lin, dtype=np.float32)
    values = np.where(values < LOG_SAFE_FLOOR, LOG_SAFE_FLOOR, values).astype(np.float32)
    log2 = np.asarray(fast_log2f_approx(values), dtype=np.float32)
    return _finish(log2 * DBFS_SCALE)