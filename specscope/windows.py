"""Spectral window functions."""

from enum import IntEnum

import numpy as np

from .util import TAU


class WindowType(IntEnum):
    HANN = 0
    HAMMING = 1
    BLACKMAN_HARRIS = 2
    KAISER = 3
    FLAT_TOP = 4
    RECTANGULAR = 5


_NAMES = {
    WindowType.HANN: "Hann",
    WindowType.HAMMING: "Hamming",
    WindowType.BLACKMAN_HARRIS: "Blackman-Harris",
    WindowType.KAISER: "Kaiser",
    WindowType.FLAT_TOP: "Flat-top",
    WindowType.RECTANGULAR: "Rectangular",
}


def bessel_i0(x):
    """Modified Bessel function of the first kind, order 0, by 25-term series."""
    total = 1.0
    term = 1.0
    half = np.asarray(x, dtype=np.float64) * 0.5
    for k in range(1, 26):
        term = term * (half / k)
        total = total + term * term
    return float(total) if np.ndim(total) == 0 else total


def _as_window_type(window_type):
    try:
        return WindowType(window_type)
    except ValueError:
        return None


def generate_window(window_type, size, beta=6.0):
    """Return ``size`` float32 coefficients of the given window.

    ``beta`` is used by the Kaiser window only. Unknown types give a Hann window.
    """
    if size <= 0:
        return np.zeros(0, dtype=np.float32)

    n = max(size - 1, 1)
    i = np.arange(size, dtype=np.float64)
    x = TAU * i * (1.0 / n)
    kind = _as_window_type(window_type)

    if kind is WindowType.RECTANGULAR:
        w = np.ones(size)
    elif kind is WindowType.HAMMING:
        w = 0.54 - 0.46 * np.cos(x)
    elif kind is WindowType.BLACKMAN_HARRIS:
        w = (0.35875
             - 0.48829 * np.cos(x)
             + 0.14128 * np.cos(2.0 * x)
             - 0.01168 * np.cos(3.0 * x))
    elif kind is WindowType.KAISER:
        beta = float(np.float32(beta))
        half_n = n * 0.5
        t = (i - half_n) / half_n
        arg = beta * np.sqrt(np.maximum(1.0 - t * t, 0.0))
        w = bessel_i0(arg) / bessel_i0(beta)
    elif kind is WindowType.FLAT_TOP:
        w = (1.0
             - 1.93 * np.cos(x)
             + 1.29 * np.cos(2.0 * x)
             - 0.388 * np.cos(3.0 * x)
             + 0.0322 * np.cos(4.0 * x)) / 0.9644
    else:
        w = 0.5 * (1.0 - np.cos(x))

    return np.asarray(w, dtype=np.float32)


def window_type_name(window_type):
    """Display name of a window type, or ``"Unknown"``."""
    kind = _as_window_type(window_type)
    return _NAMES.get(kind, "Unknown")


def window_type_count():
    """Number of window types."""
    return len(WindowType)