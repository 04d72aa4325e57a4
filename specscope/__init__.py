"""Spectrogram tiles, window functions, tuning, thresholding, trace paths and bit decoding for recorded radio signals."""

__version__ = "0.5.2"

__all__ = [
    "fastmath",
    "util",
    "windows",
    "tilecache",
    "threshold",
    "bits",
    "trace",
    "tuner",
    "tunertransform",
    "scale",
    "spectrogram",
]