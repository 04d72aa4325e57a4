"""Key and FNV-1a hash for spectrogram tile caches."""

from dataclasses import dataclass

FNV1A_BASIS = 2166136261
FNV1A_PRIME = 16777619
_MASK32 = 0xFFFFFFFF


@dataclass(frozen=True)
class TileCacheKey:
    """Identifies one computed tile by its rendering parameters."""

    fft_size: int
    zoom_level: int
    sample: int
    overlap: int = 0

    def __hash__(self):
        return tile_hash(self)


def tile_hash(key, seed=0):
    """32-bit FNV-1a hash of a tile key, xored with ``seed``."""
    sample = key.sample & 0xFFFFFFFFFFFFFFFF
    h = FNV1A_BASIS
    for part in (
        key.fft_size,
        key.zoom_level,
        sample & _MASK32,
        sample >> 32,
        key.overlap,
    ):
        h = ((h ^ (part & _MASK32)) * FNV1A_PRIME) & _MASK32
    return h ^ (seed & _MASK32)