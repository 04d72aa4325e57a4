"""Extraction of bits from a sliced signal and their text renderings."""

import numpy as np

from .util import Range


def bits_to_nibble(bits, offset, count, lsb):
    """Pack up to ``count`` bits from ``offset`` into a nibble.

    Most significant bit first unless ``lsb`` is true. Bits past the end
    of ``bits`` are treated as zero.
    """
    nibble = 0
    for j, bit in enumerate(bits[offset:offset + count]):
        nibble |= bit << (j if lsb else 3 - j)
    return nibble


def bits_to_byte(bits, offset, lsb):
    """Pack up to eight bits from ``offset`` into a byte."""
    byte = 0
    for j, bit in enumerate(bits[offset:offset + 8]):
        byte |= bit << (j if lsb else 7 - j)
    return byte


def sample_bits(samples, segments):
    """Sample the middle of each of ``segments`` equal segments.

    Returns a list of 1 for a sample above zero and 0 otherwise.
    """
    samples = np.asarray(samples)
    length = len(samples)
    if segments <= 0 or length == 0:
        return []
    step = np.float32(length) / np.float32(segments)
    half = step / np.float32(2)
    bits = []
    for i in range(segments):
        idx = int(half + np.float32(i) * step)
        if idx < length:
            bits.append(1 if samples[idx] > 0 else 0)
    return bits


class BitDecoder:
    """Reads the bits between two cursors from a real-valued sample source.

    ``source`` is any object with ``get_samples(start, length)`` returning an
    array of real samples or ``None``. The extracted bits are cached until the
    cursor settings or the bit order change, or ``invalidate`` is called.
    """

    def __init__(self, source, lsb_first=False):
        self.source = source
        self._lsb_first = lsb_first
        self._active = False
        self._range = Range(0, 0)
        self._segments = 1
        self._dirty = True
        self._bits = []

    @property
    def lsb_first(self):
        return self._lsb_first

    @lsb_first.setter
    def lsb_first(self, value):
        self._lsb_first = bool(value)
        self._dirty = True

    def set_cursor_info(self, enabled, selected_samples, segments):
        """Set whether cursors are active, their sample range and segment count."""
        if (
            self._active != enabled
            or self._range.minimum != selected_samples.minimum
            or self._range.maximum != selected_samples.maximum
            or self._segments != segments
        ):
            self._dirty = True
        self._active = enabled
        self._range = Range(selected_samples.minimum, selected_samples.maximum)
        self._segments = segments

    def invalidate(self):
        """Force the bits to be read again on next use."""
        self._dirty = True

    def extract_bits(self):
        """Return the list of bits between the cursors."""
        if not self._dirty:
            return list(self._bits)

        self._bits = []
        self._dirty = False

        if (
            not self._active
            or self._segments <= 0
            or self._range.maximum <= self._range.minimum
        ):
            return []

        samples = self.source.get_samples(self._range.minimum, self._range.length())
        if samples is None:
            return []

        self._bits = sample_bits(np.asarray(samples)[: self._range.length()], self._segments)
        return list(self._bits)

    def binary_string(self):
        """The bits as a string of 0 and 1."""
        return "".join(str(b) for b in self.extract_bits())

    def hex_string(self):
        """The bits as upper-case hex digits, with a trailing partial nibble."""
        bits = self.extract_bits()
        full = len(bits) - len(bits) % 4
        digits = [
            format(bits_to_nibble(bits, i, 4, self._lsb_first), "X")
            for i in range(0, full, 4)
        ]
        remaining = len(bits) % 4
        if remaining:
            digits.append(format(bits_to_nibble(bits, full, remaining, self._lsb_first), "X"))
        return "".join(digits)

    def ascii_string(self):
        """Whole bytes as printable ASCII, with ``.`` for anything else."""
        bits = self.extract_bits()
        chars = []
        for i in range(0, len(bits) - 7, 8):
            byte = bits_to_byte(bits, i, self._lsb_first)
            chars.append(chr(byte) if 0x20 <= byte <= 0x7E else ".")
        return "".join(chars)