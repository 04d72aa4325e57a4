"""Frequency shift and low-pass filtering of a complex sample stream."""

import numpy as np

from .util import TAU


class TunerTransform:
    """Mixes a complex source down by ``frequency`` and filters it.

    ``source`` is any object with ``get_samples(start, length)`` returning
    complex samples, or ``None`` when they are unavailable. ``frequency`` is
    in radians per sample. Subscribers are objects with an
    ``invalidate_event()`` method, told when the output changes.
    """

    def __init__(self, source):
        self.source = source
        self.frequency = 0.0
        self.relative_bandwidth = 1.0
        self.gain = 1.0
        self._taps = np.array([1.0], dtype=np.float32)
        self._subscribers = []

    @property
    def taps(self):
        """FIR filter coefficients applied after mixing."""
        return self._taps.copy()

    @taps.setter
    def taps(self, values):
        taps = np.asarray(values, dtype=np.float32).ravel()
        if taps.size == 0:
            raise ValueError("filter needs at least one tap")
        self._taps = taps

    def work(self, samples, sample_id):
        """Mix, filter and scale a block that starts at sample ``sample_id``.

        The filter starts from a cleared state on every block, and the mixer
        phase is set from ``sample_id`` so consecutive blocks line up.
        """
        block = np.asarray(samples, dtype=np.complex64).ravel()
        count = block.size
        if count == 0:
            return np.zeros(0, dtype=np.complex64)

        freq = np.float32(self.frequency)
        phase0 = float(np.fmod(freq * np.float32(sample_id), np.float32(TAU)))
        phases = phase0 + float(freq) * np.arange(count, dtype=np.float64)
        mixed = block.astype(np.complex128) * np.exp(-1j * phases)

        out = np.convolve(mixed, self._taps.astype(np.float64))[:count]
        gain = float(np.float32(self.gain))
        if gain != 1.0:
            out = out * gain
        return out.astype(np.complex64)

    def get_samples(self, start, length):
        """Return ``length`` transformed samples from ``start``, or ``None``."""
        if self.source is None:
            return None
        samples = self.source.get_samples(start, length)
        if samples is None:
            return None
        return self.work(samples, start)

    def subscribe(self, subscriber):
        """Add an object to be told when the output changes."""
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber):
        """Remove a subscriber; raises ValueError if it is not subscribed."""
        self._subscribers.remove(subscriber)

    @property
    def subscriber_count(self):
        """Number of current subscribers."""
        return len(self._subscribers)

    def invalidate_event(self):
        """Pass an invalidation on to every subscriber."""
        for subscriber in list(self._subscribers):
            subscriber.invalidate_event()