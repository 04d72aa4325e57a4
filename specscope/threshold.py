"""Binary slicing of a real-valued sample stream."""

import numpy as np


def threshold_samples(samples):
    """Map each sample to 1.0 if it is above zero, else 0.0."""
    values = np.asarray(samples, dtype=np.float32)
    return np.where(values > 0, np.float32(1.0), np.float32(0.0)).astype(np.float32)


class Threshold:
    """A sample source that slices another real-valued source at zero.

    ``source`` is any object with ``get_samples(start, length)`` that returns
    an array of real samples, or ``None`` when the samples are unavailable.
    """

    def __init__(self, source):
        self.source = source

    def get_samples(self, start, length):
        """Return ``length`` sliced samples from ``start``, or ``None``."""
        samples = self.source.get_samples(start, length)
        if samples is None:
            return None
        return threshold_samples(samples)