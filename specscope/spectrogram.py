"""Spectrogram computation: STFT tiles, view geometry and tuner bookkeeping."""

from collections import OrderedDict

import numpy as np

from .fastmath import DBFS_SCALE, fast_log2f_approx
from .tilecache import TileCacheKey
from .tuner import Tuner
from .tunertransform import TunerTransform
from .util import TAU
from .windows import WindowType, generate_window, window_type_count

TARGET_LINES_PER_TILE = 64
TILE_CACHE_MAX_KB = 128 * 1024
TARGET_TILE_BYTES = 512 * 1024
OVERLAP_TABLE = (0.0, 0.25, 0.50, 0.75, 0.875)


class _TileCache:
    """Least-recently-used store of tiles, bounded by a total cost in KB."""

    def __init__(self, max_cost):
        self.max_cost = max_cost
        self._items = OrderedDict()
        self._total = 0

    def get(self, key):
        entry = self._items.get(key)
        if entry is None:
            return None
        self._items.move_to_end(key)
        return entry[0]

    def insert(self, key, value, cost):
        if cost > self.max_cost:
            return False
        old = self._items.pop(key, None)
        if old is not None:
            self._total -= old[1]
        while self._items and self._total + cost > self.max_cost:
            _, (_, evicted) = self._items.popitem(last=False)
            self._total -= evicted
        self._items[key] = (value, cost)
        self._total += cost
        return True

    def clear(self):
        self._items.clear()
        self._total = 0

    def __len__(self):
        return len(self._items)


class SpectrogramModel:
    """Computes spectrogram tiles from a complex sample source.

    ``source`` is any object with ``get_samples(start, length)`` returning
    complex samples, or ``None`` when they are unavailable. ``real_signal``
    marks a source whose spectrum is symmetric, so only half is shown.
    """

    def __init__(self, source, real_signal=False, sample_rate=0.0):
        self.source = source
        self.real_signal = real_signal
        self.sample_rate = sample_rate

        self._fft_size = 512
        self._window_size = 512
        self._zero_pad = 1
        self._zoom_level = 1
        self._y_zoom_level = 1
        self._power_max = 0.0
        self._power_min = -50.0
        self._power_range = -1.0
        self._inv_n = np.float32(1.0)
        self._overlap_index = 0
        self._overlap_fraction = 0.0
        self._window_type = WindowType.HANN
        self._kaiser_beta = 6.0
        self._mask_out_of_band = False
        self._height = 0
        self._window = np.zeros(0, dtype=np.float32)
        self._fft_cache = _TileCache(TILE_CACHE_MAX_KB)

        self.tuner = Tuner(self._fft_size)
        self.tuner_transform = TunerTransform(source)
        self._reconfigure(self._window_size)
        self.tuner.listeners.append(self._tuner_full_update)

    # ---- read-only settings -------------------------------------------

    @property
    def fft_size(self):
        """FFT length: window size times the zero-pad factor."""
        return self._fft_size

    @property
    def window_size(self):
        """Number of samples in each FFT window."""
        return self._window_size

    @property
    def zero_pad(self):
        return self._zero_pad

    @property
    def zoom_level(self):
        return self._zoom_level

    @property
    def y_zoom_level(self):
        return self._y_zoom_level

    @property
    def overlap_index(self):
        return self._overlap_index

    @property
    def window_type(self):
        return self._window_type

    @property
    def kaiser_beta(self):
        return self._kaiser_beta

    @property
    def window(self):
        """Coefficients of the current window."""
        return self._window.copy()

    @property
    def power_max(self):
        return self._power_max

    @property
    def power_min(self):
        return self._power_min

    @property
    def power_range(self):
        """Scale from dB below ``power_max`` to the normalised range."""
        return self._power_range

    @property
    def tuner_enabled(self):
        """True when something consumes the tuner's output."""
        return self.tuner_transform.subscriber_count > 0

    @property
    def mask_out_of_band(self):
        return self._mask_out_of_band

    @mask_out_of_band.setter
    def mask_out_of_band(self, enabled):
        self._mask_out_of_band = bool(enabled)
        self._update_height()

    @property
    def output(self):
        """The tuned and filtered sample stream."""
        return self.tuner_transform

    # ---- configuration -------------------------------------------------

    def _full_height(self):
        return self._fft_size // 2 if self.real_signal else self._fft_size

    def _reconfigure(self, size):
        self._window_size = 0
        self.set_fft_size(size)

    def set_fft_size(self, size):
        """Set the window size; the FFT size follows with zero padding."""
        if size <= 0:
            return
        if size == self._window_size and self._window_size * self._zero_pad == self._fft_size:
            return

        old_fft_size = self._fft_size
        self._window_size = size
        self._fft_size = size * self._zero_pad
        scale = float(np.float32(self._fft_size) / np.float32(old_fft_size)) if old_fft_size > 0 else 1.0

        self._inv_n = np.float32(1.0 / size)
        self._window = generate_window(self._window_type, size, self._kaiser_beta)

        self.tuner.set_height(self._full_height())
        deviation = self.tuner.deviation
        centre = self.tuner.centre
        self.tuner.set_deviation(int(deviation * scale))
        self.tuner.set_centre(int(centre * scale))
        self._update_height()

    def set_zero_pad(self, factor):
        """Zero-pad each window to ``factor`` times its length before the FFT."""
        factor = max(factor, 1)
        if factor == self._zero_pad:
            return
        self._zero_pad = factor
        self._reconfigure(self._window_size)
        self.clear_caches()

    def set_overlap(self, index):
        """Choose a window overlap of 0, 25, 50, 75 or 87.5 percent."""
        index = min(max(index, 0), len(OVERLAP_TABLE) - 1)
        changed = index != self._overlap_index
        self._overlap_index = index
        self._overlap_fraction = OVERLAP_TABLE[index]
        if changed:
            self.clear_caches()

    def set_window_type(self, index):
        """Select a window function; an unknown index is ignored."""
        if index < 0 or index >= window_type_count():
            return
        new_type = WindowType(index)
        changed = new_type != self._window_type
        self._window_type = new_type
        self._window = generate_window(new_type, self._window_size, self._kaiser_beta)
        if changed:
            self.clear_caches()

    def set_kaiser_beta(self, beta):
        """Set the Kaiser beta, limited to 0..30."""
        beta = float(np.float32(min(max(beta, 0.0), 30.0)))
        changed = beta != self._kaiser_beta
        self._kaiser_beta = beta
        if changed and self._window_type is WindowType.KAISER:
            self._window = generate_window(self._window_type, self._window_size, beta)
            self.clear_caches()

    def _update_power_range(self):
        delta = abs(int(self._power_min - self._power_max))
        self._power_range = -1.0 / delta if delta > 0 else -1.0

    def set_power_max(self, power):
        """Set the dB level shown at full intensity."""
        self._power_max = float(power)
        self._update_power_range()
        self._tuner_full_update()

    def set_power_min(self, power):
        """Set the dB level shown at zero intensity."""
        self._power_min = float(power)
        self._update_power_range()

    def set_zoom_level(self, zoom):
        """Set the horizontal zoom; the stride shrinks with it."""
        self._zoom_level = max(zoom, 1)

    def set_zoom_y(self, level):
        """Set the vertical zoom; only the visible bins change."""
        self._y_zoom_level = max(level, 1)

    def invalidate_event(self):
        """React to a change of the source: rebuild and drop every tile."""
        self._reconfigure(self._window_size)
        self.clear_caches()

    def clear_caches(self):
        """Drop every computed tile."""
        self._fft_cache.clear()

    # ---- geometry -------------------------------------------------------

    def stride(self):
        """Samples between consecutive spectrogram lines."""
        hop = max(int(self._window_size * (1.0 - self._overlap_fraction)), 1)
        if self._zoom_level <= 0:
            return hop
        return max(hop // self._zoom_level, 1)

    def lines_per_tile(self):
        """Lines in one tile, sized to about 512 KB of float data."""
        if self._fft_size <= 0:
            return TARGET_LINES_PER_TILE
        lines = TARGET_TILE_BYTES // (self._fft_size * 4)
        return max(lines, TARGET_LINES_PER_TILE)

    def native_plot_height(self):
        """Number of FFT bins visible at once."""
        if self._mask_out_of_band and self.tuner_enabled:
            visible = self.tuner.deviation * 2 // self._y_zoom_level
            return min(max(visible, 2), self._fft_size)
        return self._fft_size // self._y_zoom_level

    def visible_bin_top(self):
        """First visible bin, centred on the tuner and kept within the FFT."""
        visible = self.native_plot_height()
        top = max(self.tuner.centre - visible // 2, 0)
        if top + visible > self._fft_size:
            top = self._fft_size - visible
        return top

    def plot_height(self):
        """Height of the plot in pixels."""
        return self._height

    def _update_height(self):
        full = self._full_height()
        if self._mask_out_of_band and self.tuner_enabled:
            height = int(self.tuner.deviation * 2.4) // self._y_zoom_level
            self._height = min(max(height, 4), full)
        else:
            self._height = full

    # ---- tuner ------------------------------------------------------------

    def tuner_centre_hz(self):
        """Frequency of the tuner centre relative to the signal centre."""
        if self._fft_size <= 0:
            return 0.0
        return (0.5 - self.tuner.centre / self._fft_size) * self.sample_rate

    def tuner_bandwidth_hz(self):
        """Width of the tuner pass band in Hz."""
        if self._fft_size <= 0:
            return 0.0
        return self.tuner.deviation * 2.0 / self._fft_size * self.sample_rate

    def tuner_phase_inc(self):
        """Tuner centre as a phase increment in radians per sample."""
        if self._fft_size <= 0:
            return 0.0
        freq = np.float32(0.5) - np.float32(self.tuner.centre) / np.float32(self._fft_size)
        return float(freq * np.float32(TAU))

    def _tuner_full_update(self):
        self.tuner_transform.frequency = self.tuner_phase_inc()
        self.tuner_transform.relative_bandwidth = (
            self.tuner.deviation * 2.0 / max(self._full_height(), 1))
        self._update_height()

    # ---- computation ------------------------------------------------------

    def get_line(self, sample):
        """Power spectrum in dB of the window centred on ``sample``, DC in the middle.

        A line whose samples are unavailable is all negative infinity.
        """
        fft_size = self._fft_size
        first = max(sample - self._window_size // 2, 0)
        samples = self.source.get_samples(first, self._window_size)
        if samples is None:
            return np.full(fft_size, -np.inf, dtype=np.float32)

        samples = np.asarray(samples, dtype=np.complex64).ravel()[: self._window_size]
        buffer = np.zeros(fft_size, dtype=np.complex64)
        buffer[: samples.size] = samples * self._window[: samples.size]

        spectrum = np.fft.fft(buffer).astype(np.complex64) * self._inv_n
        power = (spectrum.real * spectrum.real + spectrum.imag * spectrum.imag).astype(np.float32)
        db = np.asarray(fast_log2f_approx(power), dtype=np.float32) * DBFS_SCALE

        half = fft_size // 2
        line = np.zeros(fft_size, dtype=np.float32)
        line[:half] = db[half:2 * half]
        line[half:2 * half] = db[:half]
        return line

    def fft_tile(self, tile):
        """Lines of the tile starting at sample ``tile``, one row per line.

        Tiles are cached; the returned array is read-only.
        """
        key = TileCacheKey(self._fft_size, self._zoom_level, tile, self._overlap_index)
        cached = self._fft_cache.get(key)
        if cached is not None:
            return cached

        step = self.stride()
        lines = [self.get_line(tile + i * step) for i in range(self.lines_per_tile())]
        data = np.vstack(lines).astype(np.float32)
        data.flags.writeable = False
        cost = max(data.size * 4 // 1024, 1)
        self._fft_cache.insert(key, data, cost)
        return data

    def normalized_tile(self, tile):
        """Tile mapped to 0..1: 0 at ``power_max``, 1 at ``power_min`` and below."""
        raw = self.fft_tile(tile)
        scaled = (raw - np.float32(self._power_max)) * np.float32(self._power_range)
        return np.clip(scaled, 0.0, 1.0).astype(np.float32)