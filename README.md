# specscope

Building blocks for looking at recorded radio signals: spectrogram tiles
computed from IQ samples, spectral window functions, a frequency tuner with
a mixing and filtering transform, thresholding of traces, waveform trace
paths, frequency-scale ticks, and decoding of sliced bits into binary, hex
and ASCII text.

## Installation

```
pip install .
```

The tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Sample sources

Several classes read samples from a *source*: any object with a
`get_samples(start, length)` method that returns a numpy array of samples,
or `None` when those samples are not available. `Threshold` and
`TunerTransform` are sources themselves, so they can be chained.

## Modules

- `specscope.fastmath`: fast IEEE 754 approximations `fast_log2f_approx`
  and `fast_exp2f_approx`, and the dB conversions `db_to_linear` and
  `linear_to_db`. Each takes a scalar (giving a float) or an array (giving
  a float32 array).
- `specscope.util`: `clamp`, the `Range` dataclass (`length`, `clip`,
  `reset_if_outside`, `below_range`, `contains` with an exclusive maximum,
  `out_of_range`), and SI helpers `format_si_value`,
  `format_si_value_signed` and `parse_si_value` (raises `ValueError` when
  no number can be read). `file_name_filter` gives the file dialog filter
  for a complex or real float sample type.
- `specscope.windows`: `WindowType` and `generate_window` for Hann,
  Hamming, Blackman-Harris, Kaiser, flat-top and rectangular windows, plus
  `bessel_i0`, `window_type_name` and `window_type_count`.
- `specscope.tilecache`: the frozen `TileCacheKey` and its 32-bit FNV-1a
  `tile_hash`.
- `specscope.threshold`: `threshold_samples` (1.0 above zero, else 0.0)
  and the `Threshold` source.
- `specscope.bits`: `bits_to_nibble`, `bits_to_byte`, `sample_bits`, and
  `BitDecoder`, which samples the middle of each segment between two
  cursors and renders the bits with `binary_string`, `hex_string` and
  `ascii_string`. The bit order follows its `lsb_first` property.
- `specscope.trace`: `tile_layout` splits a visible sample range into
  trace tiles (`TileSpan`); `trace_path` computes a waveform polyline,
  using min/max decimation when there are more samples than columns.
- `specscope.tuner`: `Tuner` keeps a centre row and a deviation, with
  `set_centre`, `set_deviation`, `set_height`, `move_cursor` (a drag with
  limits applied) and `cursor_position` for each `TunerCursor`. Callables
  in `listeners` are called whenever the cursors move.
- `specscope.tunertransform`: `TunerTransform` mixes a complex source down
  by `frequency` (radians per sample), applies its FIR `taps` and `gain`,
  and keeps a list of subscribers told through `invalidate_event`.
- `specscope.scale`: `tick_spacing`, `tick_label` and `frequency_ticks`
  produce `FrequencyTick` values for a frequency axis;
  `AnnotationLocation.is_inside` is a hit test for a drawn box.
- `specscope.spectrogram`: `SpectrogramModel` computes dB power lines
  (`get_line`) and cached tiles (`fft_tile`, `normalized_tile`) from a
  complex source, with FFT size, zero padding, overlap, window type,
  Kaiser beta, power range and zoom settings. It also reports view
  geometry (`stride`, `lines_per_tile`, `visible_bin_top`,
  `native_plot_height`, `plot_height`) and the tuner's frequency
  (`tuner_centre_hz`, `tuner_bandwidth_hz`, `tuner_phase_inc`). When the
  tuner moves, the model updates the transform's frequency and relative
  bandwidth; it does not compute filter taps.

## Examples

```python
from specscope.util import format_si_value_signed, parse_si_value

print(format_si_value_signed(-1_250_000.0, "Hz"))   # -1.250MHz
print(parse_si_value("10k"))                         # 10000.0
```

Decoding bits from a trace:

```python
import numpy as np
from specscope.bits import BitDecoder
from specscope.util import Range

class ArraySource:
    def __init__(self, data):
        self.data = np.asarray(data, dtype=np.float32)

    def get_samples(self, start, length):
        return self.data[start:start + length]

levels = np.repeat([-1, 1, -1, -1, -1, -1, -1, 1], 10)   # 0x41, 10 samples per bit
decoder = BitDecoder(ArraySource(levels))
decoder.set_cursor_info(True, Range(0, 80), 8)
print(decoder.binary_string())   # 01000001
print(decoder.hex_string())      # 41
print(decoder.ascii_string())    # A
```

Computing a spectrogram tile:

```python
import numpy as np
from specscope.spectrogram import SpectrogramModel

class ToneSource:
    def __init__(self, count):
        n = np.arange(count)
        self.data = np.exp(2j * np.pi * 0.1 * n).astype(np.complex64)

    def get_samples(self, start, length):
        if start + length > len(self.data):
            return None
        return self.data[start:start + length]

model = SpectrogramModel(ToneSource(200_000), sample_rate=1e6)
model.set_fft_size(256)
tile = model.fft_tile(0)          # one row of dB values per line
print(tile.shape)                 # (512, 256)
```

## What it does not do

specscope is a library of computations only. It has no command-line
program and no graphical interface: it draws nothing, and rendering the
ticks, paths and tiles it computes is left to the caller. It does not open
or read sample files; sources are supplied by the caller. The spectrogram
model offers the standard short-time Fourier transform only, without
averaging, noise-floor subtraction, reassigned spectrograms or colour maps.