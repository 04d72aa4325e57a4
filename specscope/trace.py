"""Layout and line paths for waveform trace plots."""

from dataclasses import dataclass

import numpy as np

from .util import Range


@dataclass(frozen=True)
class TileSpan:
    """One tile drawn into a trace plot.

    ``dest_x`` is where the tile goes in the view, ``source_x`` the first
    column taken from the tile and ``width`` the number of columns drawn.
    """

    tile_id: int
    sample_range: Range
    dest_x: int
    source_x: int
    width: int


def tile_layout(minimum, maximum, width, tile_width=1000):
    """Split the visible sample range ``[minimum, maximum)`` into tiles.

    Returns the tiles that cover a view ``width`` columns wide, in order.
    """
    length = maximum - minimum
    if length == 0 or width <= 0:
        return []

    per_column = max(1, length // width)
    per_tile = tile_width * per_column
    if per_tile == 0:
        return []

    tile_id = minimum // per_tile
    x_offset = (minimum % per_tile) // per_column

    def span(tid, dest_x, source_x, span_width):
        return TileSpan(tid, Range(tid * per_tile, (tid + 1) * per_tile),
                        dest_x, source_x, span_width)

    spans = [span(tile_id, 0, x_offset, tile_width - x_offset)]
    for offset, x in enumerate(range(tile_width - x_offset, width, tile_width), start=1):
        spans.append(span(tile_id + offset, x, 0, tile_width))
    return spans


def trace_path(samples, x, y, width, height):
    """Compute the polyline of a waveform in the rectangle (x, y, width, height).

    Samples of +1 sit at the top and -1 at the bottom. With more samples than
    columns, each column is drawn as a vertical segment from its maximum to
    its minimum, so fast transitions stay visible. Returns a list of points;
    the first starts the path and each following one is a line to it.
    """
    values = np.asarray(samples, dtype=np.float32).ravel()
    total = len(values)
    if total == 0 or width <= 0 or height <= 0:
        return []

    half_h = np.float32(height * 0.5)
    x_max = np.float32(width - 1)
    y_max = np.float32(height - 1)
    per_pixel = np.float32(total) / np.float32(width)

    def to_y(value):
        pos = (np.float32(1.0) - value) * half_h
        return float(max(np.float32(0.0), min(pos, y_max))) + y

    if per_pixel <= 1.0:
        x_scale = np.float32(width) / np.float32(max(total, 1))
        return [
            (float(max(np.float32(0.0), min(np.float32(i) * x_scale, x_max))) + x, to_y(v))
            for i, v in enumerate(values)
        ]

    points = []
    for col in range(width):
        s0 = int(np.float32(col) * per_pixel)
        s1 = int(np.float32(col + 1) * per_pixel)
        s0 = min(s0, total - 1)
        s1 = min(s1, total)
        if s1 <= s0:
            s1 = s0 + 1
        column = values[s0:s1]
        top = to_y(column.max())
        bottom = to_y(column.min())
        px = float(col) + x
        points.append((px, top))
        if bottom != top:
            points.append((px, bottom))
    return points