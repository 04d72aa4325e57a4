"""Frequency scale ticks and annotation hit boxes for a spectrogram view."""

import math
from dataclasses import dataclass
from typing import Any

MAJOR_TICK_LENGTH = 30
MINOR_TICK_LENGTH = 3
DEFAULT_TICK_HEIGHT = 50


@dataclass(frozen=True)
class FrequencyTick:
    """One tick of the frequency scale.

    ``y`` is the pixel row, ``frequency`` the offset in Hz from the view
    centre (negative below it), ``length`` the tick length in pixels and
    ``label`` the text drawn next to it, empty when there is none.
    """

    y: int
    frequency: int
    length: int
    label: str = ""

    @property
    def major(self):
        """True for a long, labelled-scale tick."""
        return self.length == MAJOR_TICK_LENGTH


@dataclass
class AnnotationLocation:
    """Where an annotation was drawn on screen, for mouse hit tests."""

    annotation: Any
    x: int
    y: int
    width: int
    height: int

    def is_inside(self, pos_x, pos_y):
        """True if the point lies in the box, edges included."""
        return (self.x <= pos_x <= self.x + self.width
                and self.y <= pos_y <= self.y + self.height)


def tick_spacing(hz_per_pixel, tick_height=DEFAULT_TICK_HEIGHT):
    """Hz between major ticks: ten times the power of ten below one tick's span.

    Returns 0 when the span is not positive.
    """
    span = hz_per_pixel * tick_height
    if not span > 0:
        return 0
    if math.isinf(span):
        raise ValueError("tick span is infinite")
    return int(10 * math.pow(10, math.floor(math.log(span) / math.log(10))))


def tick_label(tick, spacing):
    """Text for a tick at ``tick`` Hz, in the largest unit that divides ``spacing``."""
    if spacing % 1_000_000_000 == 0:
        return f"{tick // 1_000_000_000} GHz"
    if spacing % 1_000_000 == 0:
        return f"{tick // 1_000_000} MHz"
    if spacing % 1000 == 0:
        return f"{tick // 1000} kHz"
    return f"{tick} Hz"


def _walk(sample_rate, hz_per_pixel, centre, top, bottom, real_signal,
          spacing, length, labelled):
    half_rate = sample_rate / 2
    tick = 0
    while tick <= half_rate:
        offset = int(tick / hz_per_pixel)
        pos_y = centre - offset
        neg_y = centre + offset
        pos_visible = top <= pos_y <= bottom
        neg_visible = top <= neg_y <= bottom
        if not pos_visible and not neg_visible and tick > 0:
            break

        text = tick_label(tick, spacing) if labelled and tick != 0 else ""
        if not real_signal and neg_visible:
            yield FrequencyTick(neg_y, -tick, length, "-" + text if text else "")
        if pos_visible:
            yield FrequencyTick(pos_y, tick, length, " " + text if text else "")
        tick += spacing


def frequency_ticks(sample_rate, hz_per_pixel, top, bottom, real_signal=False):
    """Ticks of the frequency scale for rows ``top`` to ``bottom`` inclusive.

    Zero Hz sits at the centre row and positive frequencies above it. Real
    signals get no ticks below the centre. Major ticks come first, then the
    minor ticks at a tenth of their spacing.
    """
    if sample_rate == 0:
        return []
    spacing = tick_spacing(hz_per_pixel, DEFAULT_TICK_HEIGHT)
    if spacing < 1:
        return []

    centre = top + (bottom - top + 1) // 2
    ticks = list(_walk(sample_rate, hz_per_pixel, centre, top, bottom,
                       real_signal, spacing, MAJOR_TICK_LENGTH, True))

    minor = spacing // 10
    if minor >= 1:
        ticks.extend(_walk(sample_rate, hz_per_pixel, centre, top, bottom,
                           real_signal, minor, MINOR_TICK_LENGTH, False))
    return ticks