"""Small helpers: clamping, value ranges and SI-prefixed number text."""

import math
import re
from dataclasses import dataclass
from typing import Any

import numpy as np

TAU = math.pi * 2.0

_SI_PREFIXES = {9: "G", 6: "M", 3: "k", 0: "", -3: "m", -6: "µ", -9: "n"}

_SIGNED_TABLE = (
    (1e9, 1e9, "G"),
    (1e6, 1e6, "M"),
    (1e3, 1e3, "k"),
    (0.0, 1.0, ""),
)

_SUFFIX_SCALE = {
    "G": 1e9,
    "g": 1e9,
    "M": 1e6,
    "K": 1e3,
    "k": 1e3,
    "m": 1e-3,
    "u": 1e-6,
    "n": 1e-9,
}

_NUMBER = re.compile(
    r"""\s*
    (?P<sign>[+-]?)
    (?:
        (?P<hex>0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?)
      | (?P<dec>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
      | (?P<special>(?i:infinity|inf|nan))
    )""",
    re.VERBOSE,
)


def clamp(value, minimum, maximum):
    """Limit ``value`` to the closed interval [minimum, maximum]."""
    return min(maximum, max(minimum, value))


@dataclass
class Range:
    """A pair of bounds; ``contains`` treats the maximum as exclusive."""

    minimum: Any
    maximum: Any

    def length(self):
        return self.maximum - self.minimum

    def clip(self, value):
        return clamp(value, self.minimum, self.maximum)

    def reset_if_outside(self, value, reset_value):
        """Return ``reset_value`` if ``value`` lies outside the closed range."""
        if value < self.minimum or value > self.maximum:
            return reset_value
        return value

    def below_range(self, value):
        return value < self.minimum

    def contains(self, value):
        return self.minimum <= value < self.maximum

    def out_of_range(self, value):
        return not self.contains(value)


def format_si_value(value):
    """Format a value with an SI prefix from n to G, six significant digits."""
    v = np.float32(value)
    power = 0
    while v < 1.0 and power > -9:
        v = np.float32(float(v) * 1e3)
        power -= 3
    while v >= 1e3 and power < 9:
        v = np.float32(float(v) * 1e-3)
        power += 3
    return f"{float(v):g}{_SI_PREFIXES[power]}"


def format_si_value_signed(value, unit=""):
    """Format a signed value with a k/M/G prefix and up to four significant digits."""
    value = float(value)
    if value == 0.0:
        return f"0{unit}"

    magnitude = abs(value)
    divisor, suffix = 1.0, ""
    for threshold, scale, prefix in _SIGNED_TABLE:
        if magnitude >= threshold:
            divisor, suffix = scale, prefix
            break

    scaled = value / divisor
    size = abs(scaled)
    if size >= 100.0:
        digits = 1
    elif size >= 10.0:
        digits = 2
    else:
        digits = 3
    return f"{scaled:.{digits}f}{suffix}{unit}"


def parse_si_value(text):
    """Parse a number with an optional SI suffix such as ``"2.4 GHz"``.

    Trailing unit text is ignored. Raises ValueError when no number can be read.
    """
    if not text:
        raise ValueError("empty value")
    match = _NUMBER.match(text)
    if match is None:
        raise ValueError(f"no number in {text!r}")

    sign = -1.0 if match.group("sign") == "-" else 1.0
    if match.group("hex"):
        value = float.fromhex(match.group("hex"))
    elif match.group("dec"):
        value = float(match.group("dec"))
    else:
        value = float(match.group("special").lower())
    value *= sign

    rest = text[match.end():].lstrip(" ")
    if rest:
        value *= _SUFFIX_SCALE.get(rest[0], 1.0)
    return value


def file_name_filter(sample_type):
    """File dialog filter for a sample type: complex or real float."""
    try:
        kind = np.dtype(sample_type).kind
    except TypeError as exc:
        raise ValueError(f"unsupported sample type {sample_type!r}") from exc
    if kind == "c":
        return "complex<float> file (*.fc32)"
    if kind == "f":
        return "float file (*.f32)"
    raise ValueError(f"unsupported sample type {sample_type!r}")