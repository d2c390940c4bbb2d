"""
Color parsing and serialization.

Parsing is lenient: anything that is not a recognized color becomes opaque
black instead of raising, so callers never need a failure path for user
supplied color text.
"""

import logging
import re
from dataclasses import dataclass
from enum import IntEnum
from numbers import Real
from typing import Tuple, Union

import numpy as np

log = logging.getLogger(__name__)


class ColorFormat(IntEnum):
    """Output text formats."""

    RGB = 0
    RGBA = 1
    HEX = 2
    HEXA = 3


@dataclass(frozen=True)
class Color:
    """8-bit sRGB color with a fractional alpha."""

    r: int
    g: int
    b: int
    a: float = 1.0

    def __iter__(self):
        return iter((self.r, self.g, self.b, self.a))

    def __str__(self):
        return serialize(self, ColorFormat.HEXA if self.a < 1 else ColorFormat.HEX)


BLACK = Color(0, 0, 0, 1.0)

_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d+%?)\s*,\s*(\d+%?)\s*,\s*(\d+%?)(?:\s*,\s*(\d+(?:\.\d*)?|\.\d+))?\s*\)$",
    re.IGNORECASE,
)


def _channel(v) -> int:
    return int(min(max(np.floor(float(v) + 0.5), 0), 255))


def _alpha(a) -> float:
    # Values above 1 are 0-255 bytes.
    a = float(a)
    if a > 1:
        a /= 255.0
    return min(max(a, 0.0), 1.0)


def _parse_hex(digits: str) -> Color:
    if len(digits) in (3, 4):
        digits = "".join(d + d for d in digits)
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    a = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
    return Color(r, g, b, a)


def _parse_functional(m) -> Color:
    channels = []
    for v in m.group(1, 2, 3):
        if v.endswith("%"):
            channels.append(_channel(float(v[:-1]) * 255 / 100))
        else:
            channels.append(_channel(int(v)))
    a = m.group(4)
    return Color(*channels, _alpha(a) if a else 1.0)


def _parse_sequence(seq) -> Color:
    values = [float(v) for v in seq]
    if len(values) not in (3, 4) or not all(np.isfinite(values)):
        raise ValueError(f"expected 3 or 4 finite channels, got {seq!r}")
    a = values[3] if len(values) == 4 else 1.0
    return Color(*(_channel(v) for v in values[:3]), _alpha(a))


def parse(value) -> Color:
    """
    Parse a color from text or a numeric sequence.

    Accepts ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``,
    ``rgb(r, g, b)``/``rgba(r, g, b, a)`` (integer or percentage channels)
    and 3/4-element sequences. Alpha above 1 is read as a 0-255 byte.
    Unrecognized input yields opaque black.
    """
    if isinstance(value, Color):
        return value

    if isinstance(value, str):
        text = value.strip()
        m = _HEX_RE.match(text)
        if m:
            return _parse_hex(m.group(1))
        m = _RGB_RE.match(text)
        if m:
            return _parse_functional(m)
    elif not isinstance(value, (bytes, Real)):
        try:
            return _parse_sequence(value)
        except (TypeError, ValueError):
            pass

    log.debug("Unrecognized color %r, using opaque black", value)
    return BLACK


def _format(fmt) -> ColorFormat:
    if isinstance(fmt, str):
        try:
            return ColorFormat[fmt.upper()]
        except KeyError:
            pass
    else:
        try:
            return ColorFormat(fmt)
        except ValueError:
            pass
    raise ValueError(
        f"Unknown color format {fmt!r}; choose one of "
        f"{[f.name for f in ColorFormat]}"
    )


def serialize(color: Color, fmt: Union[ColorFormat, str, int] = ColorFormat.HEX) -> str:
    """
    Encode a color as text.

    ``RGB``/``RGBA`` produce ``rgb(...)``/``rgba(...)``; ``HEX``/``HEXA``
    produce lower-case ``#rrggbb``/``#rrggbbaa``.
    """
    fmt = _format(fmt)
    r, g, b, a = color

    if fmt is ColorFormat.RGB:
        return f"rgb({r}, {g}, {b})"
    if fmt is ColorFormat.RGBA:
        return f"rgba({r}, {g}, {b}, {round(a, 6):g})"

    text = f"#{r:02x}{g:02x}{b:02x}"
    if fmt is ColorFormat.HEXA:
        text += f"{_channel(a * 255):02x}"
    return text


def normalize(value) -> Tuple[float, float, float, float]:
    """Color as four floats in [0, 1], ready for a ``vec4`` uniform."""
    r, g, b, a = parse(value)
    return (r / 255.0, g / 255.0, b / 255.0, a)
