"""
sRGB <-> linear RGB <-> CIE XYZ conversions.

IEC 61966-2-1 companding with gamma 2.4 and the sRGB/D65 matrices from
:mod:`spectral_mixer.basis`.
"""

from dataclasses import dataclass

import numpy as np

from .basis import RGB_XYZ, XYZ_RGB
from .codec import Color

GAMMA = 2.4


@dataclass(frozen=True)
class LinearColor:
    """Linear-light RGB (gamma decoded) with alpha carried through."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @property
    def rgb(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b])


def uncompand(v):
    """sRGB-encoded value(s) in [0, 1] -> linear light."""
    v = np.asarray(v, dtype=np.float64)
    m = v >= 0.04045
    out = np.empty_like(v)
    out[m] = ((v[m] + 0.055) / 1.055) ** GAMMA
    out[~m] = v[~m] / 12.92
    return out


def compand(v):
    """Linear light -> sRGB-encoded value(s)."""
    v = np.asarray(v, dtype=np.float64)
    m = v >= 0.0031308
    out = np.empty_like(v)
    out[m] = 1.055 * np.power(v[m], 1.0 / GAMMA) - 0.055
    out[~m] = v[~m] * 12.92
    return out


def to_linear(color: Color, offset: float = 0.0) -> LinearColor:
    """
    Decode an 8-bit color to linear light.

    Args:
        color: Source color.
        offset: Added to each normalized channel before decoding (see
            :attr:`SpectralBasis.offset`).
    """
    srgb = np.array([color.r, color.g, color.b], dtype=np.float64) / 255.0
    r, g, b = uncompand(srgb + offset)
    return LinearColor(float(r), float(g), float(b), color.a)


def to_srgb(linear: LinearColor, offset: float = 0.0) -> Color:
    """Encode linear light to an 8-bit color, clamping to [0, 255]."""
    srgb = np.clip(compand(linear.rgb - offset), 0.0, 1.0)
    r, g, b = (int(c) for c in np.floor(srgb * 255.0 + 0.5))
    return Color(r, g, b, linear.a)


def to_xyz(linear: LinearColor) -> np.ndarray:
    """Linear sRGB -> CIE XYZ (D65, Y = 1 for white)."""
    return RGB_XYZ @ linear.rgb


def from_xyz(xyz: np.ndarray, alpha: float = 1.0) -> LinearColor:
    """CIE XYZ -> linear sRGB (unclamped)."""
    r, g, b = XYZ_RGB @ np.asarray(xyz, dtype=np.float64)
    return LinearColor(float(r), float(g), float(b), alpha)


def luminance(linear: LinearColor) -> float:
    """Relative luminance Y of a linear color."""
    return float(RGB_XYZ[1] @ linear.rgb)
