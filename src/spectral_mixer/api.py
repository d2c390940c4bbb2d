"""
SpectralMixer - pigment-like mixing of two colors

API::

    mix(color1, color2, t, fmt=None)        -> Color or text
    palette(color1, color2, size, fmt=None) -> list of Color or text
    glsl() / glsl3()                        -> shader source
"""

import logging
import math
from functools import cached_property
from numbers import Integral
from typing import List

from .codec import Color, parse, serialize
from .colorspace import LinearColor, from_xyz, luminance, to_linear, to_srgb
from .km_core import KubelkaMunk, linear_to_concentration
from .shader import ShaderSource
from .upsampler import get_upsampler

log = logging.getLogger(__name__)

DEFAULT_STRATEGY = "three_primary"


class SpectralMixer:
    """
    Subtractive two-color mixer.

    Colors are upsampled to reflectance spectra, mixed with Kubelka-Munk
    theory at a luminance-weighted concentration, and projected back to sRGB.
    """

    def __init__(
        self,
        strategy: str = DEFAULT_STRATEGY,
        refractive_index: float | None = None,
        surface_k2: float = 0.0,
    ):
        """
        Args:
            strategy: Upsampling strategy (``"three_primary"``,
                ``"hue_sector"`` or ``"min_channel"``).
            refractive_index: Enables the Saunderson surface correction with
                this refractive index (disabled if *None*).
            surface_k2: Internal reflection coefficient for the correction.
        """
        self.upsampler = get_upsampler(strategy)
        self.basis = self.upsampler.basis
        self.km = KubelkaMunk(self.basis, refractive_index, surface_k2)
        log.debug("SpectralMixer using %r, saunderson=%s", self.upsampler, self.km.saunderson)

    @property
    def strategy(self) -> str:
        return self.upsampler.name

    def _luminance(self, linear: LinearColor, R) -> float:
        if self.basis.spectral_luminance:
            return self.km.luminance(R)
        return luminance(linear)

    def _mix(self, c1: Color, c2: Color, t: float) -> Color:
        offset = self.basis.offset
        lrgb1 = to_linear(c1, offset)
        lrgb2 = to_linear(c2, offset)

        R1 = self.upsampler.reflectance(lrgb1)
        R2 = self.upsampler.reflectance(lrgb2)

        c = linear_to_concentration(
            self._luminance(lrgb1, R1), self._luminance(lrgb2, R2), t
        )

        xyz = self.km.mix_to_xyz(R1, R2, c)
        alpha = c1.a + c * (c2.a - c1.a)
        return to_srgb(from_xyz(xyz, alpha), offset)

    def mix(self, color1, color2, t: float, fmt=None):
        """
        Mix two colors like paint.

        Args:
            color1, color2: Anything :func:`~spectral_mixer.codec.parse`
                accepts.
            t: Mixing ratio [0, 1] (0 = all color1, 1 = all color2); values
                outside are clamped.
            fmt: Output format (:class:`ColorFormat` or its name); *None*
                returns a :class:`Color`.
        """
        t = float(t)
        if not math.isfinite(t):
            raise ValueError(f"t must be finite, got {t}")
        t = min(max(t, 0.0), 1.0)

        color = self._mix(parse(color1), parse(color2), t)
        return color if fmt is None else serialize(color, fmt)

    def palette(self, color1, color2, size: int, fmt=None) -> List:
        """
        ``size`` evenly spaced mixes from color1 to color2 (inclusive).

        Raises:
            ValueError: If ``size`` is not an integer >= 2.
        """
        if isinstance(size, bool) or not isinstance(size, Integral) or size < 2:
            raise ValueError(f"palette size must be an integer >= 2, got {size!r}")

        c1 = parse(color1)
        c2 = parse(color2)
        return [self.mix(c1, c2, i / (size - 1), fmt) for i in range(size)]

    @cached_property
    def shader(self):
        """Shader source generator for this configuration."""
        return ShaderSource(self.upsampler, self.km)

    def glsl(self) -> str:
        """GLSL ES 1.00 ``spectral_mix`` implementation."""
        return self.shader.glsl()

    def glsl3(self) -> str:
        """GLSL ES 3.00 ``spectral_mix`` implementation."""
        return self.shader.glsl3()


_default_mixer = SpectralMixer()


def mix(color1, color2, t: float, fmt=None):
    """Mix two colors with the default mixer."""
    return _default_mixer.mix(color1, color2, t, fmt)


def palette(color1, color2, size: int, fmt=None) -> List:
    """Palette from color1 to color2 with the default mixer."""
    return _default_mixer.palette(color1, color2, size, fmt)


def glsl() -> str:
    return _default_mixer.glsl()


def glsl3() -> str:
    return _default_mixer.glsl3()
