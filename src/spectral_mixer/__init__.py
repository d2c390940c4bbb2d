"""
SpectralMixer - subtractive, pigment-like color mixing.

Colors are upsampled to reflectance spectra and mixed with Kubelka-Munk
theory, so that mixing blue + yellow yields green instead of the grey you get
with naive RGB interpolation.

Quick start::

    import spectral_mixer

    spectral_mixer.mix("#00357b", "#d79900", 0.5, "hex")
    spectral_mixer.palette("#00357b", "#d79900", 9, "rgb")
"""

from .basis import (
    BASES,
    WAVELENGTHS_37,
    WAVELENGTHS_38,
    HUE38,
    RGB37,
    RGB_XYZ,
    XYZ_RGB,
    SpectralBasis,
    get_basis,
)
from .codec import (
    BLACK,
    Color,
    ColorFormat,
    normalize,
    parse,
    serialize,
)
from .colorspace import (
    LinearColor,
    from_xyz,
    luminance,
    to_linear,
    to_srgb,
    to_xyz,
)
from .upsampler import (
    STRATEGIES,
    HueSectorUpsampler,
    MinChannelUpsampler,
    ThreePrimaryUpsampler,
    Upsampler,
    get_upsampler,
)
from .km_core import KubelkaMunk, linear_to_concentration
from .shader import ShaderSource
from .api import SpectralMixer, DEFAULT_STRATEGY, glsl, glsl3, mix, palette

RGB = ColorFormat.RGB
RGBA = ColorFormat.RGBA
HEX = ColorFormat.HEX
HEXA = ColorFormat.HEXA

__all__ = [
    # Codec
    "Color",
    "ColorFormat",
    "BLACK",
    "RGB",
    "RGBA",
    "HEX",
    "HEXA",
    "parse",
    "serialize",
    "normalize",
    # Color spaces
    "LinearColor",
    "to_linear",
    "to_srgb",
    "to_xyz",
    "from_xyz",
    "luminance",
    "RGB_XYZ",
    "XYZ_RGB",
    # Basis
    "SpectralBasis",
    "RGB37",
    "HUE38",
    "BASES",
    "WAVELENGTHS_37",
    "WAVELENGTHS_38",
    "get_basis",
    # Upsampling
    "Upsampler",
    "ThreePrimaryUpsampler",
    "HueSectorUpsampler",
    "MinChannelUpsampler",
    "STRATEGIES",
    "get_upsampler",
    # Mixing
    "KubelkaMunk",
    "linear_to_concentration",
    # API
    "SpectralMixer",
    "DEFAULT_STRATEGY",
    "mix",
    "palette",
    "glsl",
    "glsl3",
    # Shader
    "ShaderSource",
]
