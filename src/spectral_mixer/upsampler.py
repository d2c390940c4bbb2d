"""
Spectral upsampling: linear RGB -> reflectance spectrum.

A linear color is written as a non-negative combination of the archetype
spectra of a :class:`~spectral_mixer.basis.SpectralBasis`; the reflectance is
the same combination of the archetype curves, floored so the Kubelka-Munk
reciprocal stays finite.

Strategies:

* ``three_primary`` -- weights are the linear r, g, b themselves (37 bands).
* ``min_channel`` -- white = min channel, then pairwise min/max rules split
  the remainder over cyan/magenta/yellow and red/green/blue (38 bands).
* ``hue_sector`` -- the smallest channel picks one of six sectors, each
  mixing white, one secondary and one primary (38 bands).
"""

from abc import ABC, abstractmethod
from typing import Dict, Type

import numpy as np

from .basis import HUE38, RGB37, SpectralBasis
from .colorspace import LinearColor


class Upsampler(ABC):
    """Base class for RGB -> reflectance decompositions."""

    name = None
    default_basis = None

    def __init__(self, basis: SpectralBasis | None = None):
        """
        Args:
            basis: Spectral basis to decompose into (the strategy's default
                if *None*). Must contain the archetypes the strategy uses.
        """
        self.basis = basis if basis is not None else self.default_basis
        missing = set(self.archetypes) - set(self.basis.names)
        if missing:
            raise ValueError(
                f"{self.name} needs archetypes {sorted(missing)} "
                f"not present in basis {self.basis.name!r}"
            )
        # rows of the basis in the order weights() returns them
        self.spectra = np.stack([self.basis.archetype(k) for k in self.archetypes])

    @property
    @abstractmethod
    def archetypes(self) -> tuple:
        """Names of the archetypes, in ``weights()`` order."""

    @abstractmethod
    def weights(self, rgb: np.ndarray) -> np.ndarray:
        """Non-negative archetype weights for a linear RGB triple."""

    def reflectance(self, color: LinearColor) -> np.ndarray:
        """Floored reflectance spectrum for a linear color."""
        w = self.weights(np.maximum(color.rgb, 0.0))
        return np.maximum(w @ self.spectra, self.basis.floor)

    def __repr__(self):
        return f"{type(self).__name__}(basis={self.basis.name!r})"


class ThreePrimaryUpsampler(Upsampler):
    """Linear r, g, b weight the red, green and blue curves directly."""

    name = "three_primary"
    default_basis = RGB37
    archetypes = ("red", "green", "blue")

    def weights(self, rgb):
        return np.asarray(rgb, dtype=np.float64)


class MinChannelUpsampler(Upsampler):
    """White plus pairwise-minimum secondaries and leftover primaries."""

    name = "min_channel"
    default_basis = HUE38
    archetypes = ("white", "cyan", "magenta", "yellow", "red", "green", "blue")

    def weights(self, rgb):
        w = float(np.min(rgb))
        r, g, b = (float(v) - w for v in rgb)

        c = min(g, b)
        m = min(r, b)
        y = min(r, g)
        red = max(0.0, min(r - b, r - g))
        green = max(0.0, min(g - b, g - r))
        blue = max(0.0, min(b - g, b - r))

        return np.array([w, c, m, y, red, green, blue])


class HueSectorUpsampler(Upsampler):
    """One secondary and one primary per sector of the RGB cube."""

    name = "hue_sector"
    default_basis = HUE38
    archetypes = ("white", "cyan", "magenta", "yellow", "red", "green", "blue")

    def weights(self, rgb):
        r, g, b = (float(v) for v in rgb)
        out = np.zeros(7)
        # white, cyan, magenta, yellow, red, green, blue
        if b <= r and b <= g:
            out[0] = b
            if r >= g:
                out[3], out[4] = g - b, r - g
            else:
                out[3], out[5] = r - b, g - r
        elif g <= r and g <= b:
            out[0] = g
            if r >= b:
                out[2], out[4] = b - g, r - b
            else:
                out[2], out[6] = r - g, b - r
        else:
            out[0] = r
            if g >= b:
                out[1], out[5] = b - r, g - b
            else:
                out[1], out[6] = g - r, b - g
        return out


STRATEGIES: Dict[str, Type[Upsampler]] = {
    cls.name: cls
    for cls in (ThreePrimaryUpsampler, HueSectorUpsampler, MinChannelUpsampler)
}


def get_upsampler(strategy: str, basis: SpectralBasis | None = None) -> Upsampler:
    """Instantiate an upsampling strategy by name."""
    try:
        cls = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown upsampling strategy {strategy!r}; "
            f"choose one of {sorted(STRATEGIES)}"
        ) from None
    return cls(basis)
