"""
Kubelka-Munk Theory Implementation for Subtractive Color Mixing

Blends two reflectance spectra as if they were opaque paint layers: each band
is converted to an absorption/scattering ratio K/S, the ratios are mixed
linearly, and the result is inverted back to reflectance.
"""

import numpy as np

from .basis import SpectralBasis


def ks(R: np.ndarray) -> np.ndarray:
    """Absorption/scattering ratio of an opaque layer: (1 - R)^2 / 2R."""
    return (1.0 - R) ** 2 / (2.0 * R)


def km(KS: np.ndarray) -> np.ndarray:
    """Reflectance of an opaque layer with the given K/S (inverse of ``ks``)."""
    return 1.0 + KS - np.sqrt(KS ** 2 + 2.0 * KS)


def linear_to_concentration(l1: float, l2: float, t: float) -> float:
    """
    Luminance-weighted concentration of the second color.

    Equal amounts of a dark and a light pigment do not look equally weighted,
    so the requested fraction ``t`` is remapped to
    ``l2*t^2 / (l1*(1-t)^2 + l2*t^2)``.
    """
    t1 = l1 * (1.0 - t) ** 2
    t2 = l2 * t ** 2
    total = t1 + t2
    if total == 0:
        return t
    return t2 / total


class KubelkaMunk:
    """
    Kubelka-Munk two-pigment mixing model.

    Takes reflectance spectra on a :class:`SpectralBasis` and computes the
    mixed spectrum and its tristimulus values.
    """

    def __init__(
        self,
        basis: SpectralBasis,
        refractive_index: float | None = None,
        k2: float = 0.0,
    ):
        """
        Initialize K-M model.

        Args:
            basis: Basis the spectra are sampled on.
            refractive_index: Refractive index of a surface over the paint
                (1.5 for glass). *None* disables the Saunderson correction.
            k2: Internal reflection coefficient of the Saunderson correction
                (0 neutral, negative lightens, positive darkens).
        """
        if refractive_index is not None and refractive_index <= 0:
            raise ValueError(f"refractive_index must be positive, got {refractive_index}")

        self.basis = basis
        self.refractive_index = refractive_index
        if refractive_index is None:
            self.k1 = 0.0
            self.k2 = 0.0
        else:
            self.k1 = (refractive_index - 1.0) ** 2 / (refractive_index + 1.0) ** 2
            self.k2 = float(k2)

    @property
    def saunderson(self) -> bool:
        """Whether the surface-reflection correction is applied."""
        return self.refractive_index is not None

    def mix_reflectance(self, R1: np.ndarray, R2: np.ndarray, c: float) -> np.ndarray:
        """
        Mix two reflectance spectra at concentration ``c`` of the second.

        Both spectra must be strictly positive.
        """
        KS = (1.0 - c) * ks(R1) + c * ks(R2)
        return km(KS)

    def apply_saunderson_correction(self, R: np.ndarray) -> np.ndarray:
        """Apply Saunderson correction for surface reflection."""
        if not self.saunderson:
            return R
        return (1 - self.k1) * (1 - self.k2) * R / (1 - self.k2 * R)

    def luminance(self, R: np.ndarray) -> float:
        """Relative luminance Y of a reflectance spectrum."""
        return self.basis.luminance(R)

    def reflectance_to_xyz(self, R: np.ndarray) -> np.ndarray:
        """Convert reflectance spectrum to CIE XYZ tristimulus values."""
        return self.basis.reflectance_to_xyz(R)

    def mix_to_xyz(self, R1: np.ndarray, R2: np.ndarray, c: float) -> np.ndarray:
        """
        Complete pipeline: mix two spectra and get XYZ.
        """
        R = self.mix_reflectance(R1, R2, c)
        R = self.apply_saunderson_correction(R)
        return self.reflectance_to_xyz(R)
