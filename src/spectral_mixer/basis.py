"""
Spectral basis tables for reflectance reconstruction.

A basis bundles everything the pipeline needs to go from a linear RGB triple
to a reflectance spectrum and back: the archetype spectra the RGB triple is
decomposed into, the observer (color-matching) curves that project a spectrum
to CIE XYZ, and the sRGB/D65 matrices.

Two generations are provided:

* ``rgb37`` -- three spectral power distributions keyed by the sRGB primaries,
  sampled at 37 bands (380-740nm), with their own D65-weighted observer.
* ``hue38`` -- a seven-term hue basis (white, cyan, magenta, yellow, red,
  green, blue) sampled at 38 bands (380-750nm), integrated against the CIE
  1931 2-degree observer weighted by the D65 illuminant.

Observer curves are calibrated against the basis primaries on construction so
that white and each primary survive the round trip RGB -> spectrum -> RGB.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


# sRGB (D65) primaries
RGB_XYZ = np.array([
    [0.41239080, 0.35758434, 0.18048079],
    [0.21263901, 0.71516868, 0.07219232],
    [0.01933082, 0.11919478, 0.95053215],
])

XYZ_RGB = np.array([
    [ 3.24096994, -1.53738318, -0.49861076],
    [-0.96924364,  1.87596750,  0.04155506],
    [ 0.05563008, -0.20397696,  1.05697151],
])


# ---------------------------------------------------------------------------
# 37-band generation (380-740nm)
# ---------------------------------------------------------------------------

WAVELENGTHS_37 = np.arange(380, 741, 10)

SPD_RED = np.array([
    0.03065266, 0.03065266, 0.03012503, 0.02837440, 0.02443079, 0.01900359, 0.01345743, 0.00905147, 0.00606943, 0.00419240,
    0.00300621, 0.00229452, 0.00190474, 0.00175435, 0.00182349, 0.00218287, 0.00308472, 0.00539517, 0.01275154, 0.04939664,
    0.41424516, 0.89425217, 0.95202201, 0.96833286, 0.97175685, 0.97320302, 0.97387285, 0.97418395, 0.97432335, 0.97432335,
    0.97432335, 0.97432335, 0.97432335, 0.97432335, 0.97432335, 0.97432335, 0.97432335,
])

SPD_GREEN = np.array([
    0.00488428, 0.00488428, 0.00489302, 0.00505932, 0.00552416, 0.00668451, 0.00966823, 0.01843871, 0.05369084, 0.30997719,
    0.84166297, 0.95140393, 0.97711658, 0.98538119, 0.98819579, 0.98842729, 0.98651266, 0.98125477, 0.96796653, 0.92126320,
    0.54678757, 0.07097922, 0.02151275, 0.01120932, 0.00778212, 0.00633303, 0.00566048, 0.00534751, 0.00520568, 0.00520568,
    0.00520568, 0.00520568, 0.00520568, 0.00520568, 0.00520568, 0.00520568, 0.00520568,
])

SPD_BLUE = np.array([
    0.96446343, 0.96446661, 0.96499804, 0.96660443, 0.97009698, 0.97438902, 0.97695626, 0.97257598, 0.94029002, 0.68585683,
    0.15533920, 0.04629964, 0.02096763, 0.01284767, 0.00996131, 0.00937163, 0.01038752, 0.01334010, 0.01927821, 0.02934328,
    0.03897609, 0.03478168, 0.02647979, 0.02047109, 0.02047109, 0.02047109, 0.02047109, 0.02047109, 0.02047109, 0.02047109,
    0.02047109, 0.02047109, 0.02047109, 0.02047109, 0.02047109, 0.02047109, 0.02047109,
])

# D65-weighted observer, already scaled so that a perfect reflector has Y ~ 1
CMF_37 = np.array([
    [
        0.00013656, 0.00131637, 0.00640948, 0.01643026, 0.02407799, 0.03573573, 0.03894236, 0.03004572, 0.01860940, 0.00745020,
        0.00129006, 0.00052314, 0.00344737, 0.01065677, 0.02169564, 0.03395004, 0.04732762, 0.06029657, 0.07284094, 0.08385845,
        0.08612109, 0.08746894, 0.07951403, 0.06405614, 0.04521591, 0.03062648, 0.01838938, 0.01044320, 0.00576692, 0.00279715,
        0.00119535, 0.00059496, 0.00029365, 0.00011500, 0.00006279, 0.00003275, 0.00001376,
    ],
    [
        0.00001886, 0.00018140, 0.00080632, 0.00203723, 0.00344701, 0.00662872, 0.01029015, 0.01410577, 0.01944240, 0.02631783,
        0.03273183, 0.04424704, 0.05701200, 0.06907721, 0.08047999, 0.08541136, 0.08725039, 0.08416902, 0.07860677, 0.07114656,
        0.05907490, 0.05050107, 0.04005938, 0.02932589, 0.01939909, 0.01258803, 0.00734245, 0.00409671, 0.00223674, 0.00107927,
        0.00046015, 0.00022887, 0.00011300, 0.00004432, 0.00002425, 0.00001268, 0.00000535,
    ],
    [
        0.00060998, 0.00595953, 0.02967913, 0.07855475, 0.11921905, 0.18425721, 0.21077492, 0.17634280, 0.12741269, 0.07374910,
        0.03663768, 0.01923495, 0.00807728, 0.00335702, 0.00140323, 0.00053757, 0.00020463, 0.00007431, 0.00002725, 0.00001053,
        0.00000391, 0.00000166, 0.00000072, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
        0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    ],
])


# ---------------------------------------------------------------------------
# 38-band generation (380-750nm)
# ---------------------------------------------------------------------------

WAVELENGTHS_38 = np.arange(380, 751, 10)

# CIE 1931 2° Standard Observer color matching functions (10nm sampling)
CIE_X_BAR = np.array([
    0.0014, 0.0042, 0.0143, 0.0435, 0.1344, 0.2839, 0.3483, 0.3362, 0.2908, 0.1954,
    0.0956, 0.0320, 0.0049, 0.0093, 0.0633, 0.1655, 0.2904, 0.4334, 0.5945, 0.7621,
    0.9163, 1.0263, 1.0622, 1.0026, 0.8544, 0.6424, 0.4479, 0.2835, 0.1649, 0.0874,
    0.0468, 0.0227, 0.0114, 0.0058, 0.0029, 0.0014, 0.0007, 0.0003
])

CIE_Y_BAR = np.array([
    0.0000, 0.0001, 0.0004, 0.0012, 0.0040, 0.0116, 0.0230, 0.0380, 0.0600, 0.0910,
    0.1390, 0.2080, 0.3230, 0.5030, 0.7100, 0.8620, 0.9540, 0.9950, 0.9950, 0.9520,
    0.8700, 0.7570, 0.6310, 0.5030, 0.3810, 0.2650, 0.1750, 0.1070, 0.0610, 0.0320,
    0.0170, 0.0082, 0.0041, 0.0021, 0.0010, 0.0005, 0.0003, 0.0001
])

CIE_Z_BAR = np.array([
    0.0065, 0.0201, 0.0679, 0.2074, 0.6456, 1.3856, 1.7471, 1.7721, 1.6692, 1.2876,
    0.8130, 0.4652, 0.2720, 0.1582, 0.0782, 0.0422, 0.0203, 0.0087, 0.0039, 0.0021,
    0.0017, 0.0011, 0.0008, 0.0003, 0.0002, 0.0000, 0.0000, 0.0000, 0.0000, 0.0000,
    0.0000, 0.0000, 0.0000, 0.0000, 0.0000, 0.0000, 0.0000, 0.0000
])

# D65 illuminant spectral power distribution (10nm sampling)
D65_ILLUMINANT = np.array([
    49.98, 52.31, 54.65, 68.70, 82.75, 87.12, 91.49, 92.46, 93.43, 90.06,
    86.68, 95.77, 104.86, 110.94, 117.01, 117.41, 117.81, 116.34, 114.86, 115.39,
    115.92, 112.37, 108.81, 109.08, 109.35, 108.58, 107.80, 106.30, 104.79, 106.24,
    107.69, 106.05, 104.41, 104.23, 104.05, 102.02, 100.00, 98.17
])

HUE_ARCHETYPES = ("white", "cyan", "magenta", "yellow", "red", "green", "blue")
PRIMARIES = ("red", "green", "blue")

# Smallest reflectance handed to the mixer; K/S divides by every band.
REFLECTANCE_FLOOR = 1e-8

# Offset bases decode black to offset / 12.92 in every channel. Their floor
# must stay below that reconstruction so black keeps a spectrum proportional
# to its linear luminance.
OFFSET_FLOOR = 1e-10


def _hue_archetypes() -> Dict[str, np.ndarray]:
    """Seven-term hue basis on the 38-band grid.

    The three primary curves are normalized to a partition of unity so the
    white archetype is a perfect reflector and every secondary is bounded by
    one. The 750nm sample repeats 740nm, where all three curves are flat.
    """
    primaries = np.stack([SPD_RED, SPD_GREEN, SPD_BLUE])
    primaries = primaries / primaries.sum(axis=0)
    primaries = np.concatenate([primaries, primaries[:, -1:]], axis=1)
    red, green, blue = primaries

    return {
        "white": np.ones(len(WAVELENGTHS_38)),
        "cyan": green + blue,
        "magenta": red + blue,
        "yellow": red + green,
        "red": red,
        "green": green,
        "blue": blue,
    }


def calibrate_observer(cmf: np.ndarray, primaries: np.ndarray) -> np.ndarray:
    """
    Rescale observer rows so the primaries integrate to the sRGB columns.

    Solves ``T @ cmf @ primaries.T == RGB_XYZ`` for the 3x3 ``T`` and returns
    ``T @ cmf``.

    Args:
        cmf: Raw 3xN observer (x̄, ȳ, z̄ rows, any illuminant weighting).
        primaries: 3xN red, green, blue archetype spectra.
    """
    tristimulus = cmf @ primaries.T  # column i = XYZ of primary i
    return RGB_XYZ @ np.linalg.inv(tristimulus) @ cmf


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, dtype=np.float64)
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class SpectralBasis:
    """
    Read-only reflectance basis plus the observer it is calibrated against.

    Attributes:
        name: Registry key (``"rgb37"``, ``"hue38"``).
        wavelengths: Band centers in nm (N).
        names: Archetype names, in the row order of ``spectra``.
        spectra: k x N archetype reflectances.
        cmf: 3 x N calibrated observer (X, Y, Z rows).
        offset: Added to normalized sRGB channels before decoding and
            subtracted after encoding. Keeps black away from an all-zero
            spectrum; not a color-accuracy feature.
        floor: Minimum value of every reconstructed band.
        spectral_luminance: Take the concentration-remap luminance from the
            spectrum's Y projection instead of the linear RGB triple.
    """

    name: str
    wavelengths: np.ndarray
    names: Tuple[str, ...]
    spectra: np.ndarray
    cmf: np.ndarray
    offset: float = 0.0
    floor: float = REFLECTANCE_FLOOR
    spectral_luminance: bool = False

    def __post_init__(self):
        n = len(self.wavelengths)
        assert self.spectra.shape == (len(self.names), n), (
            f"{self.name}: spectra must be {len(self.names)}x{n}"
        )
        assert self.cmf.shape == (3, n), f"{self.name}: cmf must be 3x{n}"
        assert np.all(self.spectra >= 0), f"{self.name}: spectra must be non-negative"
        assert self.floor > 0, "reflectance floor must be positive"
        assert set(PRIMARIES) <= set(self.names), (
            f"{self.name}: basis must contain the red, green and blue primaries"
        )
        error = self.consistency_error()
        assert error < 1e-9, f"{self.name}: observer/basis mismatch {error:.3g}"

    @property
    def size(self) -> int:
        """Number of spectral bands."""
        return len(self.wavelengths)

    def archetype(self, name: str) -> np.ndarray:
        return self.spectra[self.names.index(name)]

    @property
    def primaries(self) -> np.ndarray:
        """3 x N red, green, blue spectra."""
        return np.stack([self.archetype(p) for p in PRIMARIES])

    def reflectance_to_xyz(self, R: np.ndarray) -> np.ndarray:
        """Project a spectrum to CIE XYZ (Y = 1 for a perfect reflector)."""
        return self.cmf @ R

    def reflectance_to_linear(self, R: np.ndarray) -> np.ndarray:
        """Project a spectrum back to linear sRGB through the observer."""
        return XYZ_RGB @ self.reflectance_to_xyz(R)

    def luminance(self, R: np.ndarray) -> float:
        return float(self.cmf[1] @ R)

    def consistency_error(self) -> float:
        """Largest deviation of the primaries' tristimulus from ``RGB_XYZ``."""
        return float(np.max(np.abs(self.cmf @ self.primaries.T - RGB_XYZ)))


def _build_rgb37() -> SpectralBasis:
    spectra = np.stack([SPD_RED, SPD_GREEN, SPD_BLUE])
    return SpectralBasis(
        name="rgb37",
        wavelengths=_frozen(WAVELENGTHS_37),
        names=PRIMARIES,
        spectra=_frozen(spectra),
        cmf=_frozen(calibrate_observer(CMF_37, spectra)),
        offset=1e-8,
        floor=OFFSET_FLOOR,
    )


def _build_hue38() -> SpectralBasis:
    archetypes = _hue_archetypes()
    spectra = np.stack([archetypes[k] for k in HUE_ARCHETYPES])
    cmf = np.stack([CIE_X_BAR, CIE_Y_BAR, CIE_Z_BAR]) * D65_ILLUMINANT
    primaries = np.stack([archetypes[k] for k in PRIMARIES])
    return SpectralBasis(
        name="hue38",
        wavelengths=_frozen(WAVELENGTHS_38),
        names=HUE_ARCHETYPES,
        spectra=_frozen(spectra),
        cmf=_frozen(calibrate_observer(cmf, primaries)),
        spectral_luminance=True,
    )


RGB37 = _build_rgb37()
HUE38 = _build_hue38()

BASES: Dict[str, SpectralBasis] = {
    RGB37.name: RGB37,
    HUE38.name: HUE38,
}


def get_basis(name: str) -> SpectralBasis:
    """Look up a basis by name."""
    try:
        return BASES[name]
    except KeyError:
        raise ValueError(
            f"Unknown spectral basis {name!r}; choose one of {sorted(BASES)}"
        ) from None
