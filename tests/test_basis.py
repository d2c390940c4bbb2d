"""Tests for the spectral basis tables."""

import numpy as np
import pytest


def test_basis_sizes():
    from spectral_mixer import RGB37, HUE38

    assert RGB37.size == 37
    assert HUE38.size == 38
    assert RGB37.wavelengths[0] == 380 and RGB37.wavelengths[-1] == 740
    assert HUE38.wavelengths[-1] == 750
    assert RGB37.cmf.shape == (3, 37)
    assert HUE38.spectra.shape == (7, 38)


def test_tables_are_read_only():
    from spectral_mixer import RGB37

    with pytest.raises(ValueError):
        RGB37.spectra[0, 0] = 0.5
    with pytest.raises(ValueError):
        RGB37.cmf[1, 3] = 0.5


@pytest.mark.parametrize("name", ["rgb37", "hue38"])
def test_observer_matches_primaries(name):
    """The primaries integrate to the columns of the sRGB matrix."""
    from spectral_mixer import get_basis, RGB_XYZ

    basis = get_basis(name)

    assert basis.consistency_error() < 1e-9
    assert np.allclose(basis.cmf @ basis.primaries.T, RGB_XYZ)


def test_raw_observer_needs_calibration():
    """The tabulated 37-band observer alone is off by several percent."""
    from spectral_mixer.basis import CMF_37, SPD_RED, SPD_GREEN, SPD_BLUE
    from spectral_mixer import RGB_XYZ

    raw = CMF_37 @ np.stack([SPD_RED, SPD_GREEN, SPD_BLUE]).T

    assert np.max(np.abs(raw - RGB_XYZ)) > 0.01


def test_hue_archetypes():
    from spectral_mixer import HUE38

    white = HUE38.archetype("white")
    red, green, blue = HUE38.primaries

    assert np.allclose(white, 1.0)
    assert np.allclose(red + green + blue, white)
    assert np.allclose(HUE38.archetype("cyan"), green + blue)
    assert np.allclose(HUE38.archetype("magenta"), red + blue)
    assert np.allclose(HUE38.archetype("yellow"), red + green)
    assert np.all(HUE38.spectra >= 0)


@pytest.mark.parametrize("name", ["rgb37", "hue38"])
def test_white_luminance(name):
    from spectral_mixer import get_basis

    basis = get_basis(name)
    white = basis.primaries.sum(axis=0)

    assert basis.luminance(white) == pytest.approx(1.0, abs=1e-6)
    assert np.allclose(basis.reflectance_to_linear(white), 1.0)


def test_basis_flags():
    from spectral_mixer import RGB37, HUE38

    assert RGB37.offset == 1e-8
    assert HUE38.offset == 0.0
    assert RGB37.floor == 1e-10
    assert HUE38.floor == 1e-8
    assert HUE38.spectral_luminance and not RGB37.spectral_luminance


def test_offset_black_stays_above_floor():
    """Black decoded with the offset is never lifted by the floor."""
    from spectral_mixer import RGB37
    from spectral_mixer.colorspace import uncompand

    black = float(uncompand(RGB37.offset))
    lowest = black * RGB37.primaries.sum(axis=0).min()

    assert lowest > RGB37.floor, f"floor {RGB37.floor} hides black at {lowest:.3g}"


def test_unknown_basis():
    from spectral_mixer import get_basis

    with pytest.raises(ValueError):
        get_basis("rgb99")
