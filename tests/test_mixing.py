"""Mixing tests for spectral_mixer."""

import numpy as np
import pytest

STRATEGIES = ["three_primary", "hue_sector", "min_channel"]

COLORS = [
    "#00357b",
    "#d79900",
    "#ffffff",
    "#000000",
    "#ff0000",
    "#00ff00",
    "#0000ff",
    "#808080",
    "#123456",
    "rgba(200, 100, 50, 0.25)",
]


def _close(a, b, tol=1):
    return all(abs(x - y) <= tol for x, y in zip(tuple(a)[:3], tuple(b)[:3]))


def test_import():
    """Package imports successfully."""
    from spectral_mixer import SpectralMixer, KubelkaMunk, mix, palette

    assert SpectralMixer is not None
    assert KubelkaMunk is not None
    assert callable(mix) and callable(palette)


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_mix_endpoints(strategy):
    """mix(t=0) returns color1, mix(t=1) returns color2."""
    from spectral_mixer import SpectralMixer, parse

    mixer = SpectralMixer(strategy)
    for c1 in COLORS:
        for c2 in COLORS:
            result_0 = mixer.mix(c1, c2, 0.0)
            result_1 = mixer.mix(c1, c2, 1.0)

            assert _close(result_0, parse(c1)), (
                f"mix(t=0) should return color1: got {result_0}, expected ~{parse(c1)}"
            )
            assert _close(result_1, parse(c2)), (
                f"mix(t=1) should return color2: got {result_1}, expected ~{parse(c2)}"
            )
            assert result_0.a == pytest.approx(parse(c1).a)
            assert result_1.a == pytest.approx(parse(c2).a)


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_mix_with_itself_is_identity(strategy):
    """Mixing a color with itself gives the same color for every t."""
    from spectral_mixer import SpectralMixer, parse

    mixer = SpectralMixer(strategy)
    for c in COLORS:
        for t in np.linspace(0, 1, 7):
            result = mixer.mix(c, c, t)
            assert _close(result, parse(c)), f"{c} at t={t:.2f} became {result}"


def test_blue_ochre_regression():
    """The signature pair mixes to an olive green, not the RGB average."""
    from spectral_mixer import mix

    result = mix("#00357b", "#d79900", 0.5, "hex")

    assert result == "#447925"
    assert result != "#6c9a3d"


@pytest.mark.parametrize("strategy", ["hue_sector", "min_channel"])
def test_blue_ochre_regression_hue_basis(strategy):
    """Both hue-basis strategies share the 38-band basis and agree."""
    from spectral_mixer import SpectralMixer

    mixer = SpectralMixer(strategy)
    assert mixer.mix("#00357b", "#d79900", 0.5, "hex") == "#437929"


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_blue_yellow_makes_green(strategy):
    """Blue + yellow should produce green, not gray."""
    from spectral_mixer import SpectralMixer

    mixer = SpectralMixer(strategy)
    r, g, b, _ = mixer.mix((0, 33, 133), (252, 211, 0), 0.5)

    assert g > b, f"Green channel should exceed blue in the mix, got {(r, g, b)}"
    assert g > r, f"Green channel should exceed red in the mix, got {(r, g, b)}"


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_black_white_midpoint(strategy):
    """Black and white meet at a mid gray, like a nearly black input does."""
    from spectral_mixer import SpectralMixer

    mixer = SpectralMixer(strategy)

    assert mixer.mix("#000000", "#ffffff", 0.5, "hex") == "#a6a6a6"
    assert mixer.mix("#010101", "#ffffff", 0.5, "hex") == "#a6a6a6"
    assert mixer.mix("#000000", "#000000", 0.5, "hex") == "#000000"


BLACK_MIDPOINTS = {
    "three_primary": {"#ff0000": "#76111b", "#0000ff": "#232149", "#fcd300": "#999627"},
    "hue_sector": {"#ff0000": "#731b14", "#0000ff": "#241e4b", "#fcd300": "#9a952c"},
    "min_channel": {"#ff0000": "#731b14", "#0000ff": "#241e4b", "#fcd300": "#9a952c"},
}


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_black_color_midpoint(strategy):
    """Black darkens a color instead of washing it out."""
    from spectral_mixer import SpectralMixer

    mixer = SpectralMixer(strategy)
    for color, expected in BLACK_MIDPOINTS[strategy].items():
        result = mixer.mix("#000000", color, 0.5, "hex")
        assert result == expected, f"black + {color} gave {result}, expected {expected}"


def test_upsampled_luminance_matches_linear():
    """The three-primary spectrum carries the same luminance as its input."""
    from spectral_mixer import SpectralMixer, parse, luminance
    from spectral_mixer.colorspace import to_linear

    mixer = SpectralMixer("three_primary")
    for c in COLORS:
        linear = to_linear(parse(c), mixer.basis.offset)
        R = mixer.upsampler.reflectance(linear)
        assert mixer.basis.luminance(R) == pytest.approx(luminance(linear), rel=1e-6), c


def test_palette_values():
    """A five-step palette along the blue/ochre pair."""
    from spectral_mixer import palette

    assert palette("#00357b", "#d79900", 5, "hex") == [
        "#00357b",
        "#0d4e35",
        "#447925",
        "#909515",
        "#d79900",
    ]


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_palette_endpoints(strategy):
    """First and last palette entries match mix at 0 and 1."""
    from spectral_mixer import SpectralMixer

    mixer = SpectralMixer(strategy)
    c1, c2 = "#123456", "rgba(250, 200, 10, 0.5)"
    for n in range(2, 7):
        colors = mixer.palette(c1, c2, n)
        assert len(colors) == n
        assert colors[0] == mixer.mix(c1, c2, 0)
        assert colors[-1] == mixer.mix(c1, c2, 1)


def test_palette_is_reproducible():
    from spectral_mixer import palette

    first = palette("#ff0000", "#0000ff", 9, "rgba")
    second = palette("#ff0000", "#0000ff", 9, "rgba")

    assert first == second


@pytest.mark.parametrize("size", [1, 0, -3, 2.5, True, "4"])
def test_palette_rejects_bad_size(size):
    """Palettes need at least two samples."""
    from spectral_mixer import palette

    with pytest.raises(ValueError):
        palette("#ff0000", "#0000ff", size)


def test_palette_accepts_numpy_integer():
    from spectral_mixer import palette

    assert len(palette("#ff0000", "#0000ff", np.int64(3))) == 3


def test_alpha_uses_remapped_concentration():
    """Alpha is interpolated with the luminance-weighted concentration."""
    from spectral_mixer import mix

    result = mix("rgba(0, 53, 123, 0)", "#d79900", 0.5)

    assert result.a == pytest.approx(0.903512, abs=1e-5)
    assert mix("rgba(0, 53, 123, 0)", "#d79900", 0.5, "hexa").endswith("e6")


def test_t_is_clamped():
    from spectral_mixer import mix

    assert mix("#00357b", "#d79900", -0.5) == mix("#00357b", "#d79900", 0)
    assert mix("#00357b", "#d79900", 1.5) == mix("#00357b", "#d79900", 1)


def test_non_finite_t_rejected():
    from spectral_mixer import mix

    with pytest.raises(ValueError):
        mix("#00357b", "#d79900", float("nan"))


def test_output_formats():
    from spectral_mixer import mix, Color

    assert isinstance(mix("#00357b", "#d79900", 0.5), Color)
    assert mix("#00357b", "#d79900", 0.5, "rgb") == "rgb(68, 121, 37)"
    assert mix("#00357b", "#d79900", 0.5, "rgba") == "rgba(68, 121, 37, 1)"
    assert mix("#00357b", "#d79900", 0.5, "hexa") == "#447925ff"

    with pytest.raises(ValueError):
        mix("#00357b", "#d79900", 0.5, "cmyk")


def test_unparseable_inputs_mix_as_black():
    from spectral_mixer import mix

    assert mix("not-a-color", "#000000", 0.5) == mix("#000000", "#000000", 0.5)


def test_unknown_strategy():
    from spectral_mixer import SpectralMixer

    with pytest.raises(ValueError):
        SpectralMixer("wondermix")


def test_saunderson_disabled_by_default():
    """Refractive index 1 (vacuum) is the identity correction."""
    from spectral_mixer import SpectralMixer

    plain = SpectralMixer()
    vacuum = SpectralMixer(refractive_index=1.0)

    assert not plain.km.saunderson
    assert vacuum.km.k1 == 0.0
    for t in (0.1, 0.5, 0.9):
        assert plain.mix("#00357b", "#d79900", t) == vacuum.mix("#00357b", "#d79900", t)


def test_saunderson_glass_darkens_white():
    """A glass surface reflects away part of the light."""
    from spectral_mixer import SpectralMixer

    glass = SpectralMixer(refractive_index=1.5)
    r, g, b, _ = glass.mix("#ffffff", "#ffffff", 0.5)

    assert glass.km.k1 == pytest.approx(0.04)
    assert max(r, g, b) < 255


def test_saunderson_rejects_bad_index():
    from spectral_mixer import SpectralMixer

    with pytest.raises(ValueError):
        SpectralMixer(refractive_index=0.0)


def test_concentration_remap():
    from spectral_mixer import linear_to_concentration

    assert linear_to_concentration(1.0, 1.0, 0.5) == pytest.approx(0.5)
    assert linear_to_concentration(1.0, 0.0, 0.5) == 0.0
    assert linear_to_concentration(0.0, 0.0, 0.3) == 0.3
    # a light second color pulls the mix toward it
    assert linear_to_concentration(0.1, 0.9, 0.5) == pytest.approx(0.9)


def test_km_inverts_ks():
    """km() is the inverse of ks() on (0, 1]."""
    from spectral_mixer.km_core import km, ks

    R = np.linspace(0.001, 1.0, 50)
    assert np.allclose(km(ks(R)), R, atol=1e-9)


def test_mix_reflectance_endpoints():
    from spectral_mixer import KubelkaMunk, RGB37

    model = KubelkaMunk(RGB37)
    R1 = np.full(RGB37.size, 0.2)
    R2 = np.full(RGB37.size, 0.8)

    assert np.allclose(model.mix_reflectance(R1, R2, 0.0), R1)
    assert np.allclose(model.mix_reflectance(R1, R2, 1.0), R2)
    mid = model.mix_reflectance(R1, R2, 0.5)
    assert np.all((mid > 0.2) & (mid < 0.8))


def test_channel_bounds():
    from spectral_mixer import SpectralMixer

    for strategy in STRATEGIES:
        mixer = SpectralMixer(strategy)
        for t in np.linspace(0, 1, 9):
            r, g, b, a = mixer.mix("#0d33e6", "#ccb31a", t)
            assert all(0 <= c <= 255 for c in (r, g, b))
            assert 0.0 <= a <= 1.0
