"""Tests for color parsing and serialization."""

import numpy as np
import pytest


def test_hex_forms_are_equivalent():
    from spectral_mixer import parse

    assert parse("#fff") == parse("#ffffff") == parse([255, 255, 255])
    assert parse("#00357b") == parse((0, 53, 123))


def test_short_hex_alpha():
    from spectral_mixer import parse

    color = parse("#abcd")

    assert (color.r, color.g, color.b) == (0xAA, 0xBB, 0xCC)
    assert color.a == pytest.approx(221 / 255)


def test_long_hex_alpha():
    from spectral_mixer import parse

    assert parse("#00357b80").a == pytest.approx(128 / 255)


def test_functional_notation():
    from spectral_mixer import parse, Color

    assert parse("rgb(0, 53, 123)") == Color(0, 53, 123, 1.0)
    assert parse("rgba(0, 53, 123, 0.5)").a == pytest.approx(0.5)
    assert parse("rgba(0, 53, 123, 0)").a == 0.0
    assert parse("rgba(0, 53, 123, .25)").a == pytest.approx(0.25)
    assert parse("rgba(0, 53, 123, 1.)").a == 1.0


def test_percent_channels():
    from spectral_mixer import parse

    color = parse("rgb(100%, 50%, 0%)")

    # 50% is exactly 127.5 and rounds half up
    assert (color.r, color.g, color.b) == (255, 128, 0)
    assert parse("rgb(20%, 1%, 99%)") == parse("rgb(51, 3, 252)")


def test_case_and_whitespace():
    from spectral_mixer import parse

    assert parse("  #ABCDEF ") == parse("#abcdef")
    assert parse("RGB( 1 ,2,  3 )") == parse("rgb(1, 2, 3)")


@pytest.mark.parametrize(
    "value",
    [
        "not-a-color",
        "#12345",
        "#1234567",
        "rgb(1, 2)",
        "rgba(0, 0, 0, 1.2.3)",
        "rgba(0, 0, 0, .)",
        "rgba(1,2,3,..5)",
        "",
        [1, 2],
        None,
        42,
        b"#fff",
    ],
)
def test_unrecognized_input_is_black(value):
    """Anything that is not a color parses to opaque black."""
    from spectral_mixer import parse, BLACK

    assert parse(value) == BLACK


def test_sequence_alpha_byte():
    """Alpha above 1 is read as a 0-255 byte."""
    from spectral_mixer import parse

    assert parse([10, 20, 30, 0.25]).a == pytest.approx(0.25)
    assert parse([10, 20, 30, 51]).a == pytest.approx(0.2)


def test_sequence_channels_are_rounded_and_clamped():
    from spectral_mixer import parse

    color = parse(np.array([-5.0, 127.5, 300.0]))

    assert (color.r, color.g, color.b) == (0, 128, 255)


def test_color_passes_through():
    from spectral_mixer import parse, Color

    color = Color(1, 2, 3, 0.5)
    assert parse(color) is color


def test_serialize_formats():
    from spectral_mixer import parse, serialize, RGB, RGBA, HEX, HEXA

    color = parse("rgba(171, 205, 239, 0.5)")

    assert serialize(color, HEX) == "#abcdef"
    assert serialize(color, HEXA) == "#abcdef80"
    assert serialize(color, RGB) == "rgb(171, 205, 239)"
    assert serialize(color, RGBA) == "rgba(171, 205, 239, 0.5)"


def test_serialize_accepts_names_and_ints():
    from spectral_mixer import parse, serialize

    color = parse("#abcdef")

    assert serialize(color, "hex") == serialize(color, "HEX") == serialize(color, 2)
    assert serialize(color, 3) == "#abcdefff"


def test_serialize_pads_hex():
    from spectral_mixer import serialize, Color

    assert serialize(Color(0, 5, 10)) == "#00050a"


def test_serialize_round_trip():
    from spectral_mixer import parse, serialize

    for text in ("#abcdef", "#000000", "#ffffff", "#00357b"):
        assert serialize(parse(text)) == text


def test_serialize_unknown_format():
    from spectral_mixer import serialize, BLACK

    with pytest.raises(ValueError):
        serialize(BLACK, "cmyk")
    with pytest.raises(ValueError):
        serialize(BLACK, 7)


def test_str_uses_hexa_when_translucent():
    from spectral_mixer import Color

    assert str(Color(255, 0, 0)) == "#ff0000"
    assert str(Color(255, 0, 0, 0.0)) == "#ff000000"


def test_normalize():
    from spectral_mixer import normalize

    assert normalize("#ff0000") == (1.0, 0.0, 0.0, 1.0)
    r, g, b, a = normalize("rgba(0, 51, 255, 0.5)")
    assert np.allclose((r, g, b, a), (0.0, 0.2, 1.0, 0.5))
