"""
GLSL source generation for the spectral mixer.

The shader tables are printed from the same :class:`SpectralBasis` arrays and
epsilon constants the host-side mixer uses, so a GPU mix agrees with
:meth:`SpectralMixer.mix` up to float precision.

Two dialects:

* ``glsl`` -- GLSL ES 1.00 (WebGL 1). No array constructors, so every band
  is written out as its own statement.
* ``glsl3`` -- GLSL ES 3.00 (WebGL 2). Tables are ``const float[]`` arrays
  and the matrices ``const mat3``.

Both define ``vec4 spectral_mix(vec4 color1, vec4 color2, float t)`` (colors
normalized to [0, 1], see :func:`~spectral_mixer.codec.normalize`) and a
``vec3`` overload.
"""

import logging
from string import Template

import numpy as np

from .basis import RGB_XYZ, XYZ_RGB
from .km_core import KubelkaMunk
from .upsampler import ThreePrimaryUpsampler, Upsampler

log = logging.getLogger(__name__)

DIALECTS = ("glsl", "glsl3")


def _f(v: float) -> str:
    return f"{float(v):.8f}"


def _const(v: float) -> str:
    # exponent form keeps tiny epsilons that .8f would round to zero
    text = f"{float(v):g}"
    return text if ("." in text or "e" in text) else text + ".0"


def _vec3(values) -> str:
    return "vec3(" + ", ".join(_f(v) for v in values) + ")"


def _mat3(m: np.ndarray, indent: str = "    ") -> str:
    rows = (f"{indent}{_vec3(row)}" for row in m)
    return "mat3(\n" + ",\n".join(rows) + "\n)"


def _array(name: str, values) -> str:
    chunks = [values[i:i + 10] for i in range(0, len(values), 10)]
    body = ",\n".join("    " + ", ".join(_f(v) for v in chunk) for chunk in chunks)
    return (
        f"const float {name}[SPECTRAL_SIZE] = float[SPECTRAL_SIZE](\n{body}\n);"
    )


_HEADER = Template("""\
#ifndef SPECTRAL
#define SPECTRAL

const int SPECTRAL_SIZE = $size;
const float SPECTRAL_GAMMA = 2.4;
const float SPECTRAL_EPSILON = $offset;
const float SPECTRAL_FLOOR = $floor;
""")

_TRANSFER = """\
float spectral_uncompand(float x) {
    return (x < 0.04045) ? x / 12.92 : pow((x + 0.055) / 1.055, SPECTRAL_GAMMA);
}

float spectral_compand(float x) {
    return (x < 0.0031308) ? x * 12.92 : 1.055 * pow(x, 1.0 / SPECTRAL_GAMMA) - 0.055;
}

vec3 spectral_srgb_to_linear(vec3 srgb) {
    return vec3(
        spectral_uncompand(srgb.r + SPECTRAL_EPSILON),
        spectral_uncompand(srgb.g + SPECTRAL_EPSILON),
        spectral_uncompand(srgb.b + SPECTRAL_EPSILON));
}

vec3 spectral_linear_to_srgb(vec3 lrgb) {
    return clamp(vec3(
        spectral_compand(lrgb.r - SPECTRAL_EPSILON),
        spectral_compand(lrgb.g - SPECTRAL_EPSILON),
        spectral_compand(lrgb.b - SPECTRAL_EPSILON)), 0.0, 1.0);
}
"""

_MIN_CHANNEL_WEIGHTS = """\
void spectral_weights(vec3 lrgb, out float w, out vec3 cmy, out vec3 rgb) {
    w = min(lrgb.r, min(lrgb.g, lrgb.b));
    vec3 c = lrgb - w;
    cmy = vec3(min(c.g, c.b), min(c.r, c.b), min(c.r, c.g));
    rgb = vec3(
        max(0.0, min(c.r - c.b, c.r - c.g)),
        max(0.0, min(c.g - c.b, c.g - c.r)),
        max(0.0, min(c.b - c.g, c.b - c.r)));
}
"""

_HUE_SECTOR_WEIGHTS = """\
void spectral_weights(vec3 lrgb, out float w, out vec3 cmy, out vec3 rgb) {
    float r = lrgb.r;
    float g = lrgb.g;
    float b = lrgb.b;
    cmy = vec3(0.0);
    rgb = vec3(0.0);

    if (b <= r && b <= g) {
        w = b;
        if (r >= g) { cmy.z = g - b; rgb.x = r - g; } else { cmy.z = r - b; rgb.y = g - r; }
    } else if (g <= r && g <= b) {
        w = g;
        if (r >= b) { cmy.y = b - g; rgb.x = r - b; } else { cmy.y = r - g; rgb.z = b - r; }
    } else {
        w = r;
        if (g >= b) { cmy.x = b - r; rgb.y = g - b; } else { cmy.x = g - r; rgb.z = b - g; }
    }
}
"""

_WEIGHTS = {
    "min_channel": _MIN_CHANNEL_WEIGHTS,
    "hue_sector": _HUE_SECTOR_WEIGHTS,
}

_MIX = Template("""\
float spectral_linear_to_concentration(float l1, float l2, float t) {
    float t1 = l1 * pow(1.0 - t, 2.0);
    float t2 = l2 * pow(t, 2.0);
    float total = t1 + t2;

    return (total == 0.0) ? t : t2 / total;
}

float spectral_ks(float R) {
    return (1.0 - R) * (1.0 - R) / (2.0 * R);
}

float spectral_km(float KS) {
    return 1.0 + KS - sqrt(KS * KS + 2.0 * KS);
}

vec4 spectral_mix(vec4 color1, vec4 color2, float t) {
    vec3 lrgb1 = spectral_srgb_to_linear(color1.rgb);
    vec3 lrgb2 = spectral_srgb_to_linear(color2.rgb);

    float R1[SPECTRAL_SIZE];
    float R2[SPECTRAL_SIZE];

    spectral_linear_to_reflectance(lrgb1, R1);
    spectral_linear_to_reflectance(lrgb2, R2);

    float l1 = spectral_luminance(lrgb1, R1);
    float l2 = spectral_luminance(lrgb2, R2);

    t = spectral_linear_to_concentration(l1, l2, t);

    float R[SPECTRAL_SIZE];

    for (int i = 0; i < SPECTRAL_SIZE; i++) {
        float KS = (1.0 - t) * spectral_ks(R1[i]) + t * spectral_ks(R2[i]);
        float KM = spectral_km(KS);
$saunderson
        R[i] = KM;
    }

    vec3 rgb = spectral_xyz_to_srgb(spectral_reflectance_to_xyz(R));

    return vec4(rgb, mix(color1.a, color2.a, t));
}

vec3 spectral_mix(vec3 color1, vec3 color2, float t) {
    return spectral_mix(vec4(color1, 1.0), vec4(color2, 1.0), t).rgb;
}

#endif
""")

_VERTEX = Template("""\
$version
attribute vec3 aPosition;

void main() {
    vec4 positionVec4 = vec4(aPosition, 1.0);

    positionVec4.xy = positionVec4.xy * 2.0 - 1.0;

    gl_Position = positionVec4;
}
""")

_FRAGMENT = Template("""\
$version
#ifdef GL_ES
precision highp float;
#endif

uniform vec2 u_resolution;
uniform vec4 u_color1;
uniform vec4 u_color2;
$out
$library
void main() {
    vec2 st = gl_FragCoord.xy / u_resolution.xy;

    $target = spectral_mix(u_color1, u_color2, st.x);
}
""")


class ShaderSource:
    """
    Emits the mixer as GLSL for one upsampler / Kubelka-Munk configuration.

    Sources are generated on first request and cached.
    """

    def __init__(self, upsampler: Upsampler, km: KubelkaMunk):
        self.upsampler = upsampler
        self.km = km
        self.basis = upsampler.basis
        self._cache = {}

    def _three_primary(self) -> bool:
        return isinstance(self.upsampler, ThreePrimaryUpsampler)

    # -- shared pieces -------------------------------------------------------

    def _header(self) -> str:
        text = _HEADER.substitute(
            size=self.basis.size,
            offset=_const(self.basis.offset),
            floor=_const(self.basis.floor),
        )
        if self.km.saunderson:
            text += f"const float SPECTRAL_K1 = {_f(self.km.k1)};\n"
            text += f"const float SPECTRAL_K2 = {_f(self.km.k2)};\n"
        return text

    def _saunderson(self) -> str:
        if not self.km.saunderson:
            return ""
        return (
            "        KM = ((1.0 - SPECTRAL_K1) * (1.0 - SPECTRAL_K2) * KM)"
            " / (1.0 - SPECTRAL_K2 * KM);"
        )

    def _weights(self) -> str:
        if self._three_primary():
            return ""
        return _WEIGHTS[self.upsampler.name]

    def _band_sum(self, i: int) -> str:
        """Reflectance expression for band ``i`` in terms of the weights."""
        spectra = dict(zip(self.upsampler.archetypes, self.upsampler.spectra[:, i]))
        if self._three_primary():
            return f"dot({_vec3([spectra[k] for k in ('red', 'green', 'blue')])}, lrgb)"
        return (
            f"w * {_f(spectra['white'])}"
            f" + dot(cmy, {_vec3([spectra[k] for k in ('cyan', 'magenta', 'yellow')])})"
            f" + dot(rgb, {_vec3([spectra[k] for k in ('red', 'green', 'blue')])})"
        )

    def _luminance(self) -> str:
        if self.basis.spectral_luminance:
            body = "    return spectral_reflectance_to_xyz(R).y;"
        else:
            body = f"    return dot({_vec3(RGB_XYZ[1])}, lrgb);"
        return (
            "float spectral_luminance(vec3 lrgb, float R[SPECTRAL_SIZE]) {\n"
            f"{body}\n"
            "}\n"
        )

    def _prologue(self) -> str:
        if self._three_primary():
            return "    lrgb = max(lrgb, 0.0);\n"
        return (
            "    float w;\n"
            "    vec3 cmy;\n"
            "    vec3 rgb;\n"
            "    spectral_weights(max(lrgb, 0.0), w, cmy, rgb);\n"
        )

    # -- GLSL ES 1.00 ----------------------------------------------------------

    def _glsl_reflectance(self) -> str:
        lines = [
            "void spectral_linear_to_reflectance(vec3 lrgb, inout float R[SPECTRAL_SIZE]) {",
            self._prologue(),
        ]
        for i in range(self.basis.size):
            lines.append(f"    R[{i}] = max(SPECTRAL_FLOOR, {self._band_sum(i)});")
        lines.append("}\n")
        return "\n".join(lines)

    def _glsl_xyz(self) -> str:
        lines = [
            "vec3 spectral_reflectance_to_xyz(float R[SPECTRAL_SIZE]) {",
            "    vec3 xyz = vec3(0.0);",
            "",
        ]
        for i in range(self.basis.size):
            lines.append(f"    xyz += R[{i}] * {_vec3(self.basis.cmf[:, i])};")
        lines += ["", "    return xyz;", "}\n"]
        return "\n".join(lines)

    def _glsl_to_srgb(self) -> str:
        rows = "\n".join(f"    XYZ_RGB[{i}] = {_vec3(row)};" for i, row in enumerate(XYZ_RGB))
        return (
            "vec3 spectral_xyz_to_srgb(vec3 xyz) {\n"
            "    mat3 XYZ_RGB;\n\n"
            f"{rows}\n\n"
            "    float r = dot(XYZ_RGB[0], xyz);\n"
            "    float g = dot(XYZ_RGB[1], xyz);\n"
            "    float b = dot(XYZ_RGB[2], xyz);\n\n"
            "    return spectral_linear_to_srgb(vec3(r, g, b));\n"
            "}\n"
        )

    # -- GLSL ES 3.00 ----------------------------------------------------------

    def _glsl3_tables(self) -> str:
        tables = [
            _array(f"SPECTRAL_SPD_{name.upper()}", self.basis.archetype(name))
            for name in self.upsampler.archetypes
        ]
        for axis, row in zip("XYZ", self.basis.cmf):
            tables.append(_array(f"SPECTRAL_CMF_{axis}", row))
        tables.append(f"const mat3 SPECTRAL_XYZ_RGB = {_mat3(XYZ_RGB)};")
        return "\n\n".join(tables) + "\n"

    def _glsl3_reflectance(self) -> str:
        if self._three_primary():
            band = (
                "dot(vec3(SPECTRAL_SPD_RED[i], SPECTRAL_SPD_GREEN[i], "
                "SPECTRAL_SPD_BLUE[i]), lrgb)"
            )
        else:
            band = (
                "w * SPECTRAL_SPD_WHITE[i]"
                "\n            + dot(cmy, vec3(SPECTRAL_SPD_CYAN[i], SPECTRAL_SPD_MAGENTA[i], SPECTRAL_SPD_YELLOW[i]))"
                "\n            + dot(rgb, vec3(SPECTRAL_SPD_RED[i], SPECTRAL_SPD_GREEN[i], SPECTRAL_SPD_BLUE[i]))"
            )
        return (
            "void spectral_linear_to_reflectance(vec3 lrgb, inout float R[SPECTRAL_SIZE]) {\n"
            f"{self._prologue()}\n"
            "    for (int i = 0; i < SPECTRAL_SIZE; i++) {\n"
            f"        R[i] = max(SPECTRAL_FLOOR, {band});\n"
            "    }\n"
            "}\n"
        )

    def _glsl3_xyz(self) -> str:
        return (
            "vec3 spectral_reflectance_to_xyz(float R[SPECTRAL_SIZE]) {\n"
            "    vec3 xyz = vec3(0.0);\n\n"
            "    for (int i = 0; i < SPECTRAL_SIZE; i++) {\n"
            "        xyz += R[i] * vec3(SPECTRAL_CMF_X[i], SPECTRAL_CMF_Y[i], SPECTRAL_CMF_Z[i]);\n"
            "    }\n\n"
            "    return xyz;\n"
            "}\n"
        )

    def _glsl3_to_srgb(self) -> str:
        return (
            "vec3 spectral_xyz_to_srgb(vec3 xyz) {\n"
            "    float r = dot(SPECTRAL_XYZ_RGB[0], xyz);\n"
            "    float g = dot(SPECTRAL_XYZ_RGB[1], xyz);\n"
            "    float b = dot(SPECTRAL_XYZ_RGB[2], xyz);\n\n"
            "    return spectral_linear_to_srgb(vec3(r, g, b));\n"
            "}\n"
        )

    # -- public --------------------------------------------------------------

    def _build(self, dialect: str) -> str:
        if dialect == "glsl":
            parts = [
                self._header(),
                _TRANSFER,
                self._weights(),
                self._glsl_reflectance(),
                self._glsl_xyz(),
                self._glsl_to_srgb(),
            ]
        elif dialect == "glsl3":
            parts = [
                self._header(),
                self._glsl3_tables(),
                _TRANSFER,
                self._weights(),
                self._glsl3_reflectance(),
                self._glsl3_xyz(),
                self._glsl3_to_srgb(),
            ]
        else:
            raise ValueError(f"Unknown shader dialect {dialect!r}; choose one of {DIALECTS}")

        parts += [self._luminance(), _MIX.substitute(saunderson=self._saunderson())]
        log.debug("Generated %s source for %r", dialect, self.upsampler)
        return "\n".join(p for p in parts if p)

    def source(self, dialect: str = "glsl") -> str:
        """``spectral_mix`` library source in the given dialect."""
        if dialect not in self._cache:
            self._cache[dialect] = self._build(dialect)
        return self._cache[dialect]

    def glsl(self) -> str:
        return self.source("glsl")

    def glsl3(self) -> str:
        return self.source("glsl3")

    def vertex_shader(self, dialect: str = "glsl") -> str:
        """Full-screen quad vertex shader matching :meth:`fragment_shader`."""
        text = _VERTEX.substitute(version="#version 300 es" if dialect == "glsl3" else "")
        if dialect == "glsl3":
            text = text.replace("attribute vec3", "in vec3")
        return text.lstrip("\n")

    def fragment_shader(self, dialect: str = "glsl") -> str:
        """
        Fragment shader drawing a horizontal color1 -> color2 gradient.

        Uniforms: ``u_resolution`` (vec2), ``u_color1`` and ``u_color2``
        (normalized vec4).
        """
        library = self.source(dialect)
        if dialect == "glsl3":
            text = _FRAGMENT.substitute(
                version="#version 300 es",
                out="\nout vec4 fragColor;\n",
                library=library,
                target="fragColor",
            )
        else:
            text = _FRAGMENT.substitute(
                version="", out="", library=library, target="gl_FragColor"
            )
        return text.lstrip("\n")
