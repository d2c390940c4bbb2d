#!/usr/bin/env python3
"""
Palette Example

Shows the spectral mixer next to plain RGB interpolation, prints palettes in
each output format, and writes a self-contained WebGL page that renders the
same gradient with the generated GLSL.
"""

import json
from pathlib import Path

from spectral_mixer import SpectralMixer, STRATEGIES, normalize


def demo_comparison():
    print("\n" + "=" * 60)
    print("DEMO 1: Spectral Mixing vs RGB Comparison")
    print("=" * 60)

    blue = (0, 33, 133)
    yellow = (252, 211, 0)

    print(f"\nMixing Blue RGB{blue} + Yellow RGB{yellow} at t=0.5")
    print("-" * 60)

    rgb_result = tuple(int((1 - 0.5) * blue[i] + 0.5 * yellow[i]) for i in range(3))
    print(f"\nRGB Lerp:        RGB{rgb_result}")
    print("  -> Muddy gray")

    for strategy in sorted(STRATEGIES):
        result = SpectralMixer(strategy).mix(blue, yellow, 0.5)
        print(f"{strategy + ':':<16} RGB{tuple(result)[:3]}  {result}")
    print("  -> Green!")


def demo_palettes():
    print("\n" + "=" * 60)
    print("DEMO 2: Palettes")
    print("=" * 60)

    mixer = SpectralMixer()
    for fmt in ("hex", "rgb", "rgba"):
        print(f"\n{fmt}:")
        for color in mixer.palette("#00357b", "rgba(215, 153, 0, 0.5)", 5, fmt):
            print(f"  {color}")


def demo_glazing():
    print("\n" + "=" * 60)
    print("DEMO 3: Glossy Surface (Saunderson correction)")
    print("=" * 60)

    matte = SpectralMixer()
    glossy = SpectralMixer(refractive_index=1.5)

    print(f"\n{'t':>5}  {'matte':>9}  {'glossy':>9}")
    for i in range(5):
        t = i / 4
        print(
            f"{t:>5.2f}  {matte.mix('#ff2702', '#ffffff', t, 'hex'):>9}"
            f"  {glossy.mix('#ff2702', '#ffffff', t, 'hex'):>9}"
        )


PAGE = """<!DOCTYPE html>
<html>
<body style="margin:0">
<canvas id="c" width="800" height="200"></canvas>
<script>
const vs = {vertex};
const fs = {fragment};
const gl = document.getElementById("c").getContext("webgl2");
function compile(type, src) {{
  const s = gl.createShader(type);
  gl.shaderSource(s, src);
  gl.compileShader(s);
  return s;
}}
const p = gl.createProgram();
gl.attachShader(p, compile(gl.VERTEX_SHADER, vs));
gl.attachShader(p, compile(gl.FRAGMENT_SHADER, fs));
gl.linkProgram(p);
gl.useProgram(p);
const buf = gl.createBuffer();
gl.bindBuffer(gl.ARRAY_BUFFER, buf);
gl.bufferData(gl.ARRAY_BUFFER, new Float32Array([0,0,0, 1,0,0, 0,1,0, 1,1,0]), gl.STATIC_DRAW);
const loc = gl.getAttribLocation(p, "aPosition");
gl.enableVertexAttribArray(loc);
gl.vertexAttribPointer(loc, 3, gl.FLOAT, false, 0, 0);
gl.uniform2f(gl.getUniformLocation(p, "u_resolution"), 800, 200);
gl.uniform4fv(gl.getUniformLocation(p, "u_color1"), {color1});
gl.uniform4fv(gl.getUniformLocation(p, "u_color2"), {color2});
gl.drawArrays(gl.TRIANGLE_STRIP, 0, 4);
</script>
</body>
</html>
"""


def demo_webgl(path="gradient.html"):
    print("\n" + "=" * 60)
    print("DEMO 4: WebGL Gradient")
    print("=" * 60)

    shader = SpectralMixer().shader
    html = PAGE.format(
        vertex=json.dumps(shader.vertex_shader("glsl3")),
        fragment=json.dumps(shader.fragment_shader("glsl3")),
        color1=json.dumps(list(normalize("#00357b"))),
        color2=json.dumps(list(normalize("#d79900"))),
    )
    Path(path).write_text(html)
    print(f"\nWrote {path} ({len(html)} bytes), open it in a browser")


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print(" SPECTRAL MIXER - PALETTE DEMO")
    print("=" * 60)

    demo_comparison()
    demo_palettes()
    demo_glazing()
    demo_webgl()

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)
