#!/usr/bin/env python3
"""
Benchmark: spectral strategies vs RGB Lerp

Prints saturation and hue of the midpoint mixes for the classic paint pairs,
times each strategy, and renders the gradients side by side.

Usage:
    pip install -e ".[viz]"
    python benchmarks/compare.py
"""

import time
from pathlib import Path

import numpy as np

from spectral_mixer import STRATEGIES, SpectralMixer

# matplotlib is optional, only needed for the image
try:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MPL = True
except ImportError:
    HAS_MPL = False


def rgb_lerp(c1, c2, t):
    """Naive RGB linear interpolation."""
    return tuple(int((1 - t) * c1[i] + t * c2[i]) for i in range(3))


def hue_of(r, g, b):
    """Return hue in degrees [0, 360)."""
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    cmax = max(r, g, b)
    cmin = min(r, g, b)
    delta = cmax - cmin
    if delta < 1e-8:
        return 0.0
    if cmax == r:
        h = 60 * (((g - b) / delta) % 6)
    elif cmax == g:
        h = 60 * (((b - r) / delta) + 2)
    else:
        h = 60 * (((r - g) / delta) + 4)
    return h % 360


def saturation_of(r, g, b):
    """Return HSL saturation in [0, 1]."""
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    cmax = max(r, g, b)
    cmin = min(r, g, b)
    delta = cmax - cmin
    if delta < 1e-8:
        return 0.0
    l = (cmax + cmin) / 2
    if l < 0.5:
        return delta / (cmax + cmin)
    return delta / (2 - cmax - cmin)


# ---------------------------------------------------------------------------
# Test cases
# ---------------------------------------------------------------------------

COLOR_PAIRS = [
    ("Blue + Yellow", (0, 33, 133), (252, 211, 0)),
    ("Blue + Ochre", (0, 53, 123), (215, 153, 0)),
    ("Red + Blue", (255, 39, 2), (0, 33, 133)),
    ("Red + Yellow", (255, 39, 2), (252, 211, 0)),
    ("Magenta + Yellow", (128, 2, 46), (252, 211, 0)),
    ("Blue + White", (0, 33, 133), (255, 255, 255)),
    ("Red + White", (255, 39, 2), (255, 255, 255)),
]

# Expected midpoint hues (approximate, for sanity checks)
EXPECTED_HUES = {
    "Blue + Yellow": (60, 180),
    "Blue + Ochre": (60, 180),
    "Red + Yellow": (15, 60),
}

MIXERS = {name: SpectralMixer(name) for name in sorted(STRATEGIES)}
SHORT = {"three_primary": "3P", "hue_sector": "Sector", "min_channel": "MinCh"}


# ---------------------------------------------------------------------------
# Core benchmark
# ---------------------------------------------------------------------------


def benchmark_mixing():
    print("=" * 80)
    print("  BENCHMARK: " + " / ".join(MIXERS) + " vs RGB Lerp")
    print("=" * 80)

    results = []
    for name, c1, c2 in COLOR_PAIRS:
        row = {"name": name, "c1": c1, "c2": c2, "RGB": rgb_lerp(c1, c2, 0.5)}
        for strategy, mixer in MIXERS.items():
            row[strategy] = tuple(mixer.mix(c1, c2, 0.5))[:3]
        results.append(row)

    print()
    header_line = f"  {'Pair':<18} {'RGB Lerp':>16}"
    for strategy in MIXERS:
        header_line += f" {SHORT[strategy]:>16}"
    print(header_line)
    print("  " + "-" * (18 + 17 * (len(MIXERS) + 1)))

    for r in results:
        line = f"  {r['name']:<18} {str(r['RGB']):>16}"
        for strategy in MIXERS:
            line += f" {str(r[strategy]):>16}"
        print(line)

    return results


def benchmark_saturation(results):
    """Compare saturation retention, the core quality metric."""
    print("\n" + "=" * 80)
    print("  SATURATION RETENTION (higher = more vivid, less muddy)")
    print("=" * 80)

    header_line = f"\n  {'Pair':<18} {'RGB':>8}"
    for strategy in MIXERS:
        header_line += f" {SHORT[strategy]:>8}"
    print(header_line)
    print("  " + "-" * (18 + 9 * (len(MIXERS) + 1)))

    wins = dict.fromkeys(MIXERS, 0)
    for r in results:
        sat_rgb = saturation_of(*r["RGB"])
        line = f"  {r['name']:<18} {sat_rgb:>8.3f}"
        for strategy in MIXERS:
            sat = saturation_of(*r[strategy])
            line += f" {sat:>8.3f}"
            if sat > sat_rgb:
                wins[strategy] += 1
        print(line)

    print()
    for strategy, n in wins.items():
        print(f"  {strategy} more saturated than RGB lerp: {n}/{len(results)} pairs")


def benchmark_hue_accuracy(results):
    """Check that midpoint hues make physical sense."""
    print("\n" + "=" * 80)
    print("  HUE ACCURACY (does blue+yellow actually make green?)")
    print("=" * 80)

    header_line = f"\n  {'Pair':<18} {'RGB':>8}"
    for strategy in MIXERS:
        header_line += f" {SHORT[strategy]:>8}"
    header_line += f" {'Expected':>10}"
    print(header_line)
    print("  " + "-" * (18 + 9 * (len(MIXERS) + 1) + 11))

    for r in results:
        expected = EXPECTED_HUES.get(r["name"])
        exp_str = f"{expected[0]}-{expected[1]}" if expected else "-"

        line = f"  {r['name']:<18} {hue_of(*r['RGB']):>8.1f}"
        for strategy in MIXERS:
            line += f" {hue_of(*r[strategy]):>8.1f}"
        line += f" {exp_str:>10}"
        print(line)


def benchmark_speed():
    """Time a single mix and a 256-step palette per strategy."""
    print("\n" + "=" * 80)
    print("  SPEED")
    print("=" * 80 + "\n")

    c1, c2 = (0, 33, 133), (252, 211, 0)
    for strategy, mixer in MIXERS.items():
        mixer.mix(c1, c2, 0.5)  # warm up

        n = 200
        t0 = time.perf_counter()
        for _ in range(n):
            mixer.mix(c1, c2, 0.5)
        t_mix = (time.perf_counter() - t0) / n

        t0 = time.perf_counter()
        mixer.palette(c1, c2, 256)
        t_palette = time.perf_counter() - t0

        print(
            f"  {strategy:<14} mix(): {t_mix * 1000:>7.3f} ms"
            f"   palette(256): {t_palette * 1000:>8.2f} ms"
        )


def generate_visual(results):
    """Generate comparison gradient image."""
    if not HAS_MPL:
        print("\n  (Install matplotlib for visual output: pip install matplotlib)")
        return

    print("\n  Generating visual comparison...")

    steps = 100
    methods = ["RGB Lerp"] + list(MIXERS)
    n_pairs = len(results)

    fig, axes = plt.subplots(
        n_pairs, len(methods), figsize=(3.5 * len(methods), 1.6 * n_pairs)
    )

    for row, r in enumerate(results):
        c1, c2 = r["c1"], r["c2"]

        for col, method in enumerate(methods):
            if method == "RGB Lerp":
                colors = [rgb_lerp(c1, c2, i / (steps - 1)) for i in range(steps)]
            else:
                colors = [tuple(c)[:3] for c in MIXERS[method].palette(c1, c2, steps)]
            gradient = np.array([colors], dtype=float) / 255.0

            ax = axes[row, col]
            ax.imshow(gradient, aspect="auto", interpolation="nearest")
            ax.set_xticks([])
            ax.set_yticks([])

            if row == 0:
                ax.set_title(method, fontsize=11, fontweight="bold")
            if col == 0:
                ax.set_ylabel(r["name"], fontsize=9, rotation=0, labelpad=70, va="center")

    plt.suptitle("Spectral Mixing Comparison", fontsize=14, fontweight="bold", y=1.01)
    plt.tight_layout()

    out_path = Path(__file__).parent / "comparison.png"
    plt.savefig(out_path, dpi=200, bbox_inches="tight", pad_inches=0.3)
    print(f"  Saved: {out_path}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main():
    results = benchmark_mixing()
    benchmark_saturation(results)
    benchmark_hue_accuracy(results)
    benchmark_speed()
    generate_visual(results)

    print("\n" + "=" * 80)
    print("  DONE")
    print("=" * 80)


if __name__ == "__main__":
    main()
