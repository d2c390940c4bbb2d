#!/usr/bin/env python3
"""
Export GLSL shader sources for every strategy and dialect.

Writes ``spectral_<strategy>.<dialect>`` library files plus a matching
fragment/vertex program pair, ready to drop into a WebGL project.

Usage:
    python scripts/export_shader.py
    python scripts/export_shader.py --strategy hue_sector --dialect glsl3
    python scripts/export_shader.py --refractive-index 1.5 --output-dir glass
"""

import argparse
from pathlib import Path

from spectral_mixer import STRATEGIES, SpectralMixer
from spectral_mixer.shader import DIALECTS


def main():
    parser = argparse.ArgumentParser(description="Export GLSL shader sources")
    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        action="append",
        help="Strategy to export (repeatable, default: all)",
    )
    parser.add_argument(
        "--dialect",
        choices=DIALECTS,
        action="append",
        help="Dialect to export (repeatable, default: all)",
    )
    parser.add_argument(
        "--refractive-index",
        type=float,
        default=None,
        help="Bake the Saunderson surface correction into the shaders",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="shaders",
        help="Output directory for shader files",
    )
    args = parser.parse_args()

    strategies = args.strategy or sorted(STRATEGIES)
    dialects = args.dialect or list(DIALECTS)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 70)
    print("  Exporting GLSL shaders")
    print("=" * 70)
    print(f"\nStrategies: {', '.join(strategies)}")
    print(f"Dialects: {', '.join(dialects)}")
    print(f"Output directory: {output_dir}\n")

    for strategy in strategies:
        mixer = SpectralMixer(strategy, refractive_index=args.refractive_index)
        for dialect in dialects:
            files = {
                f"spectral_{strategy}.{dialect}": mixer.shader.source(dialect),
                f"gradient_{strategy}.{dialect}.frag": mixer.shader.fragment_shader(dialect),
                f"gradient.{dialect}.vert": mixer.shader.vertex_shader(dialect),
            }
            for name, text in files.items():
                (output_dir / name).write_text(text)
                print(f"  {name:<40} {len(text.splitlines()):>5} lines")

    print("\n" + "=" * 70)
    print("  Done")
    print("=" * 70)


if __name__ == "__main__":
    main()
