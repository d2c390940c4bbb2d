"""
Command line interface.

Usage:
    spectral-mixer mix "#00357b" "#d79900" 0.5
    spectral-mixer palette "#00357b" "#d79900" 9 --format rgb
    spectral-mixer --strategy min_channel shader --dialect glsl3 --program
"""

import argparse
import logging
import sys

from .api import DEFAULT_STRATEGY, SpectralMixer
from .codec import ColorFormat
from .shader import DIALECTS
from .upsampler import STRATEGIES

log = logging.getLogger(__name__)

FORMATS = [f.name.lower() for f in ColorFormat]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spectral-mixer",
        description="Mix colors like paint using Kubelka-Munk spectral mixing",
    )
    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default=DEFAULT_STRATEGY,
        help="Spectral upsampling strategy",
    )
    parser.add_argument(
        "--refractive-index",
        type=float,
        default=None,
        help="Enable the Saunderson surface correction (e.g. 1.5 for glass)",
    )
    parser.add_argument(
        "--surface-k2",
        type=float,
        default=0.0,
        help="Internal reflection coefficient for the surface correction",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_mix = sub.add_parser("mix", help="Mix two colors")
    p_mix.add_argument("color1")
    p_mix.add_argument("color2")
    p_mix.add_argument("t", type=float, nargs="?", default=0.5, help="Mixing ratio [0, 1]")
    p_mix.add_argument("--format", choices=FORMATS, default="hex")

    p_palette = sub.add_parser("palette", help="Evenly spaced mixes")
    p_palette.add_argument("color1")
    p_palette.add_argument("color2")
    p_palette.add_argument("size", type=int, help="Number of colors (>= 2)")
    p_palette.add_argument("--format", choices=FORMATS, default="hex")

    p_shader = sub.add_parser("shader", help="Print GLSL source")
    p_shader.add_argument("--dialect", choices=DIALECTS, default="glsl")
    p_shader.add_argument(
        "--program",
        action="store_true",
        help="Print a complete gradient fragment shader instead of the library",
    )
    p_shader.add_argument(
        "--vertex",
        action="store_true",
        help="Print the matching vertex shader",
    )

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        mixer = SpectralMixer(
            strategy=args.strategy,
            refractive_index=args.refractive_index,
            surface_k2=args.surface_k2,
        )
        log.info("Using %r", mixer.upsampler)

        if args.command == "mix":
            print(mixer.mix(args.color1, args.color2, args.t, args.format))
        elif args.command == "palette":
            for color in mixer.palette(args.color1, args.color2, args.size, args.format):
                print(color)
        elif args.command == "shader":
            if args.vertex:
                print(mixer.shader.vertex_shader(args.dialect))
            elif args.program:
                print(mixer.shader.fragment_shader(args.dialect))
            else:
                print(mixer.shader.source(args.dialect))
    except ValueError as exc:
        parser.error(str(exc))

    return 0


if __name__ == "__main__":
    sys.exit(main())
