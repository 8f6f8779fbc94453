"""
Allow running the package directly: python -m mandelbrot_viewer
"""

import argparse
import logging
import sys

from .app import run


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="mandelbrot-viewer",
        description="Interactive Mandelbrot set viewer",
    )
    parser.add_argument("--width", type=int, help="window width in pixels (default 640)")
    parser.add_argument("--height", type=int, help="window height in pixels (default 480)")
    parser.add_argument(
        "--max-iterations",
        type=int,
        dest="max_iterations",
        help="starting iteration cap (default 255)",
    )
    parser.add_argument("--settings", help="JSON settings file overriding the defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every render and action")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(args.width, args.height, args.max_iterations, args.settings)


if __name__ == "__main__":
    sys.exit(main())
