import sys
import time
from argparse import ArgumentParser
from pathlib import Path
from typing import Callable, Optional, TypeVar

import numpy as np
import PIL.Image

from mandelbrot import THREADS, Bounds, partition_bands, render_concurrent

_VERBOSE_FLAGS = {"--verbose", "-v"}
VERBOSE = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])

T = TypeVar("T")


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


class _ArgumentParser(ArgumentParser):
    """Argument parser that exits with status 1 on bad input."""

    def _parse_optional(self, arg_string):
        # Points such as -1.5,0.5 are positionals, not flags.
        if parse_complex(arg_string) is not None:
            return None
        return super()._parse_optional(arg_string)

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = _ArgumentParser(description="Render the Mandelbrot set as a grayscale PNG.")

    parser.add_argument('output', type=str, metavar='TARGET_FILE_NAME_PNG',
                        help='path of the PNG file to write')

    parser.add_argument('bounds', type=str, metavar='BOUNDS',
                        help='image size in pixels, e.g. 1024x768')

    parser.add_argument('upper_left', type=str, metavar='UPPER_LEFT',
                        help='complex point at the upper-left corner, e.g. -1.0,1.0')

    parser.add_argument('lower_right', type=str, metavar='LOWER_RIGHT',
                        help='complex point at the lower-right corner, e.g. 1.0,-1.0')

    parser.add_argument('--threads', type=int, dest='threads', metavar='THREADS', default=THREADS,
                        help='number of worker threads, one horizontal band each')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging of the render progress.')

    return parser


def parse_pair(value: str, separator: str, convert: Callable[[str], T]) -> Optional[tuple[T, T]]:
    """Split ``value`` at the first ``separator`` and convert both halves.

    Returns ``None`` when the separator is missing or either half does not
    convert.
    """

    index = value.find(separator)
    if index == -1:
        return None
    left = value[:index].strip()
    right = value[index + 1:].strip()
    try:
        return convert(left), convert(right)
    except ValueError:
        log(f"Tried to parse, and failed: [{left}] [{right}]")
        return None


def parse_complex(value: str) -> Optional[complex]:
    pair = parse_pair(value, ',', float)
    if pair is None:
        return None
    re, im = pair
    return complex(re, im)


def parse_bounds(value: str) -> Optional[Bounds]:
    pair = parse_pair(value, 'x', int)
    if pair is None:
        return None
    width, height = pair
    if width <= 0 or height <= 0:
        log(f"Bounds must be positive, got {width}x{height}")
        return None
    return Bounds(width, height)


def write_image(output_path: Path, pixels: np.ndarray, bounds: Bounds) -> None:
    """Write ``pixels`` to ``output_path`` as an 8-bit grayscale PNG."""

    image = PIL.Image.fromarray(pixels.reshape(bounds.height, bounds.width))
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format="PNG")


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    bounds = parse_bounds(opt.bounds)
    if bounds is None:
        parser.error(f"Can't parse bounds: '{opt.bounds}'")
    upper_left = parse_complex(opt.upper_left)
    if upper_left is None:
        parser.error(f"Can't parse upper left point: '{opt.upper_left}'")
    lower_right = parse_complex(opt.lower_right)
    if lower_right is None:
        parser.error(f"Can't parse lower right point: '{opt.lower_right}'")
    if opt.threads < 1:
        parser.error("--threads must be at least 1.")

    output_path = Path(opt.output).expanduser().resolve()

    log(f"Rendering {bounds.width}x{bounds.height} from {upper_left} to {lower_right}")
    bands = partition_bands(bounds, upper_left, lower_right, opt.threads)
    log(f"{len(bands)} bands of up to {bands[0].bounds.height} rows on {opt.threads} threads")

    start = time.perf_counter()
    pixels = render_concurrent(bounds, upper_left, lower_right, threads=opt.threads)
    log(f"Rendered in {time.perf_counter() - start:.3f}s")

    try:
        write_image(output_path, pixels, bounds)
    except OSError as exc:
        print(f"Can't save result image: {exc}", file=sys.stderr)
        return 1

    log(f"Saved {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
