"""Band-partitioned rendering of Mandelbrot images."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from .escape import ITERATION_LIMIT, escape_counts
from .plane import Bounds, pixel_grid, pixel_to_point

THREADS = 8


@dataclass(frozen=True)
class Band:
    """A full-width run of rows assigned to a single worker."""

    index: int
    top: int
    bounds: Bounds
    upper_left: complex
    lower_right: complex
    start: int
    stop: int


def render_band(bounds: Bounds, band: np.ndarray, upper_left: complex, lower_right: complex) -> None:
    """Fill ``band`` with the intensities of the rectangle it covers.

    ``bounds`` and the corners describe the band itself, not the whole image.
    Escaping points get ``255 - count``; points that never escape stay black.
    """

    if band.size != bounds.size:
        raise ValueError(
            f"band holds {band.size} pixels but bounds {bounds.width}x{bounds.height} need {bounds.size}"
        )
    if band.size == 0:
        return

    re, im = pixel_grid(bounds, upper_left, lower_right)
    counts = escape_counts(re, im, ITERATION_LIMIT)
    pixels = np.where(counts < ITERATION_LIMIT, 255 - counts, 0)
    band[:] = pixels.astype(np.uint8).ravel()


def partition_bands(bounds: Bounds, upper_left: complex, lower_right: complex, threads: int = THREADS) -> list[Band]:
    """Split an image into consecutive, non-overlapping horizontal bands.

    Every band but the last has ``height // threads + 1`` rows; the last one
    takes whatever remains, so no row is left out and no band is empty.
    """

    if threads < 1:
        raise ValueError(f"threads must be at least 1, got {threads}")

    rows_per_band = bounds.height // threads + 1
    chunk = rows_per_band * bounds.width
    bands: list[Band] = []
    if chunk == 0:
        return bands

    for index, start in enumerate(range(0, bounds.size, chunk)):
        stop = min(start + chunk, bounds.size)
        top = rows_per_band * index
        height = (stop - start) // bounds.width
        bands.append(
            Band(
                index=index,
                top=top,
                bounds=Bounds(bounds.width, height),
                upper_left=pixel_to_point(bounds, (0, top), upper_left, lower_right),
                lower_right=pixel_to_point(bounds, (bounds.width, top + height), upper_left, lower_right),
                start=start,
                stop=stop,
            )
        )
    return bands


def render_concurrent(
    bounds: Bounds,
    upper_left: complex,
    lower_right: complex,
    *,
    threads: int = THREADS,
) -> np.ndarray:
    """Render the image on ``threads`` workers and return the flat pixel buffer.

    The buffer is row-major ``uint8`` of length ``width * height``. Each band
    is written through its own view of the buffer, so workers never share
    pixels. An exception in any worker is re-raised here.
    """

    pixels = np.zeros(bounds.size, dtype=np.uint8)
    bands = partition_bands(bounds, upper_left, lower_right, threads)
    if not bands:
        return pixels

    with ThreadPoolExecutor(max_workers=threads) as executor:
        futures = [
            executor.submit(
                render_band,
                band.bounds,
                pixels[band.start:band.stop],
                band.upper_left,
                band.lower_right,
            )
            for band in bands
        ]
        for future in futures:
            future.result()

    return pixels
