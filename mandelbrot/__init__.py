"""Public API for band-parallel Mandelbrot rendering."""

from .escape import DIVERGENCE_THRESHOLD, ITERATION_LIMIT, escape_counts, escape_time
from .plane import Bounds, pixel_grid, pixel_to_point
from .renderer import THREADS, Band, partition_bands, render_band, render_concurrent

__all__ = [
    "Band",
    "Bounds",
    "DIVERGENCE_THRESHOLD",
    "ITERATION_LIMIT",
    "THREADS",
    "escape_counts",
    "escape_time",
    "partition_bands",
    "pixel_grid",
    "pixel_to_point",
    "render_band",
    "render_concurrent",
]
