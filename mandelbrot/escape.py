"""Escape-time evaluation of the Mandelbrot recurrence."""

from __future__ import annotations

from typing import Optional

import numpy as np

ITERATION_LIMIT = 255
# Squared norm; compared against re*re + im*im to avoid a square root.
DIVERGENCE_THRESHOLD = 8.0


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Return the iteration at which ``z = z*z + c`` is seen to diverge.

    ``z`` starts at zero and is tested before each update, so the result lies
    in ``[0, limit)``. ``None`` means the point survived every iteration.
    """

    re, im = float(c.real), float(c.imag)
    zr = zi = 0.0
    for i in range(limit):
        if zr * zr + zi * zi > DIVERGENCE_THRESHOLD:
            return i
        zr, zi = (zr * zr - zi * zi) + re, (zr * zi + zi * zr) + im
    return None


def escape_counts(re: np.ndarray, im: np.ndarray, limit: int) -> np.ndarray:
    """Vectorized ``escape_time`` over arrays of real and imaginary parts.

    Points that never diverge hold ``limit`` instead of ``None``.
    """

    re = np.asarray(re, dtype=np.float64)
    im = np.asarray(im, dtype=np.float64)
    zr = np.zeros_like(re)
    zi = np.zeros_like(im)
    counts = np.full(re.shape, limit, dtype=np.int64)
    active = np.ones(re.shape, dtype=bool)

    # Diverged points keep iterating until masked out and may overflow.
    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(limit):
            diverged = active & (zr * zr + zi * zi > DIVERGENCE_THRESHOLD)
            counts[diverged] = i
            active &= ~diverged
            if not active.any():
                break
            # Same operation order as escape_time.
            zr, zi = (
                np.where(active, (zr * zr - zi * zi) + re, zr),
                np.where(active, (zr * zi + zi * zr) + im, zi),
            )
    return counts
