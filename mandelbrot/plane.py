"""Mapping between pixel grids and rectangles of the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Bounds:
    """Pixel dimensions of an image or of one band of it."""

    width: int
    height: int

    @property
    def size(self) -> int:
        return self.width * self.height


def _scales(bounds: Bounds, upper_left: complex, lower_right: complex) -> tuple[np.float64, np.float64]:
    plane_width = np.float64(lower_right.real) - np.float64(upper_left.real)
    plane_height = np.float64(upper_left.imag) - np.float64(lower_right.imag)
    # Zero dimensions give inf/nan rather than raising.
    with np.errstate(divide="ignore", invalid="ignore"):
        x_step = plane_width / np.float64(bounds.width)
        y_step = plane_height / np.float64(bounds.height)
    return x_step, y_step


def pixel_to_point(
    bounds: Bounds,
    pixel: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Return the point of the plane under ``pixel``, given as ``(col, row)``.

    Pixel ``(0, 0)`` lands on ``upper_left`` and ``(width, height)`` on
    ``lower_right``. Pixels outside the grid are extrapolated linearly.
    """

    col, row = pixel
    x_step, y_step = _scales(bounds, upper_left, lower_right)
    with np.errstate(invalid="ignore"):
        re = np.float64(upper_left.real) + np.float64(col) * x_step
        im = np.float64(upper_left.imag) - np.float64(row) * y_step
    return complex(float(re), float(im))


def pixel_grid(bounds: Bounds, upper_left: complex, lower_right: complex) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(re, im)`` arrays of shape ``(height, width)`` for every pixel.

    Each element is computed with the same operations as ``pixel_to_point``.
    """

    x_step, y_step = _scales(bounds, upper_left, lower_right)
    cols = np.arange(bounds.width, dtype=np.float64)
    rows = np.arange(bounds.height, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        xs = np.float64(upper_left.real) + cols * x_step
        ys = np.float64(upper_left.imag) - rows * y_step
    re, im = np.meshgrid(xs, ys)
    return re, im
