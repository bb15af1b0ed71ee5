import math

import numpy as np
import pytest

from mandelbrot import Bounds, pixel_grid, pixel_to_point


def test_pixel_to_point():
    point = pixel_to_point(Bounds(100, 200), (25, 75), complex(-1.0, 1.0), complex(1.0, -1.0))
    assert point == complex(-0.5, 0.25)


@pytest.mark.parametrize(
    "bounds, upper_left, lower_right",
    [
        (Bounds(100, 200), complex(-1.0, 1.0), complex(1.0, -1.0)),
        (Bounds(64, 48), complex(-2.5, 1.5), complex(1.5, -1.5)),
        (Bounds(1, 1), complex(0.0, 0.0), complex(0.0, 0.0)),
        (Bounds(1024, 768), complex(-2.0, 1.5), complex(1.0, -1.5)),
    ],
)
def test_corners_map_to_plane_corners(bounds, upper_left, lower_right):
    assert pixel_to_point(bounds, (0, 0), upper_left, lower_right) == upper_left
    assert pixel_to_point(bounds, (bounds.width, bounds.height), upper_left, lower_right) == lower_right


def test_far_corner_is_close_for_arbitrary_scales():
    upper_left = complex(-1.7391, 0.4127)
    lower_right = complex(-1.7, 0.39)
    point = pixel_to_point(Bounds(37, 11), (37, 11), upper_left, lower_right)
    assert point.real == pytest.approx(lower_right.real, abs=1e-15)
    assert point.imag == pytest.approx(lower_right.imag, abs=1e-15)


def test_pixel_outside_grid_is_extrapolated():
    point = pixel_to_point(Bounds(4, 4), (8, -4), complex(0.0, 0.0), complex(1.0, -1.0))
    assert point == complex(2.0, 1.0)


def test_inverted_corners_mirror_the_image():
    bounds = Bounds(10, 10)
    upper_left, lower_right = complex(1.0, -1.0), complex(-1.0, 1.0)
    left = pixel_to_point(bounds, (2, 2), upper_left, lower_right)
    right = pixel_to_point(bounds, (8, 8), upper_left, lower_right)
    assert left.real > right.real
    assert left.imag < right.imag


def test_zero_bounds_give_non_finite_points():
    point = pixel_to_point(Bounds(0, 0), (1, 1), complex(-1.0, 1.0), complex(1.0, -1.0))
    assert not math.isfinite(point.real)
    assert not math.isfinite(point.imag)


def test_pixel_grid_shape():
    re, im = pixel_grid(Bounds(7, 5), complex(-2.0, 1.0), complex(1.0, -1.0))
    assert re.shape == (5, 7)
    assert im.shape == (5, 7)
    assert re.dtype == np.float64


def test_pixel_grid_matches_pixel_to_point():
    bounds = Bounds(13, 9)
    upper_left, lower_right = complex(-2.1, 1.3), complex(0.7, -1.1)
    re, im = pixel_grid(bounds, upper_left, lower_right)
    for row in range(bounds.height):
        for col in range(bounds.width):
            point = pixel_to_point(bounds, (col, row), upper_left, lower_right)
            assert re[row, col] == point.real
            assert im[row, col] == point.imag
