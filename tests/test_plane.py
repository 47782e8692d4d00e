import numpy as np
import pytest

from mandelbrot import PlaneRectangle, RenderParameters, pixel_to_point, plane_axes


def test_pixel_to_point_example():
    point = pixel_to_point((100, 100), (25, 75), complex(-1.0, 1.0), complex(1.0, -1.0))
    assert point == complex(-0.5, -0.5)


@pytest.mark.parametrize("bounds", [(1, 1), (3, 7), (800, 600)])
def test_origin_pixel_is_upper_left(bounds):
    upper_left = complex(-1.2, 0.35)
    assert pixel_to_point(bounds, (0, 0), upper_left, complex(-1.0, 0.2)) == upper_left


def test_last_pixel_approaches_lower_right():
    upper_left, lower_right = complex(-2.0, 1.5), complex(1.0, -1.5)
    coarse = pixel_to_point((10, 10), (9, 9), upper_left, lower_right)
    fine = pixel_to_point((1000, 1000), (999, 999), upper_left, lower_right)
    assert abs(fine - lower_right) < abs(coarse - lower_right)
    assert fine != lower_right


def test_imaginary_part_decreases_down_the_image():
    params = RenderParameters(4, 4, PlaneRectangle(complex(-1, 1), complex(1, -1)))
    imags = [params.pixel_to_point(0, y).imag for y in range(4)]
    assert imags == sorted(imags, reverse=True)


def test_degenerate_plane_maps_everything_to_one_point():
    params = RenderParameters(1, 1, PlaneRectangle(0j, 0j))
    assert params.pixel_to_point(0, 0) == 0j


def test_plane_axes_match_pixel_to_point():
    params = RenderParameters(13, 9, PlaneRectangle(complex(-2.1, 1.3), complex(0.7, -1.1)))
    reals, imags = plane_axes(params)
    assert reals.dtype == np.float64
    for x in range(params.width):
        for y in range(params.height):
            point = params.pixel_to_point(x, y)
            assert reals[x] == point.real
            assert imags[y] == point.imag


def test_inverted_imaginary_span_is_rejected():
    with pytest.raises(ValueError):
        PlaneRectangle(complex(-1, -1), complex(1, 1))


@pytest.mark.parametrize("corner", [complex(float("nan"), 0), complex(0, float("inf"))])
def test_non_finite_corners_are_rejected(corner):
    with pytest.raises(ValueError):
        PlaneRectangle(corner, complex(1, -1))


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-3, 4), (2.5, 2)])
def test_invalid_bounds_are_rejected(width, height):
    with pytest.raises(ValueError):
        RenderParameters(width, height, PlaneRectangle(complex(-1, 1), complex(1, -1)))


@pytest.mark.parametrize(
    "upper_left, lower_right",
    [
        (complex(-1e308, 1), complex(1e308, -1)),
        (complex(-1, 1e308), complex(1, -1e308)),
    ],
)
def test_overflowing_span_is_rejected(upper_left, lower_right):
    with pytest.raises(ValueError):
        PlaneRectangle(upper_left, lower_right)
