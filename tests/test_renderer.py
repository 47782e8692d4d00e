import numpy as np
import pytest

from mandelbrot import (
    BufferSizeError,
    PlaneRectangle,
    RenderParameters,
    color_for,
    escape_time,
    new_buffer,
    render,
    render_image,
    render_rows,
    render_tensor,
    to_rgb_bytes,
)


@pytest.fixture
def params():
    return RenderParameters(24, 16, PlaneRectangle(complex(-2.0, 1.2), complex(0.6, -1.2)))


def test_single_black_pixel_for_degenerate_plane():
    params = RenderParameters(1, 1, PlaneRectangle(0j, 0j))
    pixels = new_buffer(params)
    render(pixels, params)
    assert to_rgb_bytes(pixels) == b"\x00\x00\x00"


def test_pixels_are_row_major(params):
    pixels = new_buffer(params)
    render(pixels, params)
    data = to_rgb_bytes(pixels)
    assert len(data) == params.width * params.height * 3
    for y in (0, 7, params.height - 1):
        for x in (0, 5, params.width - 1):
            index = (y * params.width + x) * 3
            expected = bytes(color_for(escape_time(params.pixel_to_point(x, y))))
            assert data[index:index + 3] == expected


def test_render_is_deterministic(params):
    first = render_image(params)
    second = render_image(params)
    assert to_rgb_bytes(first) == to_rgb_bytes(second)


def test_row_bands_compose_to_full_render(params):
    full = render_image(params)
    banded = new_buffer(params)
    for start in range(params.height, 0, -5):
        render_rows(banded, params, max(start - 5, 0), start)
    np.testing.assert_array_equal(banded, full)


def test_render_contains_inside_and_outside_points(params):
    pixels = render_image(params)
    flat = pixels.reshape(-1, 3)
    assert np.any(np.all(flat == 0, axis=1))
    assert np.any(np.any(flat != 0, axis=1))


@pytest.mark.parametrize(
    "buffer",
    [
        np.zeros((16, 23, 3), dtype=np.uint8),
        np.zeros((24, 16, 3), dtype=np.uint8),
        np.zeros((16, 24, 3), dtype=np.int32),
        np.zeros(16 * 24 * 3, dtype=np.uint8),
    ],
)
def test_mismatched_buffer_fails_fast(params, buffer):
    with pytest.raises(BufferSizeError):
        render(buffer, params)
    assert not buffer.any()


def test_band_outside_image_is_rejected(params):
    with pytest.raises(BufferSizeError):
        render_rows(new_buffer(params), params, 10, params.height + 1)


def test_unknown_backend_is_rejected(params):
    with pytest.raises(ValueError):
        render_image(params, backend="gpu")


def test_tensor_backend_matches_scalar(params):
    scalar = render_image(params, backend="scalar")
    tensor = render_image(params, backend="tensor")
    assert tensor.shape == scalar.shape
    assert to_rgb_bytes(tensor) == to_rgb_bytes(scalar)


def test_tensor_backend_single_pixel():
    params = RenderParameters(1, 1, PlaneRectangle(0j, 0j))
    np.testing.assert_array_equal(render_tensor(params), np.zeros((1, 1, 3), dtype=np.uint8))
