"""Rendering primitives for Mandelbrot images."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .escape import ITERATION_LIMIT, escape_time
from .palette import color_for
from .plane import RenderParameters
from .tensor import render_tensor

BACKENDS = ("scalar", "tensor")


class BufferSizeError(AssertionError):
    """Raised when a pixel buffer does not match the render bounds."""


def new_buffer(params: RenderParameters) -> np.ndarray:
    width, height = params.bounds
    return np.zeros((height, width, 3), dtype=np.uint8)


def _check_buffer(pixels: np.ndarray, params: RenderParameters) -> None:
    width, height = params.bounds
    expected = (height, width, 3)
    if not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint8 or pixels.shape != expected:
        shape = getattr(pixels, "shape", None)
        dtype = getattr(pixels, "dtype", None)
        raise BufferSizeError(
            f"pixel buffer must be uint8 with shape {expected}, got {dtype} with shape {shape}"
        )


def render_rows(pixels: np.ndarray, params: RenderParameters, start: int, stop: int) -> None:
    """Populate rows ``start`` up to ``stop`` of ``pixels``.

    Every pixel depends only on its own coordinate, so disjoint row bands can
    be rendered in any order.
    """

    _check_buffer(pixels, params)
    width, height = params.bounds
    if not 0 <= start <= stop <= height:
        raise BufferSizeError(f"row band [{start}, {stop}) is outside 0-{height}")

    for y in range(start, stop):
        row = pixels[y]
        for x in range(width):
            point = params.pixel_to_point(x, y)
            row[x] = color_for(escape_time(point, ITERATION_LIMIT))


def render(pixels: np.ndarray, params: RenderParameters) -> None:
    """Populate every pixel of ``pixels`` in row-major order."""

    render_rows(pixels, params, 0, params.bounds[1])


def render_image(
    params: RenderParameters,
    *,
    backend: str = "scalar",
    device: Optional[str] = None,
) -> np.ndarray:
    """Allocate and populate a buffer using the requested backend."""

    if backend == "scalar":
        pixels = new_buffer(params)
        render(pixels, params)
        return pixels
    if backend == "tensor":
        pixels = render_tensor(params, device=device)
        _check_buffer(pixels, params)
        return pixels
    raise ValueError(f"Unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")


def to_rgb_bytes(pixels: np.ndarray) -> bytes:
    """Serialise a ``(height, width, 3)`` uint8 buffer as row-major RGB8 bytes."""

    if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] != 3:
        raise BufferSizeError(f"expected a (height, width, 3) uint8 buffer, got {pixels.dtype} {pixels.shape}")
    return np.ascontiguousarray(pixels).tobytes(order="C")
