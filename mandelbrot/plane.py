"""Mapping between the pixel grid and the complex plane."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PlaneRectangle:
    """Region of the complex plane mapped onto the output image."""

    upper_left: complex
    lower_right: complex

    def __post_init__(self) -> None:
        parts = (
            self.upper_left.real,
            self.upper_left.imag,
            self.lower_right.real,
            self.lower_right.imag,
        )
        if not all(math.isfinite(part) for part in parts):
            raise ValueError("plane corners must be finite numbers")
        # Image rows grow downward while the imaginary axis grows upward.
        if self.upper_left.imag < self.lower_right.imag:
            raise ValueError(
                f"upper-left imaginary part {self.upper_left.imag} is below "
                f"lower-right imaginary part {self.lower_right.imag}"
            )
        if not (math.isfinite(self.real_span) and math.isfinite(self.imag_span)):
            raise ValueError("plane rectangle is too large to span in floating point")

    @property
    def real_span(self) -> float:
        return self.lower_right.real - self.upper_left.real

    @property
    def imag_span(self) -> float:
        return self.upper_left.imag - self.lower_right.imag


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of the Mandelbrot set."""

    width: int
    height: int
    plane: PlaneRectangle

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")

    @property
    def bounds(self) -> tuple[int, int]:
        return int(self.width), int(self.height)

    def pixel_to_point(self, x: int, y: int) -> complex:
        return pixel_to_point(self.bounds, (x, y), self.plane.upper_left, self.plane.lower_right)


def pixel_to_point(
    bounds: tuple[int, int],
    pixel: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Return the point of the plane that corresponds to ``pixel``.

    ``bounds`` is ``(width, height)`` and ``pixel`` is ``(column, row)``. The
    mapping is half-open: column 0 lands exactly on ``upper_left.real`` while
    column ``width`` would land on ``lower_right.real``.
    """

    width, height = bounds
    column, row = pixel
    real_span = lower_right.real - upper_left.real
    imag_span = upper_left.imag - lower_right.imag
    return complex(
        upper_left.real + column * real_span / width,
        upper_left.imag - row * imag_span / height,
    )


def plane_axes(params: RenderParameters) -> tuple[np.ndarray, np.ndarray]:
    """Return the real value of every column and the imaginary value of every row.

    The arrays are computed with the same expression as :func:`pixel_to_point`,
    element for element.
    """

    width, height = params.bounds
    upper_left = params.plane.upper_left
    columns = np.arange(width, dtype=np.float64)
    rows = np.arange(height, dtype=np.float64)
    reals = np.float64(upper_left.real) + columns * np.float64(params.plane.real_span) / np.float64(width)
    imags = np.float64(upper_left.imag) - rows * np.float64(params.plane.imag_span) / np.float64(height)
    return reals, imags
