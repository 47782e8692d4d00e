"""Public API for Mandelbrot rendering utilities."""

from .escape import ESCAPE_THRESHOLD, ITERATION_LIMIT, escape_time
from .palette import BLACK, NOT_ESCAPED, Color, color_for, color_from_value, colorize
from .parsing import parse_complex, parse_pair, parse_size
from .plane import PlaneRectangle, RenderParameters, pixel_to_point, plane_axes
from .renderer import (
    BACKENDS,
    BufferSizeError,
    new_buffer,
    render,
    render_image,
    render_rows,
    to_rgb_bytes,
)
from .tensor import escape_counts, render_tensor
from .writer import resolve_format, write_image

__all__ = [
    "BACKENDS",
    "BLACK",
    "BufferSizeError",
    "Color",
    "ESCAPE_THRESHOLD",
    "ITERATION_LIMIT",
    "NOT_ESCAPED",
    "PlaneRectangle",
    "RenderParameters",
    "color_for",
    "color_from_value",
    "colorize",
    "escape_counts",
    "escape_time",
    "new_buffer",
    "parse_complex",
    "parse_pair",
    "parse_size",
    "pixel_to_point",
    "plane_axes",
    "render",
    "render_image",
    "render_rows",
    "render_tensor",
    "resolve_format",
    "to_rgb_bytes",
    "write_image",
]
