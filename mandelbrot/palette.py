"""Fixed four-band palette for escape counts."""

from __future__ import annotations

from typing import NamedTuple, Optional

import numpy as np

NOT_ESCAPED = -1


class Color(NamedTuple):
    """A single RGB8 pixel. ``bytes(color)`` yields its three bytes."""

    r: int
    g: int
    b: int


BLACK = Color(0, 0, 0)


def color_from_value(value: int) -> Color:
    """Map an escape count in ``[0, 255]`` to its band color."""

    if not 0 <= value <= 255:
        raise ValueError(f"escape count {value} is outside 0-255")

    if value <= 30:
        return Color(50, 60, 50)
    if value <= 90:
        return Color(255 - value, 255 - value, 20)
    if value <= 200:
        return Color(40, 255 - value, 255 - value)
    return Color(10, 20, 255 - value)


def color_for(result: Optional[int]) -> Color:
    if result is None:
        return BLACK
    return color_from_value(result)


def colorize(counts: np.ndarray) -> np.ndarray:
    """Vectorised :func:`color_for` over an array of escape counts.

    ``NOT_ESCAPED`` marks points that never escaped. The result has the shape
    of ``counts`` plus a trailing RGB axis, dtype ``uint8``.
    """

    counts = np.asarray(counts)
    escaped = counts != NOT_ESCAPED
    if np.any(escaped & ((counts < 0) | (counts > 255))):
        raise ValueError("escape counts must be within 0-255")

    inverse = 255 - np.clip(counts, 0, 255).astype(np.int64)

    def channel(inside, low, mid, high, top) -> np.ndarray:
        value = np.where(counts <= 200, high, top)
        value = np.where(counts <= 90, mid, value)
        value = np.where(counts <= 30, low, value)
        value = np.where(escaped, value, inside)
        return np.uint8(value)

    r = channel(0, 50, inverse, 40, 10)
    g = channel(0, 60, inverse, inverse, 20)
    b = channel(0, 50, 20, inverse, inverse)
    return np.stack((r, g, b), axis=-1)
