"""Escape-time evaluation of single points."""

from __future__ import annotations

from typing import Optional

# Escape counts are at most ITERATION_LIMIT - 1, which keeps them inside the
# 0-255 range the palette bands are defined on.
ITERATION_LIMIT = 255
ESCAPE_THRESHOLD = 4.0


def escape_time(c: complex, limit: int = ITERATION_LIMIT) -> Optional[int]:
    """Iterate ``z = z*z + c`` from zero and report when ``|z|^2`` exceeds the threshold.

    Returns the zero-based iteration at which the point escaped, or ``None``
    when it stayed bounded for ``limit`` iterations.
    """

    if limit < 1:
        raise ValueError(f"iteration limit must be positive, got {limit}")

    c_re = float(c.real)
    c_im = float(c.imag)
    z_re = 0.0
    z_im = 0.0
    for i in range(limit):
        z_re, z_im = z_re * z_re - z_im * z_im + c_re, 2.0 * z_re * z_im + c_im
        if z_re * z_re + z_im * z_im > ESCAPE_THRESHOLD:
            return i
    return None
