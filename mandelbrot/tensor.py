"""Vectorised Mandelbrot rendering on TensorFlow."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .escape import ESCAPE_THRESHOLD, ITERATION_LIMIT
from .palette import NOT_ESCAPED, colorize
from .plane import RenderParameters, plane_axes


@tf.function
def _mandelbrot_step(
    i: tf.Tensor,
    z_re: tf.Tensor,
    z_im: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Perform a single Mandelbrot iteration for points that have not escaped."""

    new_re = z_re * z_re - z_im * z_im + c_re
    new_im = 2.0 * z_re * z_im + c_im
    z_re = tf.where(active, new_re, z_re)
    z_im = tf.where(active, new_im, z_im)
    threshold = tf.constant(ESCAPE_THRESHOLD, dtype=z_re.dtype)
    escaped_now = tf.logical_and(active, z_re * z_re + z_im * z_im > threshold)
    counts = tf.where(escaped_now, tf.fill(tf.shape(counts), i), counts)
    active = tf.logical_and(active, tf.logical_not(escaped_now))
    return z_re, z_im, counts, active


@tf.function
def _mandelbrot_run(c_re: tf.Tensor, c_im: tf.Tensor, limit: tf.Tensor) -> tf.Tensor:
    """Iterate every point with a TensorFlow while loop and return escape counts."""

    limit = tf.cast(limit, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    z_re = tf.zeros_like(c_re)
    z_im = tf.zeros_like(c_im)
    counts = tf.fill(tf.shape(c_re), tf.constant(NOT_ESCAPED, dtype=tf.int32))
    active = tf.ones_like(counts, tf.bool)

    def cond(i, z_re, z_im, counts, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, z_re, z_im, counts, active):
        z_re, z_im, counts, active = _mandelbrot_step(i, z_re, z_im, c_re, c_im, counts, active)
        return i + 1, z_re, z_im, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, z_re, z_im, counts, active))
    return counts


def escape_counts(params: RenderParameters, *, device: Optional[str] = None) -> np.ndarray:
    """Return the escape count of every pixel, ``NOT_ESCAPED`` for bounded points."""

    reals, imags = plane_axes(params)
    with tf.device(device if device is not None else "/CPU:0"):
        x_tf = tf.convert_to_tensor(reals, dtype=tf.float64)
        y_tf = tf.convert_to_tensor(imags, dtype=tf.float64)
        c_re, c_im = tf.meshgrid(x_tf, y_tf)
        counts = _mandelbrot_run(c_re, c_im, tf.constant(ITERATION_LIMIT, dtype=tf.int32))
    return counts.numpy()


def render_tensor(params: RenderParameters, *, device: Optional[str] = None) -> np.ndarray:
    """Render a full RGB buffer of shape ``(height, width, 3)``."""

    return np.ascontiguousarray(colorize(escape_counts(params, device=device)))
