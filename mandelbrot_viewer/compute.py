"""
Escape-time computation using Numba JIT compilation.

This module contains the performance-critical per-pixel work:
- escape_time: iterate z = z² + c and return a smoothed escape count
- render_escape_buffer: fill a row-major uint32 pixel buffer
- warmup_jit: compile both kernels ahead of the first frame

The kernels run on a single thread; every pixel is recomputed on each pass.
"""

import numpy as np
from numba import jit


ESCAPE_NORM_SQR = 4.0   # |z|² threshold (|z| > 2)
BOUNDED = -1.0          # escape_time result for points that never escape
PIXEL_MASK = 0xFFFFFFFF


@jit(nopython=True, cache=True)
def smooth_shade(norm_sqr):
    """
    Continuous-coloring term 1 - ln(log2(|z|²) / 2) for an escaped point.

    Magnitudes far past the threshold (or non-finite ones) drive the term
    negative or to NaN; both are clamped to 0.
    """
    shade = 1.0 - np.log(np.log2(norm_sqr) / 2.0)
    if not shade >= 0.0:
        return 0.0
    return shade


@jit(nopython=True, cache=True)
def escape_time(cr, ci, max_iter):
    """
    Smoothed escape count for c = cr + ci·i.

    Args:
        cr, ci: Real and imaginary parts of c
        max_iter: Iteration cap

    Returns:
        iteration + shade for the first iteration with |z|² > 4,
        or BOUNDED if the orbit stays within radius 2.
    """
    zr = 0.0
    zi = 0.0
    for i in range(max_iter):
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
        norm_sqr = zr * zr + zi * zi
        if norm_sqr > ESCAPE_NORM_SQR:
            return i + smooth_shade(norm_sqr)
    return BOUNDED


@jit(nopython=True, cache=True)
def render_escape_buffer(left, top, span_re, span_im, width, height,
                         max_iter, color_scale, out):
    """
    Shade every pixel of a width x height grid into out.

    The pixel-to-plane mapping is the same one Viewport.index_to_point
    uses. Bounded points get shade 0; each pixel's value is
    color_scale * floor(shade), truncated to 32 bits.

    Args:
        left, top: top_left corner of the viewport
        span_re, span_im: Viewport width() and height()
        width, height: Pixel grid dimensions
        max_iter: Iteration cap
        color_scale: Integer multiplier applied to the escape count
        out: uint32 array of width * height values (modified in place)
    """
    scale = np.int64(color_scale)
    for index in range(width * height):
        cr = (index % width) / width * span_re + left
        ci = (index // width) / height * span_im + top
        value = escape_time(cr, ci, max_iter)
        if value < 0.0:
            value = 0.0
        out[index] = (scale * np.int64(value)) & PIXEL_MASK


def escape(c, max_iterations):
    """
    Escape-time test for a single complex point.

    Returns:
        None if c is considered part of the set, otherwise the
        continuous iteration count (iteration index + shade in [0, 1)).
    """
    value = escape_time(c.real, c.imag, max_iterations)
    if value < 0.0:
        return None
    return value


def warmup_jit():
    """
    Compile the kernels on a tiny grid.

    Call this once at startup so the first real frame doesn't stall.
    """
    dummy = np.zeros(4 * 3, dtype=np.uint32)
    render_escape_buffer(-2.0, 1.25, 3.0, -2.5, 4, 3, 10, 256, dummy)
