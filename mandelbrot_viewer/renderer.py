"""
Full-frame Mandelbrot renderer.

The MandelbrotRenderer class handles:
- Ownership of the row-major uint32 pixel buffer handed to the display
- Mutable rendering parameters (iteration cap, color scale cycle)
- Running the JIT render kernel over the whole buffer on every pass
"""

import logging
import time
from dataclasses import dataclass

import numpy as np

from .compute import render_escape_buffer, warmup_jit

logger = logging.getLogger(__name__)


class ColorCycle:
    """
    Fixed, ordered list of color multipliers with a wrapping cursor.

    Usage:
        cycle = ColorCycle((65536, 1, 256), start=256)
        cycle.current   # 256
        cycle.advance() # 65536
    """

    def __init__(self, values, start=None):
        self.values = tuple(values)
        if not self.values:
            raise ValueError("color cycle needs at least one value")
        self.index = 0 if start is None else self.values.index(start)

    def __len__(self):
        return len(self.values)

    @property
    def current(self):
        return self.values[self.index]

    def advance(self):
        """Step to the next multiplier, wrapping at the end, and return it."""
        self.index = (self.index + 1) % len(self.values)
        return self.current


@dataclass
class RenderParameters:
    """Mutable parameters shared by the viewport and the renderer."""

    zoom_factor: float
    max_iterations: int
    colors: ColorCycle
    iteration_step: int = 5
    min_iterations: int = 1

    @classmethod
    def from_config(cls, config):
        return cls(
            zoom_factor=config.zoom_factor,
            max_iterations=config.max_iterations,
            colors=ColorCycle(config.color_cycle, start=config.color_scale),
            iteration_step=config.iteration_step,
            min_iterations=config.min_iterations,
        )

    @property
    def color_scale(self):
        return self.colors.current

    def next_color_scale(self):
        return self.colors.advance()

    def increase_iterations(self):
        self.max_iterations += self.iteration_step

    def decrease_iterations(self):
        # Clamped so repeated zoom-outs never drive the cap below the floor.
        self.max_iterations = max(self.min_iterations,
                                  self.max_iterations - self.iteration_step)


def render(viewport, params, width, height, out=None):
    """
    Render a whole frame.

    Args:
        viewport: Viewport mapped onto the grid
        params: RenderParameters (max_iterations and color_scale are used)
        width, height: Pixel grid dimensions
        out: Optional uint32 buffer of width * height values to fill

    Returns:
        The filled uint32 buffer, index = y * width + x
    """
    if out is None:
        out = np.zeros(width * height, dtype=np.uint32)
    elif out.shape != (width * height,) or out.dtype != np.uint32:
        raise ValueError(
            f"buffer must be uint32 of {width * height} values, "
            f"got {out.dtype} {out.shape}"
        )
    render_escape_buffer(
        viewport.top_left.real, viewport.top_left.imag,
        viewport.width(), viewport.height(),
        width, height,
        params.max_iterations, params.color_scale,
        out,
    )
    return out


class MandelbrotRenderer:
    """
    Owns the pixel buffer and refills it on request.

    Usage:
        renderer = MandelbrotRenderer(640, 480)
        buffer = renderer.render(viewport, params)
        display.present(buffer)

    Attributes:
        width, height: Pixel grid dimensions
        buffer: uint32 array of width * height packed pixel values
        last_render_ms: Duration of the most recent pass
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.buffer = np.zeros(width * height, dtype=np.uint32)
        self.last_render_ms = 0.0
        self.render_count = 0

    def warmup(self):
        """Compile the JIT kernels before the first real frame."""
        start = time.perf_counter()
        warmup_jit()
        logger.debug("JIT warm-up took %.1f ms", (time.perf_counter() - start) * 1000)

    def render(self, viewport, params):
        """Recompute every pixel for the current view and return the buffer."""
        start = time.perf_counter()
        render(viewport, params, self.width, self.height, out=self.buffer)
        self.last_render_ms = (time.perf_counter() - start) * 1000
        self.render_count += 1
        logger.debug(
            "Rendered %dx%d (max_iter=%d, color_scale=%d) in %.1f ms",
            self.width, self.height, params.max_iterations,
            params.color_scale, self.last_render_ms,
        )
        return self.buffer
