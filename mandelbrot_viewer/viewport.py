"""
The visible rectangle of the complex plane.

Screen rows run top to bottom while the imaginary axis runs bottom to top,
so the rectangle is stored as a top-left and a bottom-right corner with
height() algebraically negative. Mapping a pixel row to the plane is then
a plain multiply-and-offset with no flip.

Panning never rewrites the corners directly: the viewport keeps the
corners set by the last zoom plus a whole number of pan steps per axis,
so opposite shifts cancel exactly.
"""

import logging
import math

logger = logging.getLogger(__name__)

# Pan directions understood by Viewport.shift: (sign along re, sign along im)
DIRECTIONS = {
    'left': (-1, 0),
    'right': (1, 0),
    'up': (0, 1),
    'down': (0, -1),
}


def _is_valid(top_left, bottom_right):
    """Finite corners and spans, top_left strictly above and left of bottom_right."""
    values = (top_left.real, top_left.imag, bottom_right.real, bottom_right.imag,
              bottom_right.real - top_left.real, top_left.imag - bottom_right.imag)
    if not all(math.isfinite(v) for v in values):
        return False
    return top_left.real < bottom_right.real and top_left.imag > bottom_right.imag


class Viewport:
    """
    Axis-aligned rectangle of the complex plane mapped onto the pixel grid.

    Attributes:
        top_left: Complex point shown at pixel (0, 0)
        bottom_right: Complex point just past the last pixel
        pan_step: Fraction of the width moved by one shift()
        pan_offset: (x, y) count of pan steps applied since the last zoom
    """

    def __init__(self, top_left, bottom_right, pan_step=0.1):
        top_left = complex(top_left)
        bottom_right = complex(bottom_right)
        if not _is_valid(top_left, bottom_right):
            raise ValueError(
                f"degenerate or misoriented viewport: {top_left} .. {bottom_right}"
            )
        self.pan_step = pan_step
        self._set_base(top_left, bottom_right)

    def _set_base(self, top_left, bottom_right):
        self._base_top_left = top_left
        self._base_bottom_right = bottom_right
        self._step = self.pan_step * (bottom_right.real - top_left.real)
        self.pan_offset = (0, 0)

    def _corner(self, base, offset):
        x, y = offset
        return complex(base.real + x * self._step, base.imag + y * self._step)

    @property
    def top_left(self):
        return self._corner(self._base_top_left, self.pan_offset)

    @property
    def bottom_right(self):
        return self._corner(self._base_bottom_right, self.pan_offset)

    @classmethod
    def from_config(cls, config):
        return cls(config.top_left, config.bottom_right, config.pan_step_fraction)

    def __repr__(self):
        return f"Viewport({self.top_left!r}, {self.bottom_right!r})"

    def width(self):
        return self.bottom_right.real - self.top_left.real

    def height(self):
        # Negative: the imaginary axis decreases down the screen.
        return self.bottom_right.imag - self.top_left.imag

    def center(self):
        return (self.top_left + self.bottom_right) / 2

    def index_to_point(self, index, width, height):
        """
        Map a row-major pixel index to its point in the complex plane.

        Args:
            index: Linear pixel index, y * width + x
            width, height: Pixel grid dimensions

        Returns:
            complex point for the pixel's top-left corner
        """
        top_left = self.top_left
        return complex(
            (index % width) / width * self.width() + top_left.real,
            (index // width) / height * self.height() + top_left.imag,
        )

    def pixel_to_point(self, pixel_point, width, height):
        """Map a (possibly fractional) (x, y) pixel position to the plane."""
        x, y = pixel_point
        top_left = self.top_left
        return complex(
            x / width * self.width() + top_left.real,
            y / height * self.height() + top_left.imag,
        )

    def zoom(self, pixel_point, width, height, params, zoom_out=False):
        """
        Recenter on a pixel and scale the rectangle around it.

        Zooming in divides both spans by params.zoom_factor and raises the
        iteration cap by params.iteration_step; zooming out multiplies the
        spans and lowers the cap, never below params.min_iterations.

        Args:
            pixel_point: (x, y) window position to center on
            width, height: Pixel grid dimensions
            params: RenderParameters, mutated in place
            zoom_out: Grow instead of shrink

        Returns:
            True if the viewport changed, False if the zoom was refused
            because the result would collapse below floating-point
            resolution or overflow to infinity.
        """
        scale = params.zoom_factor if zoom_out else 1.0 / params.zoom_factor
        mid = self.pixel_to_point(pixel_point, width, height)
        half_w = self.width() * scale / 2.0
        half_h = self.height() * scale / 2.0

        top_left = complex(mid.real - half_w, mid.imag - half_h)
        bottom_right = complex(mid.real + half_w, mid.imag + half_h)
        if not _is_valid(top_left, bottom_right):
            logger.warning("Zoom limit reached at %s; keeping current view", mid)
            return False

        self._set_base(top_left, bottom_right)
        if zoom_out:
            params.decrease_iterations()
        else:
            params.increase_iterations()
        logger.debug("Zoom %s at %s -> %r", "out" if zoom_out else "in", mid, self)
        return True

    def shift(self, direction):
        """
        Translate the rectangle by pan_step * width() toward direction.

        The width is used for both axes so vertical and horizontal pans move
        the same distance regardless of aspect ratio. Unknown directions are
        ignored.

        Returns:
            True if the viewport moved
        """
        signs = DIRECTIONS.get(direction)
        if signs is None:
            return False
        offset = (self.pan_offset[0] + signs[0], self.pan_offset[1] + signs[1])
        if not _is_valid(self._corner(self._base_top_left, offset),
                         self._corner(self._base_bottom_right, offset)):
            logger.warning("Pan limit reached going %s; keeping current view", direction)
            return False
        self.pan_offset = offset
        logger.debug("Shift %s -> %r", direction, self)
        return True
