"""
Startup configuration for the Mandelbrot viewer.

All tunables live in a single frozen ViewerConfig. Defaults reproduce the
classic 640x480 overview; a settings.json file (same shape as the one
bundled next to this module) can override any field, and explicit keyword
overrides (from the command line) win over both.
"""

import json
import logging
import math
import os
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


class ConfigError(ValueError):
    """Raised when a configuration value or settings file is invalid."""


@dataclass(frozen=True)
class ViewerConfig:
    """Fixed parameters the viewer is started with."""

    width: int = 640
    height: int = 480
    # ((top_left.re, top_left.im), (bottom_right.re, bottom_right.im))
    initial_range: tuple = ((-2.0, 1.25), (1.0, -1.25))
    zoom_factor: float = 2.0
    max_iterations: int = 255
    frame_budget_ms: int = 17
    pan_step_fraction: float = 0.1
    color_cycle: tuple = (65536, 1, 256)
    color_scale: int = 256
    iteration_step: int = 5
    min_iterations: int = 1
    recolor_delay_ms: int = 150
    title: str = "mandelbrot"

    @property
    def top_left(self):
        re, im = self.initial_range[0]
        return complex(re, im)

    @property
    def bottom_right(self):
        re, im = self.initial_range[1]
        return complex(re, im)

    @property
    def framerate(self):
        """Frames per second implied by the frame budget."""
        return 1000.0 / self.frame_budget_ms

    def validate(self):
        """
        Check every field and return self.

        Raises:
            ConfigError: if any field has the wrong type or is out of range
        """
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if not _is_int(value):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        for name in _NUMBER_FIELDS:
            value = getattr(self, name)
            if not (_is_int(value) or isinstance(value, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
        if not isinstance(self.title, str):
            raise ConfigError(f"title must be a string, got {self.title!r}")
        if not isinstance(self.color_cycle, tuple) or not all(_is_int(v) for v in self.color_cycle):
            raise ConfigError(f"color_cycle must be a list of integers, got {self.color_cycle!r}")

        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"window size must be positive, got {self.width}x{self.height}")
        if self.zoom_factor <= 1.0:
            raise ConfigError(f"zoom_factor must be greater than 1, got {self.zoom_factor}")
        if self.max_iterations < 0 or self.iteration_step < 0 or self.min_iterations < 0:
            raise ConfigError("iteration counts must be non-negative")
        if self.frame_budget_ms <= 0:
            raise ConfigError(f"frame_budget_ms must be positive, got {self.frame_budget_ms}")
        if self.pan_step_fraction <= 0:
            raise ConfigError(f"pan_step_fraction must be positive, got {self.pan_step_fraction}")
        if self.recolor_delay_ms < 0:
            raise ConfigError("recolor_delay_ms must be non-negative")
        try:
            top_left, bottom_right = self.top_left, self.bottom_right
        except (TypeError, ValueError, IndexError) as exc:
            raise ConfigError(f"malformed initial_range {self.initial_range!r}") from exc
        corners = (top_left.real, top_left.imag, bottom_right.real, bottom_right.imag)
        if not all(math.isfinite(v) for v in corners):
            raise ConfigError(f"initial_range must be finite, got {self.initial_range!r}")
        if not (top_left.real < bottom_right.real and top_left.imag > bottom_right.imag):
            raise ConfigError(
                f"initial_range must have top_left above and left of bottom_right, "
                f"got {self.initial_range!r}"
            )
        if not self.color_cycle:
            raise ConfigError("color_cycle must not be empty")
        if self.color_scale not in self.color_cycle:
            raise ConfigError(
                f"color_scale {self.color_scale} is not part of color_cycle {self.color_cycle}"
            )
        return self

    @classmethod
    def from_settings(cls, path=None, **overrides):
        """
        Build a config from defaults, a settings file and explicit overrides.

        Args:
            path: JSON settings file (None to skip)
            **overrides: Field values that take precedence; None values are ignored

        Returns:
            A validated ViewerConfig
        """
        config = cls()
        if path is not None:
            config = replace(config, **load_settings(path))
        explicit = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(explicit) - _field_names()
        if unknown:
            raise ConfigError(f"unknown configuration fields: {', '.join(sorted(unknown))}")
        return replace(config, **explicit).validate()


_INT_FIELDS = ('width', 'height', 'max_iterations', 'frame_budget_ms', 'color_scale',
               'iteration_step', 'min_iterations', 'recolor_delay_ms')
_NUMBER_FIELDS = ('zoom_factor', 'pan_step_fraction')


def _is_int(value):
    # bool is an int subclass but never a meaningful setting here
    return isinstance(value, int) and not isinstance(value, bool)


def _field_names():
    return {f.name for f in fields(ViewerConfig)}


def load_settings(path=DEFAULT_SETTINGS_PATH):
    """
    Load configuration overrides from a JSON settings file.

    Lists are converted to tuples so the resulting config stays hashable.

    Returns:
        dict of field name -> value

    Raises:
        ConfigError: if the file is missing, malformed or names unknown fields
    """
    try:
        with open(path, 'r') as f:
            settings = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"could not load settings from {path}: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigError(f"settings file {path} must contain a JSON object")

    unknown = set(settings) - _field_names()
    if unknown:
        raise ConfigError(f"unknown settings in {path}: {', '.join(sorted(unknown))}")

    try:
        if 'initial_range' in settings:
            settings['initial_range'] = tuple(tuple(corner) for corner in settings['initial_range'])
        if 'color_cycle' in settings:
            settings['color_cycle'] = tuple(settings['color_cycle'])
    except TypeError as e:
        raise ConfigError(f"malformed list setting in {path}: {e}") from e

    logger.debug("Loaded %d settings from %s", len(settings), path)
    return settings
