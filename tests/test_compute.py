import math

import pytest

from mandelbrot_viewer.compute import BOUNDED, escape, escape_time, smooth_shade
from mandelbrot_viewer.config import ViewerConfig
from mandelbrot_viewer.viewport import Viewport


@pytest.mark.parametrize("max_iterations", [1, 2, 10, 255, 1000])
def test_origin_is_bounded(max_iterations):
    assert escape(complex(0.0, 0.0), max_iterations) is None


@pytest.mark.parametrize("c", [complex(2.5, 0.0), complex(0.0, -3.0), complex(-2.0, 1.25)])
@pytest.mark.parametrize("max_iterations", [1, 255])
def test_far_points_escape_on_first_iteration(c, max_iterations):
    value = escape(c, max_iterations)
    assert value is not None
    assert 0.0 <= value < 1.0


def test_zero_iterations_never_escape():
    assert escape(complex(10.0, 10.0), 0) is None


def test_escape_count_grows_near_the_set():
    far = escape(complex(1.0, 1.0), 255)
    near = escape(complex(-0.75, 0.1), 255)
    assert far is not None and near is not None
    assert near > far


def test_shade_just_past_threshold_is_close_to_one():
    shade = smooth_shade(4.0000001)
    assert 0.99 < shade < 1.0


@pytest.mark.parametrize("norm_sqr", [1e300, math.inf, math.nan])
def test_shade_clamps_non_finite_and_negative(norm_sqr):
    assert smooth_shade(norm_sqr) == 0.0


def test_raw_kernel_reports_bounded_with_sentinel():
    assert escape_time(0.0, 0.0, 20) == BOUNDED


def test_default_view_center_and_corner():
    config = ViewerConfig()
    viewport = Viewport.from_config(config)
    width, height = 640, 480

    center = viewport.index_to_point((height // 2) * width + width // 2, width, height)
    assert escape(center, 255) is None

    corner = viewport.index_to_point(0, width, height)
    value = escape(corner, 255)
    assert value is not None
    assert value < 10
