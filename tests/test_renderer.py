import numpy as np
import pytest

from mandelbrot_viewer.compute import escape
from mandelbrot_viewer.renderer import ColorCycle, MandelbrotRenderer, RenderParameters, render
from mandelbrot_viewer.viewport import Viewport


def expected_buffer(viewport, params, width, height):
    values = []
    for index in range(width * height):
        value = escape(viewport.index_to_point(index, width, height), params.max_iterations)
        values.append((params.color_scale * int(value or 0.0)) & 0xFFFFFFFF)
    return np.array(values, dtype=np.uint32)


def test_render_matches_per_pixel_escape(viewport, params):
    buffer = render(viewport, params, 40, 30)
    assert buffer.dtype == np.uint32
    assert buffer.shape == (40 * 30,)
    np.testing.assert_array_equal(buffer, expected_buffer(viewport, params, 40, 30))


def test_bounded_pixels_are_zero(viewport, params):
    width, height = 64, 48
    buffer = render(viewport, params, width, height)
    center = (height // 2) * width + width // 2
    assert buffer[center] == 0
    assert buffer.any()


def test_values_are_multiples_of_color_scale(viewport, params):
    params.next_color_scale()  # 65536
    buffer = render(viewport, params, 32, 24)
    assert params.color_scale == 65536
    assert np.all(buffer % 65536 == 0)


def test_render_fills_supplied_buffer(viewport, params):
    out = np.full(16 * 12, 7, dtype=np.uint32)
    result = render(viewport, params, 16, 12, out=out)
    assert result is out
    np.testing.assert_array_equal(out, expected_buffer(viewport, params, 16, 12))


def test_render_rejects_wrong_buffer(viewport, params):
    with pytest.raises(ValueError):
        render(viewport, params, 16, 12, out=np.zeros(10, dtype=np.uint32))
    with pytest.raises(ValueError):
        render(viewport, params, 16, 12, out=np.zeros(16 * 12, dtype=np.float64))


def test_large_scale_wraps_to_32_bits():
    viewport = Viewport(complex(-0.75, 0.1), complex(-0.7499, 0.0999))
    params = RenderParameters(zoom_factor=2.0, max_iterations=100000,
                              colors=ColorCycle((2 ** 31,)))
    buffer = render(viewport, params, 4, 4)
    assert buffer.dtype == np.uint32
    np.testing.assert_array_equal(buffer, expected_buffer(viewport, params, 4, 4))


def test_renderer_owns_and_reuses_buffer(viewport, params):
    renderer = MandelbrotRenderer(20, 15)
    first = renderer.render(viewport, params)
    viewport.shift('left')
    second = renderer.render(viewport, params)
    assert first is second is renderer.buffer
    assert renderer.render_count == 2


def test_color_cycle_wraps_after_three(params):
    start = params.color_scale
    seen = [params.next_color_scale() for _ in range(3)]
    assert seen == [65536, 1, 256]
    assert params.color_scale == start


def test_color_cycle_rejects_empty_and_unknown_start():
    with pytest.raises(ValueError):
        ColorCycle(())
    with pytest.raises(ValueError):
        ColorCycle((1, 2), start=3)
