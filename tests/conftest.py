import os

# Headless SDL so display tests run without a screen or sound card
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from mandelbrot_viewer.config import ViewerConfig
from mandelbrot_viewer.display import DisplayError, InputState
from mandelbrot_viewer.renderer import RenderParameters
from mandelbrot_viewer.viewport import Viewport


@pytest.fixture
def config():
    return ViewerConfig()


@pytest.fixture
def small_config():
    return ViewerConfig(width=32, height=24, max_iterations=50)


@pytest.fixture
def viewport(config):
    return Viewport.from_config(config)


@pytest.fixture
def params(config):
    return RenderParameters.from_config(config)


class FakeDisplay:
    """Scripted stand-in for PygameDisplay."""

    def __init__(self, states, fail_on_present=None):
        self.states = list(states)
        self.fail_on_present = fail_on_present
        self.presented = []
        self.titles = []
        self.delays = []
        self.calls = []
        self.waits = 0
        self._open = True

    def is_open(self):
        return self._open

    def wait_frame(self):
        self.waits += 1

    def poll(self):
        if not self.states:
            self._open = False
            return InputState()
        return self.states.pop(0)

    def set_title(self, title):
        self.titles.append(title)

    def delay(self, ms):
        self.delays.append(ms)
        self.calls.append("delay")

    def present(self, buffer):
        if self.fail_on_present is not None and len(self.presented) == self.fail_on_present:
            raise DisplayError("sink went away")
        self.presented.append(buffer.copy())
        self.calls.append("present")


@pytest.fixture
def fake_display():
    return FakeDisplay
