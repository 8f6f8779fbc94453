"""
Pygame window used as the viewer's input source and pixel sink.

PygameDisplay wraps everything the controller needs from the windowing
layer:
- Per-tick input snapshots (held keys, mouse buttons, cursor position)
- Presenting a row-major uint32 buffer as packed 0xRRGGBB pixels
- Frame pacing and the "is the window still open" query
"""

import enum
import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

import numpy as np
import pygame

logger = logging.getLogger(__name__)


class DisplayError(RuntimeError):
    """Raised when a frame could not be presented."""


class WindowCreationError(DisplayError):
    """Raised when the window could not be created."""


class Key(enum.Enum):
    """Keys the viewer reacts to."""
    LEFT = 'left'
    RIGHT = 'right'
    UP = 'up'
    DOWN = 'down'
    ZOOM_IN = 'zoom_in'
    ZOOM_OUT = 'zoom_out'
    QUIT = 'q'
    ESCAPE = 'escape'
    RECOLOR = 'c'


# Pygame key codes for each recognized key
KEY_BINDINGS = {
    Key.LEFT: (pygame.K_LEFT,),
    Key.RIGHT: (pygame.K_RIGHT,),
    Key.UP: (pygame.K_UP,),
    Key.DOWN: (pygame.K_DOWN,),
    Key.ZOOM_IN: (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS),
    Key.ZOOM_OUT: (pygame.K_MINUS, pygame.K_KP_MINUS),
    Key.QUIT: (pygame.K_q,),
    Key.ESCAPE: (pygame.K_ESCAPE,),
    Key.RECOLOR: (pygame.K_c,),
}


@dataclass(frozen=True)
class InputState:
    """Snapshot of the input devices taken once per tick."""

    keys: FrozenSet[Key] = frozenset()
    mouse_left: bool = False
    mouse_right: bool = False
    mouse_pos: Optional[Tuple[int, int]] = None

    def is_down(self, key):
        return key in self.keys


class PygameDisplay:
    """
    A fixed-size pygame window.

    Usage:
        display = PygameDisplay(640, 480, "mandelbrot", framerate=60)
        display.open()
        while display.is_open():
            display.wait_frame()
            state = display.poll()
            ...
            display.present(buffer)
        display.close()
    """

    def __init__(self, width, height, title="mandelbrot", framerate=60.0):
        self.width = width
        self.height = height
        self.title = title
        self.framerate = framerate
        self.screen = None
        self.frame = None
        self.clock = None
        self._open = False

    def open(self):
        """
        Initialize pygame and create the window.

        Raises:
            WindowCreationError: if pygame cannot provide a window
        """
        try:
            pygame.init()
            self.screen = pygame.display.set_mode((self.width, self.height))
            # Off-screen 32-bit surface so buffer values map 1:1 to pixels
            self.frame = pygame.Surface((self.width, self.height), 0, 32)
        except pygame.error as e:
            pygame.quit()
            raise WindowCreationError(f"Unable to create window: {e}") from e
        pygame.display.set_caption(self.title)
        self.clock = pygame.time.Clock()
        self._open = True
        logger.info("Opened %dx%d window", self.width, self.height)

    def close(self):
        self._open = False
        pygame.quit()

    def is_open(self):
        return self._open

    def set_title(self, title):
        self.title = title
        if self._open:
            pygame.display.set_caption(title)

    def wait_frame(self):
        """Block for whatever is left of the frame budget since the last call."""
        self.clock.tick(self.framerate)

    def delay(self, ms):
        pygame.time.delay(int(ms))

    def poll(self):
        """
        Pump the event queue and sample the input devices.

        A window close request marks the display closed.

        Returns:
            InputState for this tick
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._open = False

        pressed = pygame.key.get_pressed()
        keys = frozenset(
            key for key, codes in KEY_BINDINGS.items()
            if any(pressed[code] for code in codes)
        )
        left, _, right = pygame.mouse.get_pressed()[:3]
        return InputState(
            keys=keys,
            mouse_left=bool(left),
            mouse_right=bool(right),
            mouse_pos=self._mouse_position(),
        )

    def _mouse_position(self):
        """Cursor position clamped to the window, or None without mouse focus."""
        if not pygame.mouse.get_focused():
            return None
        x, y = pygame.mouse.get_pos()
        return (min(max(x, 0), self.width - 1), min(max(y, 0), self.height - 1))

    def present(self, buffer):
        """
        Show a row-major buffer of width * height uint32 values.

        Raises:
            DisplayError: if the buffer has the wrong size or pygame fails
        """
        if buffer.size != self.width * self.height:
            raise DisplayError(
                f"buffer holds {buffer.size} pixels, window needs {self.width * self.height}"
            )
        # surfarray indexes [x, y]; the buffer is [y, x]
        pixels = np.asarray(buffer, dtype=np.uint32).reshape(self.height, self.width).T
        try:
            pygame.surfarray.blit_array(self.frame, pixels)
            self.screen.blit(self.frame, (0, 0))
            pygame.display.flip()
        except pygame.error as e:
            raise DisplayError(f"Unable to present frame: {e}") from e
