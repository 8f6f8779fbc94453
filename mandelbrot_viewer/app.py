"""
Main application module for the Mandelbrot viewer.

Contains the MandelbrotApp class which handles:
- Ownership of the viewport, render parameters and pixel buffer
- Turning each tick's input snapshot into at most one action
- Re-rendering after every zoom, pan or recolor
- The paced frame loop that feeds the display
"""

import enum
import logging

from .config import ConfigError, ViewerConfig
from .display import DisplayError, Key, PygameDisplay, WindowCreationError
from .renderer import MandelbrotRenderer, RenderParameters
from .viewport import Viewport

logger = logging.getLogger(__name__)


class Action(enum.Enum):
    IDLE = 'idle'
    ZOOM_IN = 'zoom_in'
    ZOOM_OUT = 'zoom_out'
    SHIFT = 'shift'
    QUIT = 'quit'
    RECOLOR = 'recolor'


# Checked in this order; the first held key wins.
SHIFT_KEYS = (
    (Key.LEFT, 'left'),
    (Key.RIGHT, 'right'),
    (Key.UP, 'up'),
    (Key.DOWN, 'down'),
)


def dispatch(state, width, height):
    """
    Pick the single action for this tick's input, highest priority first.

    Mouse zooms beat pans, pans beat keyboard zooms, those beat quitting,
    and recoloring comes last.

    Args:
        state: InputState snapshot
        width, height: Window dimensions (keyboard zooms use the midpoint)

    Returns:
        (Action, argument) where argument is a pixel position for zooms,
        a direction name for shifts, and None otherwise.
    """
    if state.mouse_pos is not None:
        if state.mouse_left:
            return Action.ZOOM_IN, state.mouse_pos
        if state.mouse_right:
            return Action.ZOOM_OUT, state.mouse_pos
    for key, direction in SHIFT_KEYS:
        if state.is_down(key):
            return Action.SHIFT, direction
    midpoint = (width / 2, height / 2)
    if state.is_down(Key.ZOOM_IN):
        return Action.ZOOM_IN, midpoint
    if state.is_down(Key.ZOOM_OUT):
        return Action.ZOOM_OUT, midpoint
    if state.is_down(Key.QUIT) or state.is_down(Key.ESCAPE):
        return Action.QUIT, None
    if state.is_down(Key.RECOLOR):
        return Action.RECOLOR, None
    return Action.IDLE, None


class MandelbrotApp:
    """
    Controller tying input, viewport, parameters and renderer together.

    Usage:
        app = MandelbrotApp(ViewerConfig())
        status = app.run(display)

    Attributes:
        config: ViewerConfig the app was started with
        viewport: Current Viewport
        params: Current RenderParameters
        renderer: MandelbrotRenderer owning the pixel buffer
    """

    def __init__(self, config=None):
        self.config = (config or ViewerConfig()).validate()
        self.width = self.config.width
        self.height = self.config.height
        self.viewport = Viewport.from_config(self.config)
        self.params = RenderParameters.from_config(self.config)
        self.renderer = MandelbrotRenderer(self.width, self.height)

    @property
    def buffer(self):
        return self.renderer.buffer

    def caption(self):
        return (f"{self.config.title} - max_iter {self.params.max_iterations}, "
                f"color x{self.params.color_scale}")

    def render(self):
        return self.renderer.render(self.viewport, self.params)

    def apply(self, action, argument=None):
        """
        Carry out one action and re-render if it was a mutation.

        Returns:
            True if a render happened
        """
        if action is Action.ZOOM_IN or action is Action.ZOOM_OUT:
            self.viewport.zoom(argument, self.width, self.height, self.params,
                               zoom_out=action is Action.ZOOM_OUT)
        elif action is Action.SHIFT:
            self.viewport.shift(argument)
        elif action is Action.RECOLOR:
            scale = self.params.next_color_scale()
            logger.debug("Color scale -> %d", scale)
        else:
            return False
        self.render()
        return True

    def tick(self, display):
        """
        Run one frame: pace, poll, act, present.

        Returns:
            False once the loop should stop
        """
        display.wait_frame()
        state = display.poll()
        if not display.is_open():
            return False

        action, argument = dispatch(state, self.width, self.height)
        if action is Action.QUIT:
            logger.info("Quit requested")
            return False

        rendered = self.apply(action, argument)
        if rendered:
            display.set_title(self.caption())

        display.present(self.buffer)
        if rendered and action is Action.RECOLOR:
            # Holding C would otherwise recolor on every tick
            display.delay(self.config.recolor_delay_ms)
        return True

    def run(self, display):
        """
        Render the first frame and loop until the window closes or quit.

        Args:
            display: An opened PygameDisplay (or anything with its interface)

        Returns:
            Process exit status: 0 on normal exit, 1 if presenting failed
        """
        display.set_title(f"{self.config.title} - compiling (first run only)...")
        self.renderer.warmup()
        self.render()
        display.set_title(self.caption())

        try:
            display.present(self.buffer)
            while display.is_open():
                if not self.tick(display):
                    break
        except DisplayError as e:
            logger.error("Display failure, stopping: %s", e)
            return 1
        return 0


def run(width=None, height=None, max_iter=None, settings_path=None):
    """
    Run the Mandelbrot viewer.

    Args:
        width: Window width (default 640)
        height: Window height (default 480)
        max_iter: Starting iteration cap (default 255)
        settings_path: Optional JSON settings file

    Returns:
        Process exit status
    """
    try:
        config = ViewerConfig.from_settings(
            settings_path, width=width, height=height, max_iterations=max_iter
        )
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    app = MandelbrotApp(config)
    display = PygameDisplay(config.width, config.height, config.title, config.framerate)
    try:
        display.open()
    except WindowCreationError as e:
        logger.error("%s", e)
        return 1

    try:
        return app.run(display)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 0
    finally:
        display.close()
