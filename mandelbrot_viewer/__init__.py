"""
Mandelbrot Set Viewer Package

An interactive escape-time Mandelbrot viewer using Pygame for the
window and input, and Numba for the JIT-compiled per-pixel kernel.

Quick Start:
    from mandelbrot_viewer import run
    run()

Or from command line:
    python -m mandelbrot_viewer

Package Structure:
    - config.py: Startup configuration and settings.json loading
    - viewport.py: Complex-plane rectangle, pixel mapping, zoom and pan
    - compute.py: JIT-compiled escape-time and render kernels
    - renderer.py: Render parameters, color cycle and the pixel buffer
    - display.py: Pygame window, input snapshots and frame presentation
    - app.py: Controller and paced main loop

Controls:
    - Left mouse: Zoom in at the cursor
    - Right mouse: Zoom out at the cursor
    - Arrow keys: Pan
    - + / -: Zoom in/out at the window center
    - C: Cycle color scale
    - Q / ESC: Quit
"""

from .app import run, dispatch, Action, MandelbrotApp
from .compute import escape
from .config import ConfigError, ViewerConfig, load_settings
from .display import DisplayError, InputState, Key, PygameDisplay, WindowCreationError
from .renderer import ColorCycle, MandelbrotRenderer, RenderParameters, render
from .viewport import Viewport

__version__ = "1.0.0"
__all__ = [
    "run",
    "dispatch",
    "Action",
    "MandelbrotApp",
    "escape",
    "ConfigError",
    "ViewerConfig",
    "load_settings",
    "DisplayError",
    "InputState",
    "Key",
    "PygameDisplay",
    "WindowCreationError",
    "ColorCycle",
    "MandelbrotRenderer",
    "RenderParameters",
    "render",
    "Viewport",
]
