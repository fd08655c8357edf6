"""
Ripes - Moving pipes in the terminal

Pipes wander across a character grid, turning at random, cycling colors
and wrapping around the edges.

Basic Usage:
    from ripes import run_pipes, PipesConfig
    run_pipes(PipesConfig(num_pipes=3))

Headless:
    from ripes import PipeField, BufferSurface

    surface = BufferSurface(rows=24, cols=80)
    field = PipeField(80, 24, num_pipes=2, seed=1)
    for _ in range(100):
        field.step_and_render(surface)
    print(surface.render_text())
"""

__version__ = "1.0.0"

# Core classes
from .pipe import Pipe
from .field import PipeField
from .app import PipesApp, run_frames, run_pipes, main

# Data models
from .models import Direction, Position
from .config import ConfigError, PipesConfig

# Drawing
from .colors import Color, PALETTES
from .glyphs import GLYPH_SETS, PRINT_MAP, glyph_for, glyph_index
from .surface import RenderSurface, BufferSurface, CursesSurface

__all__ = [
    # Version
    "__version__",
    # Core
    "Pipe",
    "PipeField",
    "PipesApp",
    "run_frames",
    "run_pipes",
    "main",
    # Models
    "Direction",
    "Position",
    "ConfigError",
    "PipesConfig",
    # Drawing
    "Color",
    "PALETTES",
    "GLYPH_SETS",
    "PRINT_MAP",
    "glyph_for",
    "glyph_index",
    "RenderSurface",
    "BufferSurface",
    "CursesSurface",
]
