"""
Pipe - State machine for a single moving trace.

A pipe runs straight for a random number of steps (its track), then turns
a quarter turn left or right on the spot and starts a new track. It wraps
around the canvas edges, so it never leaves the grid.
"""

import logging
import random
from typing import Optional

from .colors import Color, PALETTE_SIZE, get_palette
from .config import (
    check_canvas,
    check_glyph_set,
    check_palette,
    check_track_lengths,
)
from .glyphs import get_glyph_set, glyph_index
from .models import Direction, Position
from .surface import RenderSurface

logger = logging.getLogger(__name__)


class Pipe:
    """
    One pipe on a fixed-size canvas.

    The pipe owns its random generator, so pipes never share random state
    and a seeded pipe replays the same walk.
    """

    def __init__(self, width: int, height: int,
                 min_track_len: int = 4, max_track_len: int = 7,
                 palette: int = 0, glyph_set: int = 0,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None):
        check_canvas(width, height)
        check_track_lengths(min_track_len, max_track_len)
        check_palette(palette)
        check_glyph_set(glyph_set)

        self.width = width
        self.height = height
        self.min_track_len = min_track_len
        self.max_track_len = max_track_len
        self.palette_index = palette
        self.glyph_set_index = glyph_set
        self._rng = rng if rng is not None else random.Random(seed)

        self.position = Position(0, 0)
        # Placeholders until spawn() draws the real values
        self.direction = Direction.UP
        self.previous_direction = Direction.UP
        self.steps_remaining = min_track_len
        self.color = Color.WHITE
        self.spawn()

    def __repr__(self):
        return (f"Pipe(pos=({self.position.x}, {self.position.y}), "
                f"dir={self.direction.name}, steps={self.steps_remaining})")

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def set_random_color(self):
        """Pick a new draw color from this pipe's palette."""
        self.color = get_palette(self.palette_index)[self._rng.randrange(PALETTE_SIZE)]

    def set_track_len(self):
        """Start a new track of length in [min_track_len, max_track_len)."""
        self.steps_remaining = self._rng.randrange(self.min_track_len, self.max_track_len)

    def spawn(self):
        """
        Put the pipe on a random canvas edge, heading into the canvas.

        The edge and the heading come from the same draw: a pipe moving UP
        starts on the bottom row, DOWN on the top row, LEFT in the last
        column and RIGHT in the first.
        """
        self.direction = self._rng.choice(list(Direction))
        self.previous_direction = self.direction

        if self.direction == Direction.UP:
            self.position = Position(self._rng.randrange(self.width), self.height - 1)
        elif self.direction == Direction.DOWN:
            self.position = Position(self._rng.randrange(self.width), 0)
        elif self.direction == Direction.LEFT:
            self.position = Position(self.width - 1, self._rng.randrange(self.height))
        else:
            self.position = Position(0, self._rng.randrange(self.height))

        self.set_track_len()
        self.set_random_color()
        logger.debug(f"Spawned {self!r}")

    reset = spawn

    def place(self, x: int, y: int, direction: Direction):
        """Move the pipe to (x, y) heading ``direction``, as if it had just gone straight."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"({x}, {y}) is outside a {self.width}x{self.height} canvas")
        self.position = Position(x, y)
        self.direction = direction
        self.previous_direction = direction

    def turn(self):
        """Swap to one of the two perpendicular headings and start a new track."""
        self.direction = self._rng.choice(self.direction.perpendicular)
        self.set_track_len()

    def advance(self):
        """
        Step the pipe by one frame.

        The step that finishes a track is spent turning: the pipe stays in
        its cell, and that cell gets redrawn as the corner.
        """
        self.steps_remaining -= 1
        self.previous_direction = self.direction
        if self.steps_remaining <= 0:
            self.turn()
        else:
            dx, dy = self.direction.delta
            self.position.x = (self.position.x + dx) % self.width
            self.position.y = (self.position.y + dy) % self.height

    def glyph(self) -> str:
        """Character for the pipe's current cell."""
        charset = get_glyph_set(self.glyph_set_index)
        return charset[glyph_index(self.previous_direction, self.direction)]

    def render(self, surface: RenderSurface):
        """Draw the pipe's current cell onto ``surface``."""
        surface.set_color(self.color)
        surface.write_char(self.position.y, self.position.x, self.glyph())
