"""
Pipe Field - The set of pipes drawn on one canvas.
"""

import logging
import random
from typing import Iterator, List, Optional

from .config import ConfigError, PipesConfig, check_canvas
from .pipe import Pipe
from .surface import RenderSurface

logger = logging.getLogger(__name__)


class PipeField:
    """
    Fixed, ordered group of pipes sharing one canvas size.

    Pipes are drawn in order, so where two pipes land on the same cell in
    the same frame the later one is what shows.
    """

    def __init__(self, width: int, height: int, num_pipes: int = 1,
                 min_track_len: int = 4, max_track_len: int = 7,
                 palette: int = 0, glyph_set: int = 0, seed: Optional[int] = None):
        check_canvas(width, height)
        if num_pipes <= 0:
            raise ConfigError("No pipes? The pipe count must be at least 1.")

        self.width = width
        self.height = height
        self.frame = 0

        # With a master seed, every pipe still gets its own generator
        seeder = random.Random(seed) if seed is not None else None
        self.pipes: List[Pipe] = []
        for _ in range(num_pipes):
            pipe_seed = seeder.getrandbits(64) if seeder is not None else None
            self.pipes.append(Pipe(width, height,
                                   min_track_len=min_track_len,
                                   max_track_len=max_track_len,
                                   palette=palette, glyph_set=glyph_set,
                                   seed=pipe_seed))
        logger.debug(f"Created field of {num_pipes} pipe(s) on {width}x{height} canvas")

    @classmethod
    def from_config(cls, config: PipesConfig, width: int, height: int) -> 'PipeField':
        config.validate()
        return cls(width, height,
                   num_pipes=config.num_pipes,
                   min_track_len=config.min_track_len,
                   max_track_len=config.max_track_len,
                   palette=config.palette,
                   glyph_set=config.glyph_set,
                   seed=config.seed)

    @classmethod
    def from_surface(cls, surface: RenderSurface, config: PipesConfig) -> 'PipeField':
        """Build a field covering the whole of ``surface``."""
        rows, cols = surface.dimensions()
        return cls.from_config(config, cols, rows)

    def __len__(self) -> int:
        return len(self.pipes)

    def __iter__(self) -> Iterator[Pipe]:
        return iter(self.pipes)

    def step_and_render(self, surface: RenderSurface):
        """Advance and draw every pipe, one after another, for one frame."""
        for pipe in self.pipes:
            pipe.advance()
            pipe.render(surface)
        self.frame += 1
