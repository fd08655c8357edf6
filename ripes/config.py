"""
Pipes Configuration - Validated settings for a pipes run.

All checks happen before any pipe is built, so a bad setting never
produces a half-initialized field.

Usage:
    from ripes.config import PipesConfig

    config = PipesConfig(palette=1, num_pipes=4)
    config.validate()
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .colors import PALETTES
from .glyphs import GLYPH_SETS

logger = logging.getLogger(__name__)

DEFAULT_PALETTE = 0
DEFAULT_GLYPH_SET = 0
DEFAULT_MIN_TRACK_LEN = 4
DEFAULT_MAX_TRACK_LEN = 7
DEFAULT_NUM_PIPES = 1
DEFAULT_DELAY_MS = 16


class ConfigError(ValueError):
    """A setting that makes the pipe simulation undefined."""


def check_canvas(width: int, height: int):
    if width <= 0 or height <= 0:
        raise ConfigError(f"Canvas must have a positive size, got {width}x{height}")


def check_track_lengths(min_track_len: int, max_track_len: int):
    if min_track_len <= 0 or max_track_len <= 0:
        raise ConfigError(
            f"Track lengths must be positive integers ({min_track_len}, {max_track_len})"
        )
    if min_track_len >= max_track_len:
        raise ConfigError(
            f"Minimum length must be less than the maximum length "
            f"({min_track_len} >= {max_track_len})"
        )


def check_palette(palette: int):
    if not 0 <= palette < len(PALETTES):
        raise ConfigError(
            f"There are only {len(PALETTES)} supported color sets. "
            f"Please specify a color set between 0 and {len(PALETTES) - 1}."
        )


def check_glyph_set(glyph_set: int):
    if not 0 <= glyph_set < len(GLYPH_SETS):
        if len(GLYPH_SETS) == 1:
            raise ConfigError("There is only one charset right now.")
        raise ConfigError(
            f"Please specify a charset between 0 and {len(GLYPH_SETS) - 1}."
        )


@dataclass
class PipesConfig:
    """Settings for one run of the pipes animation."""
    palette: int = DEFAULT_PALETTE
    glyph_set: int = DEFAULT_GLYPH_SET
    min_track_len: int = DEFAULT_MIN_TRACK_LEN
    max_track_len: int = DEFAULT_MAX_TRACK_LEN
    num_pipes: int = DEFAULT_NUM_PIPES
    delay_ms: int = DEFAULT_DELAY_MS
    seed: Optional[int] = None

    def validate(self) -> 'PipesConfig':
        """Raise ConfigError on the first invalid setting; return self otherwise."""
        check_glyph_set(self.glyph_set)
        check_track_lengths(self.min_track_len, self.max_track_len)
        check_palette(self.palette)
        if self.num_pipes <= 0:
            raise ConfigError("No pipes? The pipe count must be at least 1.")
        if self.delay_ms < 0:
            raise ConfigError(f"Delay must not be negative, got {self.delay_ms}ms")
        return self

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_args(cls, args) -> 'PipesConfig':
        """Build a validated config from parsed command line arguments."""
        config = cls(
            palette=args.colorset,
            glyph_set=args.charset,
            min_track_len=args.min_len,
            max_track_len=args.max_len,
            num_pipes=args.numpipes,
            delay_ms=args.delay,
            seed=args.seed,
        )
        config.validate()
        logger.debug(f"Configuration: {config.to_dict()}")
        return config
