"""
Pipe Colors - Color enumeration, palettes and curses color pair setup.

Each pipe draws with one color at a time, taken from one of the built-in
palettes. Color values are the curses color numbers, so a color maps
straight onto the pair registered for it by ``init_colors``.
"""

from enum import IntEnum
from typing import Tuple

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False


class Color(IntEnum):
    """Foreground colors, numbered as curses numbers them."""
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7

    @property
    def pair(self) -> int:
        """Color pair number registered for this color by init_colors()."""
        return int(self) + 1


PALETTE_SIZE = 6

# Selectable with --colorset; every palette holds exactly PALETTE_SIZE colors
PALETTES: Tuple[Tuple[Color, ...], ...] = (
    (Color.WHITE, Color.RED, Color.WHITE, Color.YELLOW, Color.CYAN, Color.MAGENTA),
    (Color.CYAN, Color.MAGENTA, Color.BLUE, Color.YELLOW, Color.GREEN, Color.RED),
    (Color.WHITE, Color.BLUE, Color.CYAN, Color.MAGENTA, Color.GREEN, Color.WHITE),
)


def get_palette(index: int) -> Tuple[Color, ...]:
    """Return the palette at ``index``, raising IndexError when out of range."""
    if not 0 <= index < len(PALETTES):
        raise IndexError(f"palette {index} out of range (0-{len(PALETTES) - 1})")
    return PALETTES[index]


def init_colors():
    """Register one color pair per Color on the terminal's default background."""
    if not CURSES_AVAILABLE or curses is None:
        return
    curses.start_color()
    curses.use_default_colors()
    for color in Color:
        curses.init_pair(color.pair, int(color), -1)
