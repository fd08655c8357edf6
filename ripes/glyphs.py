"""
Glyph Map - Box-drawing characters for pipe segments.

A pipe cell is drawn from the direction the pipe was heading when it
entered the cell and the direction it leaves in. Equal directions give a
straight segment; a turn gives the corner joining the side it came in from
to the side it goes out of. Moving UP then turning RIGHT, for example,
enters from below and exits right, so the cell shows ``┏``.
"""

from typing import Tuple

from .models import Direction

# Indices into a glyph set
VERTICAL = 0
HORIZONTAL = 1
CORNER_DOWN_RIGHT = 2    # ┏
CORNER_DOWN_LEFT = 3     # ┓
CORNER_UP_LEFT = 4       # ┛
CORNER_UP_RIGHT = 5      # ┗

CORNER_GLYPHS = (CORNER_DOWN_RIGHT, CORNER_DOWN_LEFT, CORNER_UP_LEFT, CORNER_UP_RIGHT)

# PRINT_MAP[previous][current], rows and columns ordered UP, RIGHT, DOWN, LEFT.
# Reversals never happen; their entries fall back to the straight glyph.
PRINT_MAP: Tuple[Tuple[int, ...], ...] = (
    (VERTICAL, CORNER_DOWN_RIGHT, VERTICAL, CORNER_DOWN_LEFT),
    (CORNER_UP_LEFT, HORIZONTAL, CORNER_DOWN_LEFT, HORIZONTAL),
    (VERTICAL, CORNER_UP_RIGHT, VERTICAL, CORNER_UP_LEFT),
    (CORNER_UP_RIGHT, HORIZONTAL, CORNER_DOWN_RIGHT, HORIZONTAL),
)

GLYPH_SETS: Tuple[Tuple[str, ...], ...] = (
    ("┃", "━", "┏", "┓", "┛", "┗"),
)


def glyph_index(previous: Direction, current: Direction) -> int:
    """Index into a glyph set for a pipe that was heading ``previous`` and now heads ``current``."""
    return PRINT_MAP[previous][current]


def get_glyph_set(index: int) -> Tuple[str, ...]:
    """Return the glyph set at ``index``, raising IndexError when out of range."""
    if not 0 <= index < len(GLYPH_SETS):
        raise IndexError(f"glyph set {index} out of range (0-{len(GLYPH_SETS) - 1})")
    return GLYPH_SETS[index]


def glyph_for(previous: Direction, current: Direction, glyph_set: int = 0) -> str:
    """Character to draw for the transition ``previous`` -> ``current``."""
    return get_glyph_set(glyph_set)[glyph_index(previous, current)]
