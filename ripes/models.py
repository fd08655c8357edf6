"""
Pipe Data Models - Directions and grid positions.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class Direction(IntEnum):
    """Grid-aligned headings; the values index the glyph map."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) step for one cell of movement. Rows grow downward."""
        return _DELTAS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    @property
    def perpendicular(self) -> Tuple['Direction', 'Direction']:
        """The two headings a pipe may turn to from this one."""
        if self.is_vertical:
            return (Direction.LEFT, Direction.RIGHT)
        return (Direction.UP, Direction.DOWN)

    @property
    def opposite(self) -> 'Direction':
        return Direction((self + 2) % 4)


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


@dataclass
class Position:
    """Cell on the canvas: x is the column, y is the row."""
    x: int = 0
    y: int = 0

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)
