"""
Render Surface Interface

Defines the drawing interface the pipes are rendered onto, with a curses
implementation for terminals and an in-memory grid for headless runs.

Usage:
    from ripes.surface import RenderSurface

    class MySurface(RenderSurface):
        def dimensions(self):
            return (24, 80)
        # ... implement other methods
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from .colors import Color, init_colors

logger = logging.getLogger(__name__)


class RenderSurface(ABC):
    """
    Abstract fixed-size character grid.

    The pipes only ever write to a surface; nothing is read back from it.
    """

    @abstractmethod
    def dimensions(self) -> Tuple[int, int]:
        """
        Get the grid size.

        Returns:
            Tuple of (rows, cols)
        """
        pass

    @abstractmethod
    def set_color(self, color: Color):
        """Set the foreground color used by subsequent writes."""
        pass

    @abstractmethod
    def write_char(self, row: int, col: int, glyph: str):
        """Write one character at (row, col) in the current color."""
        pass

    @abstractmethod
    def present(self):
        """Show everything written since the last call."""
        pass

    @abstractmethod
    def teardown(self):
        """Restore the display. Called once on every exit path."""
        pass


class BufferSurface(RenderSurface):
    """
    In-memory surface.

    Keeps the last glyph and color written to each cell, which is enough
    to inspect a frame without a terminal.
    """

    def __init__(self, rows: int, cols: int, fill: str = ' '):
        self.rows = rows
        self.cols = cols
        self.fill = fill
        self.cells: List[List[str]] = [[fill] * cols for _ in range(rows)]
        self.colors: List[List[Optional[Color]]] = [[None] * cols for _ in range(rows)]
        self.current_color: Optional[Color] = None
        self.frames_presented = 0
        self.torn_down = False

    def dimensions(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def set_color(self, color: Color):
        self.current_color = color

    def write_char(self, row: int, col: int, glyph: str):
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"({row}, {col}) is outside a {self.rows}x{self.cols} surface")
        self.cells[row][col] = glyph
        self.colors[row][col] = self.current_color

    def present(self):
        self.frames_presented += 1

    def teardown(self):
        self.torn_down = True

    def char_at(self, row: int, col: int) -> str:
        return self.cells[row][col]

    def color_at(self, row: int, col: int) -> Optional[Color]:
        return self.colors[row][col]

    def render_text(self) -> str:
        """The grid as newline-separated rows."""
        return "\n".join("".join(row) for row in self.cells)


class CursesSurface(RenderSurface):
    """Surface backed by a curses window."""

    def __init__(self, screen):
        if not CURSES_AVAILABLE or curses is None:
            raise RuntimeError("curses library not available")
        self.screen = screen
        self._setup()

    def _setup(self):
        try:
            curses.curs_set(0)  # Hide cursor
        except curses.error:
            logger.debug("Terminal cannot hide the cursor")
        init_colors()
        self.screen.erase()
        self.screen.refresh()

    def dimensions(self) -> Tuple[int, int]:
        return self.screen.getmaxyx()

    def set_color(self, color: Color):
        self.screen.attrset(curses.color_pair(color.pair))

    def write_char(self, row: int, col: int, glyph: str):
        try:
            self.screen.addstr(row, col, glyph)
        except curses.error:
            # Writing the bottom-right cell succeeds but fails to move the cursor
            pass

    def present(self):
        self.screen.refresh()

    def teardown(self):
        try:
            self.screen.attrset(curses.A_NORMAL)
            self.screen.erase()
            self.screen.refresh()
            curses.curs_set(1)  # Restore cursor
        except curses.error:
            logger.debug("Terminal refused part of the teardown")
