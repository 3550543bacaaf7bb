from __future__ import annotations

import numpy as np

from .pieces import Shape, shape_cells


class GameGrid:
    """Fixed-size board of locked cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are the colour tags of the tetrominoes that were locked there.
    Row 0 is the top of the board; rows above it (negative y) are valid
    positions for a falling piece but are never stored.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_valid(self, shape: Shape, x: int, y: int) -> bool:
        for cx, cy in shape_cells(shape, x, y):
            if cx < 0 or cx >= self.width or cy >= self.height:
                return False
            if cy >= 0 and self.grid[cy, cx] != 0:
                return False
        return True

    def lock(self, shape: Shape, x: int, y: int, value: int) -> None:
        """Write the occupied cells of `shape`; cells still above the board are dropped."""
        for cx, cy in shape_cells(shape, x, y):
            if cy >= 0:
                self.grid[cy, cx] = value

    def clear_lines(self) -> int:
        cleared = 0
        row = self.height - 1
        while row >= 0:
            if np.all(self.grid[row] != 0):
                # Shift everything above down by one and open an empty row on top
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0] = 0
                cleared += 1
            else:
                row -= 1
        return cleared

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
