import unittest

import numpy as np

from tetromino_engine.game import TETROMINOES, GameGrid, TetrominoType

I_SHAPE = TETROMINOES[TetrominoType.I].shape
O_SHAPE = TETROMINOES[TetrominoType.O].shape


def fill_row(grid, row, skip=()):
    for col in range(grid.width):
        if col not in skip:
            grid.grid[row, col] = 3


class ValidatorTests(unittest.TestCase):
    def setUp(self):
        self.grid = GameGrid(10, 20)

    def test_horizontal_bounds(self):
        self.assertFalse(self.grid.is_valid(I_SHAPE, -1, 0))
        self.assertTrue(self.grid.is_valid(I_SHAPE, 0, 0))
        self.assertTrue(self.grid.is_valid(I_SHAPE, 6, 0))
        self.assertFalse(self.grid.is_valid(I_SHAPE, 7, 0))

    def test_bottom_bound(self):
        self.assertTrue(self.grid.is_valid(I_SHAPE, 0, 19))
        self.assertFalse(self.grid.is_valid(I_SHAPE, 0, 20))
        self.assertFalse(self.grid.is_valid(O_SHAPE, 0, 19))

    def test_rows_above_board_ignore_contents(self):
        for row in range(20):
            fill_row(self.grid, row)
        self.assertTrue(self.grid.is_valid(I_SHAPE, 3, -1))
        self.assertTrue(self.grid.is_valid(O_SHAPE, 3, -5))
        # Still bounded horizontally above the board
        self.assertFalse(self.grid.is_valid(I_SHAPE, 8, -3))

    def test_collision_with_locked_cell(self):
        self.grid.grid[0, 4] = 2
        self.assertFalse(self.grid.is_valid(O_SHAPE, 3, -1))
        self.assertTrue(self.grid.is_valid(O_SHAPE, 5, -1))


class LockTests(unittest.TestCase):
    def test_cells_above_board_are_clipped(self):
        grid = GameGrid(10, 20)
        grid.lock(O_SHAPE, 2, -1, int(TetrominoType.O))
        self.assertEqual(int(np.count_nonzero(grid.grid)), 2)
        self.assertEqual(grid.grid[0, 2], TetrominoType.O)
        self.assertEqual(grid.grid[0, 3], TetrominoType.O)


class ClearLinesTests(unittest.TestCase):
    def setUp(self):
        self.grid = GameGrid(10, 20)

    def test_nothing_to_clear(self):
        fill_row(self.grid, 19, skip=(0,))
        before = self.grid.clone_state()
        self.assertEqual(self.grid.clear_lines(), 0)
        np.testing.assert_array_equal(self.grid.grid, before)

    def test_two_adjacent_rows(self):
        fill_row(self.grid, 19)
        fill_row(self.grid, 18)
        self.grid.grid[17, 5] = 7
        self.assertEqual(self.grid.clear_lines(), 2)
        self.assertEqual(self.grid.grid.shape, (20, 10))
        self.assertEqual(self.grid.grid[19, 5], 7)
        self.assertEqual(int(np.count_nonzero(self.grid.grid)), 1)

    def test_rows_separated_by_partial_row(self):
        fill_row(self.grid, 19)
        fill_row(self.grid, 18, skip=(4,))
        fill_row(self.grid, 17)
        self.grid.grid[16, 0] = 6
        self.assertEqual(self.grid.clear_lines(), 2)
        self.assertEqual(self.grid.grid[19, 4], 0)
        self.assertEqual(int(np.count_nonzero(self.grid.grid[19])), 9)
        self.assertEqual(self.grid.grid[18, 0], 6)
        self.assertEqual(int(np.count_nonzero(self.grid.grid[:18])), 0)

    def test_four_rows(self):
        for row in range(16, 20):
            fill_row(self.grid, row)
        self.assertEqual(self.grid.clear_lines(), 4)
        self.assertFalse(self.grid.grid.any())


if __name__ == "__main__":
    unittest.main()
