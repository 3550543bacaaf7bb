from __future__ import annotations

import numpy as np
import pygame

from tetromino_engine.game import GameSnapshot, RunState
from .palette import color_for_value


PREVIEW_CELLS = 4


class Renderer:
    """Draws a `GameSnapshot`; never touches engine state."""

    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font = None
        self._big_font = None

    def window_size(self, rows: int, cols: int) -> tuple[int, int]:
        panel_w = (PREVIEW_CELLS + 2) * self.cell_size
        return (
            cols * self.cell_size + panel_w + self.margin * 3,
            rows * self.cell_size + self.margin * 2,
        )

    def _fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
            self._big_font = pygame.font.SysFont(None, 40)
        return self._font, self._big_font

    def _draw_cells(self, surf: pygame.Surface, cells: np.ndarray, ox: int, oy: int) -> None:
        h, w = cells.shape
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    ox + x * self.cell_size,
                    oy + y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(int(cells[y, x])), rect)

    def _board_with_piece(self, snap: GameSnapshot) -> np.ndarray:
        board = np.array(snap.board, copy=True)
        if snap.active is not None:
            rows, cols = board.shape
            for x, y in snap.active.piece.cells_at(snap.active.x, snap.active.y):
                if 0 <= y < rows and 0 <= x < cols:
                    board[y, x] = snap.active.color
        return board

    def _preview(self, snap: GameSnapshot) -> np.ndarray:
        cells = np.zeros((PREVIEW_CELLS, PREVIEW_CELLS), dtype=np.int8)
        if snap.next_piece is not None:
            shape = snap.next_piece.shape
            h, w = shape.shape
            cells[:h, :w] = shape * snap.next_piece.color
        return cells

    def draw(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        font, big_font = self._fonts()
        rows, cols = snap.board.shape
        screen.fill((10, 10, 14))
        self._draw_cells(screen, self._board_with_piece(snap), self.margin, self.margin)

        panel_x = self.margin * 2 + cols * self.cell_size
        screen.blit(font.render("Next", True, (230, 230, 230)), (panel_x, self.margin))
        self._draw_cells(screen, self._preview(snap), panel_x, self.margin + 30)

        text_y = self.margin + 40 + PREVIEW_CELLS * self.cell_size
        for label, value in (("Score", snap.score), ("Level", snap.level), ("Lines", snap.lines)):
            screen.blit(font.render(f"{label}: {value}", True, (230, 230, 230)), (panel_x, text_y))
            text_y += 32

        message = {
            RunState.IDLE: "Press Enter to start",
            RunState.PAUSED: "Paused",
            RunState.OVER: f"Game Over - score {snap.score}, level {snap.level}",
        }.get(snap.state)
        if message:
            text = big_font.render(message, True, (255, 255, 255))
            rect = text.get_rect(center=(self.margin + cols * self.cell_size // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
