from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Optional

import numpy as np

from .grid import GameGrid
from .pieces import Piece, Shape, TetrominoType
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Intent(IntEnum):
    NONE = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    TICK = 5
    TOGGLE_PAUSE = 6
    START = 7
    RESET = 8


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_x: int = 3
    spawn_y: int = 0


@dataclass(frozen=True)
class ActivePiece:
    piece: Piece
    x: int
    y: int

    @property
    def shape(self) -> Shape:
        return self.piece.shape

    @property
    def color(self) -> int:
        return self.piece.color


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of everything the presentation layer may draw."""

    board: np.ndarray
    active: Optional[ActivePiece]
    next_piece: Optional[Piece]
    score: int
    level: int
    lines: int
    state: RunState
    drop_interval_ms: int

    @property
    def game_over(self) -> bool:
        return self.state is RunState.OVER


class TetrisEngine:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[Any] = None,
        on_interval_change: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        # Anything with a ``choice(seq)`` method; tests pass scripted sequences
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.on_interval_change = on_interval_change
        self.grid = GameGrid(self.config.width, self.config.height)
        self.state = RunState.IDLE
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval_ms = self.rules.interval_for_level(1)
        self.active: Optional[ActivePiece] = None
        self.next_piece: Optional[Piece] = None
        self.reset()

    # ---------- Intents ----------
    def start(self) -> bool:
        if self.state is not RunState.IDLE:
            return False
        self.state = RunState.RUNNING
        logger.debug("game started, interval %d ms", self.drop_interval_ms)
        self._spawn_piece()
        return True

    def toggle_pause(self) -> bool:
        if self.state is RunState.RUNNING:
            self.state = RunState.PAUSED
        elif self.state is RunState.PAUSED:
            self.state = RunState.RUNNING
        else:
            return False
        logger.debug("run state -> %s", self.state.value)
        return True

    def reset(self) -> None:
        self.grid.reset()
        self.score = 0
        self.lines = 0
        self.level = 1
        self.active = None
        self.state = RunState.IDLE
        self._set_interval(self.rules.interval_for_level(self.level))
        self.next_piece = self._random_piece()

    def move_left(self) -> bool:
        return self._move(-1, 0)

    def move_right(self) -> bool:
        return self._move(1, 0)

    def soft_drop(self) -> bool:
        return self._drop()

    def tick(self) -> bool:
        return self._drop()

    def rotate(self) -> bool:
        if self.state is not RunState.RUNNING or self.active is None:
            return False
        rotated = self.active.piece.rotated()
        if not self.is_valid_move(self.active.x, self.active.y, rotated.shape):
            return False
        self.active = ActivePiece(rotated, self.active.x, self.active.y)
        return True

    def dispatch(self, intent: Intent) -> bool:
        try:
            intent = Intent(intent)
        except ValueError:
            raise ValueError(f"unknown intent: {intent!r}") from None
        if intent == Intent.NONE:
            return False
        if intent == Intent.RESET:
            self.reset()
            return True
        handler = {
            Intent.MOVE_LEFT: self.move_left,
            Intent.MOVE_RIGHT: self.move_right,
            Intent.ROTATE: self.rotate,
            Intent.SOFT_DROP: self.soft_drop,
            Intent.TICK: self.tick,
            Intent.TOGGLE_PAUSE: self.toggle_pause,
            Intent.START: self.start,
        }[intent]
        return handler()

    # ---------- Queries ----------
    def is_valid_move(self, x: int, y: int, shape: Shape) -> bool:
        return self.grid.is_valid(shape, x, y)

    @property
    def is_running(self) -> bool:
        return self.state is RunState.RUNNING

    @property
    def game_over(self) -> bool:
        return self.state is RunState.OVER

    def snapshot(self) -> GameSnapshot:
        board = self.grid.clone_state()
        board.setflags(write=False)
        return GameSnapshot(
            board=board,
            active=self.active,
            next_piece=self.next_piece,
            score=self.score,
            level=self.level,
            lines=self.lines,
            state=self.state,
            drop_interval_ms=self.drop_interval_ms,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.active is not None:
            for x, y in self.active.piece.cells_at(self.active.x, self.active.y):
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    # Negative marks the falling piece
                    state[y, x] = -self.active.color
        return state

    # ---------- Internals ----------
    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece.of(TetrominoType(kind))

    def _move(self, dx: int, dy: int) -> bool:
        if self.state is not RunState.RUNNING or self.active is None:
            return False
        new_x = self.active.x + dx
        new_y = self.active.y + dy
        if not self.is_valid_move(new_x, new_y, self.active.shape):
            return False
        self.active = ActivePiece(self.active.piece, new_x, new_y)
        return True

    def _drop(self) -> bool:
        if self.state is not RunState.RUNNING or self.active is None:
            return False
        if not self._move(0, 1):
            self._lock_piece()
        return True

    def _lock_piece(self) -> None:
        assert self.active is not None
        piece = self.active
        self.grid.lock(piece.shape, piece.x, piece.y, piece.color)
        self.active = None
        cleared = self.grid.clear_lines()
        logger.debug("locked %s at (%d, %d), cleared %d", piece.piece.kind.name, piece.x, piece.y, cleared)
        if cleared > 0:
            self._update_score(cleared)
        self._spawn_piece()

    def _update_score(self, cleared: int) -> None:
        self.score += self.rules.score_for_lines(cleared, self.level)
        self.lines += cleared
        new_level = self.rules.level_for_lines(self.lines)
        if new_level > self.level:
            self.level = new_level
            logger.debug("level up -> %d", self.level)
            self._set_interval(self.rules.interval_for_level(self.level))

    def _spawn_piece(self) -> None:
        assert self.next_piece is not None
        piece = self.next_piece
        self.next_piece = self._random_piece()
        x, y = self.config.spawn_x, self.config.spawn_y
        # Immediate collision check: if overlaps, game over
        if not self.is_valid_move(x, y, piece.shape):
            self._end_game()
            return
        self.active = ActivePiece(piece, x, y)

    def _end_game(self) -> None:
        self.active = None
        self.state = RunState.OVER
        logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines)

    def _set_interval(self, interval_ms: int) -> None:
        changed = interval_ms != self.drop_interval_ms
        self.drop_interval_ms = interval_ms
        if changed and self.on_interval_change is not None:
            self.on_interval_change(interval_ms)
