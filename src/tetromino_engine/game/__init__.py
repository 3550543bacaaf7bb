"""Game module for the tetromino engine.

Exports the core game engine and supporting classes:
- GameGrid: Board storage, placement validation and line clearing
- Piece: Immutable tetromino with clockwise rotation
- TetrominoType: Enum of available piece types
- ScoringRules: Points table, levelling and drop interval
- TetrisEngine: Run-state machine driven by ticks and intents
- GameDriver: Serialises ticks and intents into one update queue
"""

from .grid import GameGrid
from .pieces import TETROMINOES, Piece, TetrominoType, rotate_cw
from .rules import ScoringRules
from .core import ActivePiece, GameConfig, GameSnapshot, Intent, RunState, TetrisEngine
from .driver import GameDriver

__all__ = [
    "GameGrid",
    "Piece",
    "TetrominoType",
    "TETROMINOES",
    "rotate_cw",
    "ScoringRules",
    "ActivePiece",
    "GameConfig",
    "GameSnapshot",
    "Intent",
    "RunState",
    "TetrisEngine",
    "GameDriver",
]
