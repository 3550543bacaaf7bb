from __future__ import annotations

from typing import Iterable, Sequence

from tetromino_engine.game import TetrominoType


class ScriptedRng:
    """Stands in for ``random.Random``: ``choice`` replays a fixed piece order."""

    def __init__(self, kinds: Iterable[TetrominoType], fallback: TetrominoType = TetrominoType.O) -> None:
        self._kinds = list(kinds)
        self._fallback = fallback

    def choice(self, seq: Sequence[TetrominoType]) -> TetrominoType:
        if self._kinds:
            return self._kinds.pop(0)
        return self._fallback
