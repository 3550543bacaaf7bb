from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List

from .core import Intent, TetrisEngine

logger = logging.getLogger(__name__)


class GameDriver:
    """Single-consumer event loop in front of a `TetrisEngine`.

    Player intents and gravity ticks share one FIFO and are applied in order
    by whoever calls `advance`, so the engine never sees two updates at once.
    `post` only appends to the queue and may be called from an input thread.

    The drop interval is re-read from the engine every time a tick is
    scheduled: after a level-up the new interval applies from the next tick
    onwards and never pre-empts a tick that is already queued.
    """

    def __init__(self, engine: TetrisEngine) -> None:
        self.engine = engine
        self.elapsed_ms = 0
        self._queue: Deque[Intent] = deque()

    def post(self, intent: Intent) -> None:
        self._queue.append(Intent(intent))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self, elapsed_ms: int) -> List[Intent]:
        """Drain posted intents, then account for `elapsed_ms` of wall time.

        Gravity ticks are scheduled only after the posted intents have been
        applied, so a start, reset or pause toggle in the same batch restarts
        the interval before any tick can come due.
        Returns the intents that were applied, ticks included.
        """
        applied = self._drain()
        if not self.engine.is_running:
            self.elapsed_ms = 0
            return applied

        self.elapsed_ms += max(0, int(elapsed_ms))
        while self.engine.is_running and self.elapsed_ms >= self.engine.drop_interval_ms:
            self.elapsed_ms -= self.engine.drop_interval_ms
            self._queue.append(Intent.TICK)
            applied.extend(self._drain())
        if not self.engine.is_running:
            self.elapsed_ms = 0
        return applied

    def _drain(self) -> List[Intent]:
        applied: List[Intent] = []
        while self._queue:
            intent = self._queue.popleft()
            if intent == Intent.TICK and not self.engine.is_running:
                # Ticks stop on pause and game over
                logger.debug("dropping queued tick, engine is %s", self.engine.state.value)
                continue
            self.engine.dispatch(intent)
            applied.append(intent)
            if intent in (Intent.START, Intent.RESET, Intent.TOGGLE_PAUSE):
                self.elapsed_ms = 0
        return applied
