from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetromino_engine.game import GameConfig, Intent, ScoringRules, TetrisEngine, TetrominoType


ACTIONS: Tuple[Intent, ...] = (
    Intent.NONE,
    Intent.MOVE_LEFT,
    Intent.MOVE_RIGHT,
    Intent.ROTATE,
    Intent.SOFT_DROP,
)


class TetrisEnv(gym.Env):
    """Falling-block environment: one player intent followed by one gravity tick per step.

    Actions: 0 no-op, 1 left, 2 right, 3 rotate clockwise, 4 soft drop.
    Reward is the engine score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None, max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.engine = TetrisEngine(self.config, self.rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        n = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n, high=n, shape=(self.config.height, self.config.width), dtype=np.int8),
                "next_piece": spaces.Discrete(n + 1),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        nxt = self.engine.next_piece
        return {
            "board": self.engine.get_state().astype(np.int8),
            "next_piece": int(nxt.kind) if nxt is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.engine.score,
            "lines": self.engine.lines,
            "level": self.engine.level,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.engine.rng = random.Random(seed)
        self.engine.reset()
        self.engine.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"invalid action {action}")

        score_before = self.engine.score
        self.engine.dispatch(ACTIONS[action])
        self.engine.tick()
        self._steps += 1

        reward = float(self.engine.score - score_before)
        terminated = self.engine.game_over
        truncated = (not terminated) and self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        from tetromino_engine.visualization.palette import color_for_value

        board = self.engine.get_state()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]))
        return img

    def close(self) -> None:
        pass
