"""Gymnasium environments for the tetromino engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Tetromino-10x20-v0",
    entry_point="tetromino_engine.env.tetris_env:TetrisEnv",
)

__all__ = ["Tetromino-10x20-v0"]
