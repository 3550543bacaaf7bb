import unittest

import gymnasium as gym
import numpy as np

import tetromino_engine.env  # noqa: F401
from helpers import ScriptedRng
from tetromino_engine.env.tetris_env import TetrisEnv
from tetromino_engine.game import RunState, TetrominoType

I = TetrominoType.I


def scripted_env(**kwargs):
    env = TetrisEnv(**kwargs)
    env.engine.rng = ScriptedRng([], fallback=I)
    env.reset()
    return env


class TetrisEnvTests(unittest.TestCase):
    def test_registered_env_round_trip(self):
        env = gym.make("Tetromino-10x20-v0")
        obs, info = env.reset(seed=0)
        self.assertEqual(obs["board"].shape, (20, 10))
        self.assertIn(obs["next_piece"], range(1, 8))
        self.assertTrue(env.observation_space.contains(obs))
        obs, reward, terminated, truncated, info = env.step(0)
        self.assertEqual(reward, 0.0)
        self.assertFalse(terminated)
        self.assertEqual(info["score"], 0)
        env.close()

    def test_seed_makes_episodes_repeatable(self):
        a, b = TetrisEnv(), TetrisEnv()
        obs_a, _ = a.reset(seed=3)
        obs_b, _ = b.reset(seed=3)
        np.testing.assert_array_equal(obs_a["board"], obs_b["board"])
        self.assertEqual(obs_a["next_piece"], obs_b["next_piece"])

    def test_step_applies_action_then_gravity(self):
        env = scripted_env()
        env.step(1)
        active = env.engine.active
        self.assertEqual((active.x, active.y), (2, 1))
        self.assertTrue((env._get_obs()["board"] < 0).any())

    def test_reward_is_score_gain(self):
        env = scripted_env()
        for col in (0, 1, 2, 7, 8, 9):
            env.engine.grid.grid[19, col] = 3
        total = 0.0
        for _ in range(25):
            _, reward, terminated, _, info = env.step(0)
            total += reward
            if info["lines"]:
                break
        self.assertEqual(total, 100.0)
        self.assertEqual(info["lines"], 1)
        self.assertFalse(terminated)

    def test_terminates_on_game_over(self):
        env = scripted_env()
        env.engine.grid.grid[1, 0:9] = 3
        _, _, terminated, truncated, _ = env.step(0)
        self.assertTrue(terminated)
        self.assertFalse(truncated)
        self.assertIs(env.engine.state, RunState.OVER)
        self.assertTrue(env.engine.game_over)

    def test_truncates_after_step_limit(self):
        env = scripted_env(max_episode_steps=2)
        env.step(0)
        _, _, terminated, truncated, _ = env.step(0)
        self.assertFalse(terminated)
        self.assertTrue(truncated)

    def test_rejects_unknown_action(self):
        env = scripted_env()
        with self.assertRaises(ValueError):
            env.step(9)

    def test_rgb_render(self):
        env = scripted_env(render_mode="rgb_array")
        img = env.render()
        self.assertEqual(img.shape, (240, 120, 3))
        self.assertEqual(img.dtype, np.uint8)


class RandomAgentTests(unittest.TestCase):
    def test_random_agent_reports_stats(self):
        from tetromino_engine.rl.random_agent import run_random

        stats = run_random(steps=200, seed=1)
        self.assertEqual(set(stats), {"total_reward", "episodes", "best_score"})
        self.assertGreaterEqual(stats["total_reward"], 0.0)


if __name__ == "__main__":
    unittest.main()
