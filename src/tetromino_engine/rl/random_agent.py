from __future__ import annotations

import gymnasium as gym

import tetromino_engine.env  # noqa: F401


def run_random(steps: int = 500, seed: int | None = None) -> dict:
    env = gym.make("Tetromino-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    best_score = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        best_score = max(best_score, int(info["score"]))
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    return {"total_reward": total_reward, "episodes": episodes, "best_score": best_score}


if __name__ == "__main__":  # pragma: no cover
    stats = run_random()
    print(f"Random agent total reward: {stats['total_reward']:.2f} "
          f"over {stats['episodes']} finished episodes, best score {stats['best_score']}")
