from __future__ import annotations

import argparse
import random

import gymnasium as gym

import block_grid.env  # ensure registration


def run_random(steps: int = 200, seed: int | None = None) -> float:
    rng = random.Random(seed)
    env = gym.make("BlockGrid-15x11-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = info.get("valid_actions", [])
        if valid:
            action = rng.choice(valid)
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated:
            print(f"Game over, final score {info.get('final_score', 0)}")
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    return total_reward


def main() -> None:
    parser = argparse.ArgumentParser(description="Play block-grid with a random agent")
    parser.add_argument("--steps", type=int, default=200)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()
    total = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
