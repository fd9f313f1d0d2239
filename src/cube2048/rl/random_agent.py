from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

import gymnasium as gym

import cube2048.env  # noqa: F401


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    rng = random.Random(seed)
    env = gym.make("Cube2048-4x4x4-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer directions that change the board
        valid = [i for i, ok in enumerate(info["action_mask"]) if ok]
        if valid:
            action = rng.choice(valid)
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            print(f"episode {episodes}: score {info['score']}  max tile {info['max_tile']}")
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--verbose", action="store_true")
    return p


def main() -> None:
    args = build_parser().parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")
    run_random(steps=args.steps, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
