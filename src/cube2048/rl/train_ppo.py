from __future__ import annotations

import argparse
import logging
import os

import gymnasium as gym

# Ensure envs are registered
import cube2048.env  # noqa: F401
from cube2048.env.wrappers import ResampleInvalidActionWrapper


def make_env(env_id: str = "Cube2048-4x4x4-v0", seed: int | None = None, resample: bool = True) -> gym.Env:
    env = gym.make(env_id)
    # Vanilla PPO cannot mask, so swap no-op directions for valid ones
    if resample:
        env = ResampleInvalidActionWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["ppo", "maskable"], default="ppo")
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_cube2048.zip")
    p.add_argument("--n_envs", type=int, default=4)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--verbose", action="store_true")
    return p


def main() -> None:
    args = build_parser().parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s %(message)s")

    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    if args.algo == "maskable":
        # sb3-contrib MaskablePPO
        from sb3_contrib import MaskablePPO as Algo
        from sb3_contrib.common.wrappers import ActionMasker

        def mask_fn(env):
            return env.unwrapped.get_action_mask()

        def make_env_idx(i: int):
            def thunk():
                seed = None if args.seed is None else args.seed + i
                return ActionMasker(make_env(seed=seed, resample=False), mask_fn)
            return thunk
    else:
        from stable_baselines3 import PPO as Algo

        def make_env_idx(i: int):
            def thunk():
                seed = None if args.seed is None else args.seed + i
                return make_env(seed=seed)
            return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = Algo(
        policy="MlpPolicy",
        env=vec_env,
        verbose=1,
        tensorboard_log=args.logdir,
    )

    os.makedirs(os.path.dirname(args.save_path), exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)
    print(f"Saved model to {args.save_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
