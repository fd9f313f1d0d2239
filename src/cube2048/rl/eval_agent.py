from __future__ import annotations

import argparse

import pygame

from cube2048.env.cube_env import Cube2048Env
from cube2048.visualization.renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["ppo", "maskable"], default="ppo")
    p.add_argument("--model", type=str, required=True)
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--fps", type=int, default=10)
    return p


def main() -> None:
    args = build_parser().parse_args()
    if args.algo == "maskable":
        from sb3_contrib import MaskablePPO as Algo
    else:
        from stable_baselines3 import PPO as Algo

    env = Cube2048Env()
    model = Algo.load(args.model, device="auto")
    renderer = Renderer(size=env.game.config.size)

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size())
        pygame.display.set_caption("2048 3D - Agent Eval")
        clock = pygame.time.Clock()

        obs, info = env.reset()
        total_reward = 0.0
        steps = 0
        while steps < args.steps:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    return

            if args.algo == "maskable":
                action, _ = model.predict(obs, deterministic=True, action_masks=env.get_action_mask())
            else:
                action, _ = model.predict(obs, deterministic=True)

            obs, reward, terminated, truncated, info = env.step(int(action))
            total_reward += float(reward)
            steps += 1
            status = f"step {steps}/{args.steps}  reward {total_reward:.1f}  score {info['score']}"
            renderer.draw(screen, env.game.tiles, status=status)
            if terminated or truncated:
                obs, info = env.reset()
            clock.tick(args.fps)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    main()
