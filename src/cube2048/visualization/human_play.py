from __future__ import annotations

import argparse
from typing import Dict, Optional

import pygame

from cube2048.game import AutoPlayer, Cube2048Game, Direction, GameConfig
from .renderer import Renderer


KEY_TO_DIRECTION: Dict[int, Direction] = {
    # X axis
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
    # Y axis
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    # Z axis
    pygame.K_PAGEUP: Direction.FORWARD,
    pygame.K_q: Direction.FORWARD,
    pygame.K_PAGEDOWN: Direction.BACK,
    pygame.K_e: Direction.BACK,
}

AUTOPLAY_INTERVAL_MS = 200


def _status_line(game: Cube2048Game, autoplay: bool) -> str:
    parts = [f"score {game.score}", f"max {game.max_tile()}"]
    if autoplay:
        parts.append("AUTO")
    if game.won:
        parts.append("2048!")
    if game.game_over:
        parts.append("GAME OVER - R to restart, ESC to quit")
    return "   ".join(parts)


def run(config: Optional[GameConfig] = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = Cube2048Game(config)
        autoplayer = AutoPlayer()
        renderer = Renderer(size=game.config.size)

        screen = pygame.display.set_mode(renderer.window_size())
        pygame.display.set_caption("2048 3D - Human Play")

        autoplay = False
        last_tick = pygame.time.get_ticks()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                        autoplayer.reset()
                        autoplay = False
                    elif event.key == pygame.K_SPACE:
                        autoplay = not autoplay and not game.game_over
                    else:
                        direction = KEY_TO_DIRECTION.get(event.key)
                        if direction is not None:
                            game.step(direction)

            now = pygame.time.get_ticks()
            if autoplay and now - last_tick >= AUTOPLAY_INTERVAL_MS:
                game.step(autoplayer.next_direction())
                last_tick = now
            if game.game_over:
                autoplay = False

            renderer.draw(screen, game.tiles, status=_status_line(game, autoplay))
            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play 2048 on a cube")
    p.add_argument("--size", type=int, default=4)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    run(GameConfig(size=args.size, random_seed=args.seed))


if __name__ == "__main__":  # pragma: no cover
    main()
