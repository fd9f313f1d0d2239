from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .engine import GridEngine
from .rules import SpawnRules, WinRule
from .tiles import Direction, Tile


logger = logging.getLogger(__name__)


# Up, Left, Forward, Down, Right, Back
AUTOPLAY_SEQUENCE: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.LEFT,
    Direction.FORWARD,
    Direction.DOWN,
    Direction.RIGHT,
    Direction.BACK,
)


@dataclass
class GameConfig:
    size: int = 4
    initial_tiles: int = 2
    random_seed: Optional[int] = None
    four_probability: float = 0.1
    win_value: int = 2048
    max_episode_steps: int = 10000


class Cube2048Game:
    """One game session: board, score and the move/spawn/terminal turn loop."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.engine = GridEngine(
            size=self.config.size,
            rng=random.Random(self.config.random_seed),
            spawn_rules=SpawnRules(high_probability=self.config.four_probability),
        )
        self.win_rule = WinRule(target=self.config.win_value)
        self.tiles: List[Tile] = []
        self.score = 0
        self.step_count = 0
        self.game_over = False
        self.won = False
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.engine.rng.seed(seed)
        self.tiles = []
        for _ in range(self.config.initial_tiles):
            self.tiles = self.engine.spawn(self.tiles)
        self.score = 0
        self.step_count = 0
        self.game_over = False
        self.won = False

    def load(self, tiles: Sequence[Tile]) -> None:
        """Replace the board, e.g. to resume from a known position."""
        self.tiles = list(tiles)
        self.game_over = self.engine.is_terminal(self.tiles)
        self.won = self.win_rule.reached(self.tiles)

    def step(self, direction: Direction) -> Tuple[List[Tile], int, bool, dict]:
        if self.game_over:
            return self.tiles, 0, True, self._info(moved=False)

        result = self.engine.move(self.tiles, direction)
        if not result.moved:
            logger.debug("move %s changed nothing", direction.name)
            return self.tiles, 0, False, self._info(moved=False)

        self.tiles = self.engine.spawn(result.tiles)
        self.score += result.score_delta
        self.step_count += 1
        logger.debug(
            "move %s: +%d (score %d, %d tiles)",
            direction.name, result.score_delta, self.score, len(self.tiles),
        )

        if not self.won and self.win_rule.reached(self.tiles):
            self.won = True
            logger.info("reached %d after %d moves", self.win_rule.target, self.step_count)

        self.game_over = self.engine.is_terminal(self.tiles)
        if self.game_over:
            logger.info("game over: score %d, max tile %d", self.score, self.max_tile())
        return self.tiles, result.score_delta, self.game_over, self._info(moved=True)

    def _info(self, moved: bool) -> dict:
        return {
            "score": self.score,
            "moved": moved,
            "won": self.won,
            "step_count": self.step_count,
            "max_tile": self.max_tile(),
        }

    def max_tile(self) -> int:
        return max((tile.value for tile in self.tiles), default=0)

    def valid_directions(self) -> List[Direction]:
        if self.game_over:
            return []
        return self.engine.valid_directions(self.tiles)

    def get_board(self) -> np.ndarray:
        return self.engine.to_array(self.tiles)

    def get_state(self) -> dict:
        return {
            "board": self.get_board(),
            "tiles": list(self.tiles),
            "score": self.score,
            "step_count": self.step_count,
            "game_over": self.game_over,
            "won": self.won,
        }

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "steps_taken": self.step_count,
            "max_tile": self.max_tile(),
            "tile_count": len(self.tiles),
            "fill_ratio": len(self.tiles) / float(self.engine.cell_count),
        }


class AutoPlayer:
    """Feeds a fixed cyclic sequence of directions into a game."""

    def __init__(self, sequence: Sequence[Direction] = AUTOPLAY_SEQUENCE) -> None:
        if not sequence:
            raise ValueError("auto-play sequence must not be empty")
        self.sequence = tuple(sequence)
        self.position = 0

    def reset(self) -> None:
        self.position = 0

    def next_direction(self) -> Direction:
        direction = self.sequence[self.position]
        self.position = (self.position + 1) % len(self.sequence)
        return direction

    def play(self, game: Cube2048Game, max_steps: int = 1000) -> int:
        """Tick until the game ends or ``max_steps`` ticks pass; returns ticks used."""
        ticks = 0
        while ticks < max_steps and not game.game_over:
            game.step(self.next_direction())
            ticks += 1
        return ticks
