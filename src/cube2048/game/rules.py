from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable

from .tiles import Tile


def is_power_of_two(value: int) -> bool:
    return value >= 2 and value & (value - 1) == 0


@dataclass
class SpawnRules:
    low_value: int = 2
    high_value: int = 4
    high_probability: float = 0.1

    def sample_value(self, rng: random.Random) -> int:
        return self.high_value if rng.random() < self.high_probability else self.low_value


@dataclass
class WinRule:
    target: int = 2048

    def reached(self, tiles: Iterable[Tile]) -> bool:
        return any(tile.value >= self.target for tile in tiles)
