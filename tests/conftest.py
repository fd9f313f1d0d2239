"""
Pytest fixtures for cube2048 tests.
"""

import random

import pytest

from cube2048.game import Cube2048Game, GameConfig, GridEngine


@pytest.fixture
def engine() -> GridEngine:
    """A 4x4x4 engine with a fixed random source."""
    return GridEngine(size=4, rng=random.Random(1234))


@pytest.fixture
def game() -> Cube2048Game:
    """A seeded 4x4x4 game session."""
    return Cube2048Game(GameConfig(random_seed=7))
