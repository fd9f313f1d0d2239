"""Game module for the 3D sliding-tile merge puzzle.

Exports the rules engine and supporting classes:
- Tile, Direction, Axis, Sign: the data model
- Lattice: dense N x N x N view used while resolving a move
- GridEngine: spawn / move / terminal detection
- SpawnRules, WinRule: tile distribution and the 2048 target
- Cube2048Game, AutoPlayer: a playable session and the demo direction cycle
"""

from .tiles import Axis, Direction, DIRECTIONS, Position, Sign, Tile
from .grid import Lattice
from .rules import SpawnRules, WinRule, is_power_of_two
from .engine import GridEngine, MoveResult
from .core import AUTOPLAY_SEQUENCE, AutoPlayer, Cube2048Game, GameConfig

__all__ = [
    "Axis",
    "Direction",
    "DIRECTIONS",
    "Position",
    "Sign",
    "Tile",
    "Lattice",
    "SpawnRules",
    "WinRule",
    "is_power_of_two",
    "GridEngine",
    "MoveResult",
    "AUTOPLAY_SEQUENCE",
    "AutoPlayer",
    "Cube2048Game",
    "GameConfig",
]
