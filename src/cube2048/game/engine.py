from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .grid import Lattice
from .rules import SpawnRules
from .tiles import DIRECTIONS, Direction, Position, Tile


@dataclass
class MoveResult:
    tiles: List[Tile]
    score_delta: int
    moved: bool


class GridEngine:
    """Rules of the cubic sliding-tile merge puzzle.

    The engine holds no board. ``spawn``, ``move`` and ``is_terminal`` take
    the caller's tile list and return new data; the caller owns storage
    between calls. The engine only owns its random source and the counter
    that hands out tile ids.
    """

    def __init__(
        self,
        size: int = 4,
        rng: Optional[random.Random] = None,
        spawn_rules: Optional[SpawnRules] = None,
    ) -> None:
        if size < 2:
            raise ValueError(f"lattice size must be at least 2, got {size}")
        self.size = int(size)
        self.rng = rng or random.Random()
        self.spawn_rules = spawn_rules or SpawnRules()
        self._ids = itertools.count(1)

    @property
    def cell_count(self) -> int:
        return self.size ** 3

    def lattice(self, tiles: Sequence[Tile]) -> Lattice:
        return Lattice.from_tiles(self.size, tiles)

    def new_tile(self, value: int, position: Position, is_new: bool = False) -> Tile:
        return Tile(id=next(self._ids), value=value, position=position, is_new=is_new)

    def empty_cells(self, tiles: Sequence[Tile]) -> List[Position]:
        return self.lattice(tiles).empty_positions()

    def spawn(self, tiles: Sequence[Tile]) -> List[Tile]:
        """Place a 2 (or, rarely, a 4) on a uniformly chosen empty cell.

        A full board is returned as is.
        """
        empty = self.empty_cells(tiles)
        if not empty:
            return list(tiles)
        position = empty[self.rng.randrange(len(empty))]
        value = self.spawn_rules.sample_value(self.rng)
        return [*tiles, self.new_tile(value, position, is_new=True)]

    def move(self, tiles: Sequence[Tile], direction: Direction) -> MoveResult:
        """Slide every tile towards ``direction``'s wall, merging equal pairs.

        Each tile merges at most once: a line holding ``2 2 2`` becomes
        ``4 2`` and ``2 2 2 2`` becomes ``4 4``. The input tiles are left
        untouched. A merge counts as ``moved`` even when the surviving tile
        already sits at the wall, since the absorbed tile changes position.
        """
        lattice = self.lattice([tile.cleared() for tile in tiles])
        score_delta = 0
        moved = False
        for line in lattice.lines(direction):
            gained, changed = self._resolve_line(lattice, line, direction)
            score_delta += gained
            moved = moved or changed
        return MoveResult(tiles=lattice.tiles(), score_delta=score_delta, moved=moved)

    def _resolve_line(self, lattice: Lattice, line: np.ndarray, direction: Direction) -> Tuple[int, bool]:
        # line[0] is the wall the tiles travel towards
        occupied: List[Tile] = [tile for tile in line if tile is not None]
        if not occupied:
            return 0, False

        packed: List[Tile] = []
        gained = 0
        i = 0
        while i < len(occupied):
            tile = occupied[i]
            if i + 1 < len(occupied) and occupied[i + 1].value == tile.value:
                merged = tile.doubled()
                gained += merged.value
                packed.append(merged)
                i += 2
            else:
                packed.append(tile)
                i += 1

        changed = len(packed) < len(occupied)
        line[:] = None
        for slot, tile in enumerate(packed):
            position = lattice.slot_position(tile.position, direction, slot)
            if position != tile.position:
                changed = True
                tile = tile.moved_to(position)
            line[slot] = tile
        return gained, changed

    def can_move(self, tiles: Sequence[Tile], direction: Direction) -> bool:
        return self.move(tiles, direction).moved

    def valid_directions(self, tiles: Sequence[Tile]) -> List[Direction]:
        return [d for d in DIRECTIONS if self.can_move(tiles, d)]

    def is_terminal(self, tiles: Sequence[Tile]) -> bool:
        """True when the board is full and no face-adjacent pair matches."""
        if len(tiles) < self.cell_count:
            return False
        return not self.lattice(tiles).has_adjacent_pair()

    def to_array(self, tiles: Sequence[Tile]) -> np.ndarray:
        return self.lattice(tiles).values()
