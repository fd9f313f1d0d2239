from __future__ import annotations

from typing import Iterable, Iterator, List

import numpy as np

from .tiles import Direction, Position, Sign, Tile


class Lattice:
    """Dense N x N x N lookup of tiles, indexed ``[x, y, z]``.

    Empty cells hold ``None``. The lattice is rebuilt from a tile list for
    every engine call and flattened back afterwards; it is never the
    long-lived game state.
    """

    def __init__(self, size: int) -> None:
        self.size = int(size)
        self.cells = np.empty((self.size, self.size, self.size), dtype=object)

    @classmethod
    def from_tiles(cls, size: int, tiles: Iterable[Tile]) -> "Lattice":
        lattice = cls(size)
        for tile in tiles:
            lattice.cells[tile.position] = tile
        return lattice

    def tiles(self) -> List[Tile]:
        # C order walks x, then y, then z
        return [tile for tile in self.cells.flat if tile is not None]

    def empty_positions(self) -> List[Position]:
        empty: List[Position] = []
        for x, y, z in np.ndindex(self.cells.shape):
            if self.cells[x, y, z] is None:
                empty.append((int(x), int(y), int(z)))
        return empty

    def lines(self, direction: Direction) -> Iterator[np.ndarray]:
        """Yield every line along ``direction``'s axis as a writable 1D view.

        Index 0 of each view is the wall the tiles slide towards, so reading
        a view front to back visits cells from the far wall (in the
        direction of travel) back to the near wall.
        """
        view = np.moveaxis(self.cells, int(direction.axis), -1)
        if direction.sign == Sign.POS:
            view = view[..., ::-1]
        for i, j in np.ndindex(view.shape[:2]):
            yield view[i, j]

    def slot_position(self, position: Position, direction: Direction, slot: int) -> Position:
        """Position of line slot ``slot`` on the line through ``position``."""
        coord = slot if direction.sign == Sign.NEG else self.size - 1 - slot
        moved = list(position)
        moved[direction.axis] = coord
        return moved[0], moved[1], moved[2]

    def values(self) -> np.ndarray:
        board = np.zeros(self.cells.shape, dtype=np.int64)
        for tile in self.tiles():
            board[tile.position] = tile.value
        return board

    def exponents(self) -> np.ndarray:
        """log2 of every tile value, 0 for empty cells."""
        board = np.zeros(self.cells.shape, dtype=np.int16)
        for tile in self.tiles():
            board[tile.position] = tile.value.bit_length() - 1
        return board

    def has_adjacent_pair(self) -> bool:
        """True if two face-adjacent occupied cells hold the same value."""
        board = self.values()
        for axis in range(board.ndim):
            cells = np.moveaxis(board, axis, 0)
            same = (cells[1:] == cells[:-1]) & (cells[1:] != 0)
            if np.any(same):
                return True
        return False
