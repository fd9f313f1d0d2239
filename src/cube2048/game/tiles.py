from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Sequence, Tuple


Position = Tuple[int, int, int]


class Axis(IntEnum):
    X = 0
    Y = 1
    Z = 2


class Sign(IntEnum):
    NEG = -1
    POS = 1


class Direction(Enum):
    """The six legal move directions, one per (axis, sign) pair."""

    RIGHT = (Axis.X, Sign.POS)
    LEFT = (Axis.X, Sign.NEG)
    UP = (Axis.Y, Sign.POS)
    DOWN = (Axis.Y, Sign.NEG)
    BACK = (Axis.Z, Sign.POS)  # +z, out of the screen
    FORWARD = (Axis.Z, Sign.NEG)  # -z, into the screen

    @property
    def axis(self) -> Axis:
        return self.value[0]

    @property
    def sign(self) -> Sign:
        return self.value[1]

    @property
    def index(self) -> int:
        return DIRECTIONS.index(self)

    @property
    def vector(self) -> Position:
        vec = [0, 0, 0]
        vec[self.axis] = int(self.sign)
        return vec[0], vec[1], vec[2]

    @classmethod
    def from_index(cls, index: int) -> "Direction":
        if not 0 <= index < len(DIRECTIONS):
            raise IndexError(f"direction index out of range: {index}")
        return DIRECTIONS[index]

    @classmethod
    def from_vector(cls, vector: Sequence[int]) -> "Direction":
        """Map a unit 3-vector such as ``(0, -1, 0)`` to its direction."""
        key = tuple(int(c) for c in vector)
        for direction in cls:
            if direction.vector == key:
                return direction
        raise ValueError(f"not a unit axis vector: {tuple(vector)!r}")


DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)


@dataclass(frozen=True)
class Tile:
    """A value-bearing unit occupying one lattice cell.

    ``is_new`` and ``is_merged`` are presentation hints describing the most
    recent engine call. They are reset on every move and carry no invariant.
    """

    id: int
    value: int
    position: Position
    is_new: bool = False
    is_merged: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", tuple(int(c) for c in self.position))

    def cleared(self) -> "Tile":
        if not (self.is_new or self.is_merged):
            return self
        return replace(self, is_new=False, is_merged=False)

    def moved_to(self, position: Position) -> "Tile":
        return replace(self, position=position)

    def doubled(self) -> "Tile":
        return replace(self, value=self.value * 2, is_merged=True)
