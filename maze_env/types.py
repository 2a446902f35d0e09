from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Cell = Tuple[int, int]


class CardinalDirection(Enum):
    """Absolute directions. Grid y grows southwards, so North is (0, -1).

    The enum order (N, E, S, W) is the clockwise order and also the fixed
    tie-break order used by the distance field and the Wizard.
    """

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def dx(self) -> int:
        return _DELTAS[self.value][0]

    @property
    def dy(self) -> int:
        return _DELTAS[self.value][1]

    def opposite(self) -> "CardinalDirection":
        return CardinalDirection((self.value + 2) % 4)

    def rotate_clockwise(self) -> "CardinalDirection":
        return CardinalDirection((self.value + 1) % 4)

    def rotate_counterclockwise(self) -> "CardinalDirection":
        return CardinalDirection((self.value + 3) % 4)

    def quarter_turns_to(self, other: "CardinalDirection") -> int:
        """Clockwise quarter turns (0..3) needed to face `other`."""
        return (other.value - self.value) % 4


_DELTAS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class Turn(Enum):
    LEFT = "left"
    RIGHT = "right"
    AROUND = "around"

    @property
    def quarter_turns(self) -> int:
        """Clockwise quarter turns performed by this turn."""
        return {Turn.RIGHT: 1, Turn.AROUND: 2, Turn.LEFT: 3}[self]

    @staticmethod
    def for_quarter_turns(k: int) -> "Turn | None":
        """Turn for `k` clockwise quarter turns, None for k == 0 (mod 4)."""
        return {0: None, 1: Turn.RIGHT, 2: Turn.AROUND, 3: Turn.LEFT}[k % 4]


class Direction(Enum):
    """Directions relative to the robot's forward heading."""

    FORWARD = 0
    RIGHT = 1
    BACKWARD = 2
    LEFT = 3

    def to_cardinal(self, heading: CardinalDirection) -> CardinalDirection:
        return CardinalDirection((heading.value + self.value) % 4)


class Builder(Enum):
    """Maze generation algorithms supported by the factory."""

    DFS = "dfs"
    PRIM = "prim"
    ELLER = "eller"

    @classmethod
    def parse(cls, name: "str | Builder") -> "Builder":
        if isinstance(name, Builder):
            return name
        key = str(name).strip().lower()
        for b in cls:
            if b.value == key:
                return b
        raise ValueError(f"Unknown builder '{name}', expected one of {[b.value for b in cls]}")


@dataclass(frozen=True)
class Wallboard:
    """Wall segment on side `direction` of cell (x, y)."""

    x: int
    y: int
    direction: CardinalDirection

    @property
    def neighbor(self) -> Cell:
        return (self.x + self.direction.dx, self.y + self.direction.dy)

    def mirror(self) -> "Wallboard":
        """Same wall segment seen from the neighbouring cell."""
        nx, ny = self.neighbor
        return Wallboard(nx, ny, self.direction.opposite())
