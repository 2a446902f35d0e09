"""Wall-presence grid for rectangular mazes.

Design decisions:
- Storage: `walls[y, x, d]` is True when cell (x, y) has a wallboard on side d
  (d indexes CardinalDirection N, E, S, W). Both sides of an interior wall are
  kept in sync so lookups never need the neighbour.
- Borders: a boundary wallboard is always "part of the border", even the one
  removed to form the exit. `has_wall` reports the exit opening as absent.
- Build-then-freeze: builders mutate a fresh floorplan, the factory freezes it
  before delivery; frozen arrays are read-only and mutators raise.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from ..errors import InvalidPositionError, MazeConstructionError, MazeInvariantError
from ..types import CardinalDirection, Cell, Wallboard

Room = Tuple[int, int, int, int]  # x0, y0, x1, y1 inclusive


class Floorplan:
    """Rectangular grid of cells separated by wallboards.

    Args:
        width: number of cells along x.
        height: number of cells along y.
    """

    def __init__(self, width: int, height: int) -> None:
        if int(width) < 1 or int(height) < 1 or int(width) * int(height) < 2:
            raise MazeConstructionError(
                f"Floorplan needs at least 2 cells, got {width}x{height}"
            )
        self.width = int(width)
        self.height = int(height)
        self._walls = np.ones((self.height, self.width, 4), dtype=bool)
        self._rooms = np.zeros((self.height, self.width), dtype=bool)
        self._room_regions: List[Room] = []
        self.start: Optional[Cell] = None
        self.exit: Optional[Cell] = None
        self._exit_side: Optional[CardinalDirection] = None
        self._frozen = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.is_valid_position(x, y):
            raise InvalidPositionError(
                f"Position ({x}, {y}) outside {self.width}x{self.height} grid"
            )

    def has_wall(self, x: int, y: int, direction: CardinalDirection) -> bool:
        self._check(x, y)
        return bool(self._walls[y, x, direction.value])

    def has_wallboard(self, wallboard: Wallboard) -> bool:
        return self.has_wall(wallboard.x, wallboard.y, wallboard.direction)

    def has_no_wall(self, x: int, y: int, direction: CardinalDirection) -> bool:
        return not self.has_wall(x, y, direction)

    def is_part_of_border(self, wallboard: Wallboard) -> bool:
        """True for wallboards on the outer boundary of the grid."""
        if not self.is_valid_position(wallboard.x, wallboard.y):
            return False
        nx, ny = wallboard.neighbor
        return not self.is_valid_position(nx, ny)

    def is_in_room(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self._rooms[y, x])

    def is_exit_position(self, x: int, y: int) -> bool:
        return self.exit is not None and (x, y) == tuple(self.exit)

    @property
    def exit_side(self) -> Optional[CardinalDirection]:
        return self._exit_side

    @property
    def room_regions(self) -> List[Room]:
        return list(self._room_regions)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def wall_array(self) -> np.ndarray:
        """Read-only view of the (H, W, 4) wall array."""
        view = self._walls.view()
        view.flags.writeable = False
        return view

    def room_mask(self) -> np.ndarray:
        view = self._rooms.view()
        view.flags.writeable = False
        return view

    def open_neighbors(self, x: int, y: int) -> Iterator[Tuple[CardinalDirection, Cell]]:
        """Yield (direction, cell) for in-grid neighbours not separated by a wall."""
        for d in CardinalDirection:
            if self._walls[y, x, d.value]:
                continue
            nx, ny = x + d.dx, y + d.dy
            if self.is_valid_position(nx, ny):
                yield d, (nx, ny)

    def interior_wallboards(self, present: bool = True) -> List[Wallboard]:
        """Interior wallboards (East/South side of each cell only, no duplicates)."""
        result = []
        for y in range(self.height):
            for x in range(self.width):
                for d in (CardinalDirection.EAST, CardinalDirection.SOUTH):
                    nx, ny = x + d.dx, y + d.dy
                    if not self.is_valid_position(nx, ny):
                        continue
                    if bool(self._walls[y, x, d.value]) == present:
                        result.append(Wallboard(x, y, d))
        return result

    def count_open_interior(self) -> int:
        # East sides of all but the last column plus South sides of all but the last row
        open_e = int((~self._walls[:, :-1, CardinalDirection.EAST.value]).sum())
        open_s = int((~self._walls[:-1, :, CardinalDirection.SOUTH.value]).sum())
        return open_e + open_s

    def border_openings(self) -> List[Wallboard]:
        """Boundary wallboards that are currently absent."""
        openings = []
        for y in range(self.height):
            for x in range(self.width):
                for d in CardinalDirection:
                    wb = Wallboard(x, y, d)
                    if self.is_part_of_border(wb) and not self._walls[y, x, d.value]:
                        openings.append(wb)
        return openings

    # ------------------------------------------------------------------
    # Mutation (builders only)
    # ------------------------------------------------------------------

    def _writable(self) -> None:
        if self._frozen:
            raise RuntimeError("Floorplan is frozen")

    def remove_wallboard(self, wallboard: Wallboard) -> bool:
        """Remove an interior wallboard on both sides. Returns False if already absent."""
        self._writable()
        x, y, d = wallboard.x, wallboard.y, wallboard.direction
        self._check(x, y)
        if self.is_part_of_border(wallboard):
            raise MazeInvariantError(f"Refusing to remove border wallboard {wallboard}")
        if not self._walls[y, x, d.value]:
            return False
        nx, ny = wallboard.neighbor
        self._walls[y, x, d.value] = False
        self._walls[ny, nx, d.opposite().value] = False
        return True

    def set_exit(self, x: int, y: int, direction: CardinalDirection) -> None:
        """Open the boundary wallboard of (x, y) on `direction` as the single exit."""
        self._writable()
        self._check(x, y)
        wb = Wallboard(x, y, direction)
        if not self.is_part_of_border(wb):
            raise MazeInvariantError(f"Exit wallboard {wb} is not on the border")
        if self.exit is not None:
            raise MazeInvariantError(f"Exit already placed at {self.exit}")
        self._walls[y, x, direction.value] = False
        self.exit = (x, y)
        self._exit_side = direction

    def set_start(self, x: int, y: int) -> None:
        self._writable()
        self._check(x, y)
        self.start = (x, y)

    def mark_room(self, x0: int, y0: int, x1: int, y1: int) -> None:
        """Carve a rectangular room: drop its internal walls and flag its cells."""
        self._writable()
        x0, x1 = sorted((int(x0), int(x1)))
        y0, y1 = sorted((int(y0), int(y1)))
        self._check(x0, y0)
        self._check(x1, y1)
        for y in range(y0, y1 + 1):
            for x in range(x0, x1 + 1):
                self._rooms[y, x] = True
                if x < x1:
                    self.remove_wallboard(Wallboard(x, y, CardinalDirection.EAST))
                if y < y1:
                    self.remove_wallboard(Wallboard(x, y, CardinalDirection.SOUTH))
        self._room_regions.append((x0, y0, x1, y1))

    def freeze(self) -> "Floorplan":
        self._walls.flags.writeable = False
        self._rooms.flags.writeable = False
        self._frozen = True
        return self

    def copy(self) -> "Floorplan":
        """Unfrozen deep copy."""
        other = Floorplan(self.width, self.height)
        other._walls = self._walls.copy()
        other._rooms = self._rooms.copy()
        other._room_regions = list(self._room_regions)
        other.start = self.start
        other.exit = self.exit
        other._exit_side = self._exit_side
        return other

    # ------------------------------------------------------------------
    # Serializable shape
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, object]:
        walls = []
        for y in range(self.height):
            for x in range(self.width):
                for d in CardinalDirection:
                    if self._walls[y, x, d.value]:
                        walls.append([x, y, d.name])
        return {
            "width": self.width,
            "height": self.height,
            "start": list(self.start) if self.start is not None else None,
            "exit": list(self.exit) if self.exit is not None else None,
            "exit_side": self._exit_side.name if self._exit_side is not None else None,
            "rooms": [list(r) for r in self._room_regions],
            "walls": walls,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, object]) -> "Floorplan":
        fp = cls(int(d["width"]), int(d["height"]))
        fp._walls[:] = False
        for x, y, name in d.get("walls", []):
            fp._walls[int(y), int(x), CardinalDirection[name].value] = True
        for r in d.get("rooms", []):
            x0, y0, x1, y1 = (int(v) for v in r)
            fp._rooms[y0 : y1 + 1, x0 : x1 + 1] = True
            fp._room_regions.append((x0, y0, x1, y1))
        if d.get("start") is not None:
            fp.start = tuple(int(v) for v in d["start"])
        if d.get("exit") is not None:
            fp.exit = tuple(int(v) for v in d["exit"])
            side = d.get("exit_side")
            if side is not None:
                fp._exit_side = CardinalDirection[side]
        return fp

    def __repr__(self) -> str:
        return (
            f"Floorplan({self.width}x{self.height}, start={self.start}, "
            f"exit={self.exit}, rooms={len(self._room_regions)})"
        )
