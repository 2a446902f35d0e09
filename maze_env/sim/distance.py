"""Distance-to-exit field over a floorplan's wall graph.

Responsibilities:
- Breadth-first hop counts from a source cell through absent wallboards.
- Neighbour queries used by the solution overlay and the Wizard driver.
"""

from __future__ import annotations

import sys
from collections import deque
from typing import List, Optional, Tuple

import numpy as np

from ..errors import InvalidPositionError, MazeInvariantError
from ..types import CardinalDirection, Cell
from .floorplan import Floorplan

# Distance reported for neighbours outside the grid.
UNREACHABLE: int = sys.maxsize


def bfs_distances(floorplan: Floorplan, source: Cell) -> np.ndarray:
    """Hop counts from `source` to every cell, -1 where unreachable.

    Returns an int64 array indexed [y, x].
    """
    sx, sy = source
    if not floorplan.is_valid_position(sx, sy):
        raise InvalidPositionError(f"BFS source {source} outside grid")
    dists = np.full((floorplan.height, floorplan.width), -1, dtype=np.int64)
    dists[sy, sx] = 0
    q: deque[Cell] = deque()
    q.append((sx, sy))
    while q:
        x, y = q.popleft()
        d = dists[y, x] + 1
        for _, (nx, ny) in floorplan.open_neighbors(x, y):
            if dists[ny, nx] < 0:
                dists[ny, nx] = d
                q.append((nx, ny))
    return dists


class DistanceField:
    """Immutable per-cell distance to the exit.

    Args:
        values: int array [y, x] with 0 at the exit.
        floorplan: the floorplan the values refer to (wall lookups for
            `neighbor_closer_to_exit`).
        exit_cell: exit position; defaults to `floorplan.exit`.
    """

    def __init__(
        self,
        values: np.ndarray,
        floorplan: Floorplan,
        exit_cell: Optional[Cell] = None,
    ) -> None:
        arr = np.array(values, dtype=np.int64, copy=True)
        if arr.shape != (floorplan.height, floorplan.width):
            raise ValueError(
                f"Distance array shape {arr.shape} does not match "
                f"{floorplan.height}x{floorplan.width} floorplan"
            )
        arr.flags.writeable = False
        self._values = arr
        self._floorplan = floorplan
        self.exit = tuple(exit_cell) if exit_cell is not None else floorplan.exit
        self.width = floorplan.width
        self.height = floorplan.height

    @classmethod
    def compute(cls, floorplan: Floorplan) -> "DistanceField":
        """BFS from the floorplan's exit; every cell must be reachable."""
        if floorplan.exit is None:
            raise MazeInvariantError("Cannot compute distances without an exit")
        dists = bfs_distances(floorplan, floorplan.exit)
        unreached = int((dists < 0).sum())
        if unreached:
            raise MazeInvariantError(f"{unreached} cells are not connected to the exit")
        return cls(dists, floorplan)

    @property
    def values(self) -> np.ndarray:
        return self._values

    def get_distance_value(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidPositionError(f"Position ({x}, {y}) outside distance field")
        return int(self._values[y, x])

    @property
    def max_distance(self) -> int:
        return int(self._values.max())

    def farthest_cell(self) -> Cell:
        """Cell with the maximum distance, first in row-major order on ties."""
        flat = int(np.argmax(self._values))
        y, x = divmod(flat, self.width)
        return (x, y)

    def is_exit_position(self, x: int, y: int) -> bool:
        return self.exit is not None and (x, y) == tuple(self.exit)

    def neighbor_distances(self, x: int, y: int) -> Optional[List[int]]:
        """Raw distances of the N, E, S, W neighbours regardless of walls.

        Neighbours outside the grid read as UNREACHABLE. Returns None at the
        exit itself, where there is nothing left to choose.
        """
        self.get_distance_value(x, y)
        if self.is_exit_position(x, y):
            return None
        out = []
        for d in CardinalDirection:
            nx, ny = x + d.dx, y + d.dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                out.append(int(self._values[ny, nx]))
            else:
                out.append(UNREACHABLE)
        return out

    def neighbor_closer_to_exit(self, x: int, y: int) -> Optional[Cell]:
        """Open neighbour with the strictly smallest distance, ties N, E, S, W."""
        here = self.get_distance_value(x, y)
        if self.is_exit_position(x, y):
            return None
        best: Optional[Tuple[int, Cell]] = None
        for _, (nx, ny) in self._floorplan.open_neighbors(x, y):
            d = int(self._values[ny, nx])
            if d < here and (best is None or d < best[0]):
                best = (d, (nx, ny))
        return None if best is None else best[1]

    def solution_path(self, x: int, y: int) -> List[Cell]:
        """Cells from (x, y) to the exit following `neighbor_closer_to_exit`."""
        path = [(x, y)]
        nxt = self.neighbor_closer_to_exit(x, y)
        while nxt is not None:
            path.append(nxt)
            nxt = self.neighbor_closer_to_exit(*nxt)
        return path
