"""Occupancy-grid view of a floorplan and connectivity checks on it.

Grid convention: a W x H floorplan maps to a (2H+1, 2W+1) bool grid with
True=occupied. Cell (x, y) sits at [2y+1, 2x+1]; the wallboard between two
cells sits on the pixel between their centres; even/even pixels are posts.
"""

from __future__ import annotations

import numpy as np
from scipy.ndimage import label

from ..sim.floorplan import Floorplan
from ..types import CardinalDirection

_FOUR_CONNECTED = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=bool)


def to_occupancy_grid(floorplan: Floorplan) -> np.ndarray:
    """Render walls into a boolean occupancy grid (True=wall)."""
    H, W = floorplan.height, floorplan.width
    walls = floorplan.wall_array()
    grid = np.ones((2 * H + 1, 2 * W + 1), dtype=bool)
    grid[1::2, 1::2] = False
    for d in CardinalDirection:
        open_mask = ~walls[:, :, d.value]
        ys, xs = np.nonzero(open_mask)
        grid[2 * ys + 1 + d.dy, 2 * xs + 1 + d.dx] = False
    return grid


def count_free_components(grid: np.ndarray) -> int:
    """Number of 4-connected free regions in an occupancy grid."""
    if grid.ndim != 2:
        raise ValueError("grid must be 2D")
    _, n = label(~grid, structure=_FOUR_CONNECTED)
    return int(n)


def is_fully_connected(floorplan: Floorplan) -> bool:
    """True if every cell (and the exit opening) forms one free region."""
    return count_free_components(to_occupancy_grid(floorplan)) == 1


__all__ = [
    "to_occupancy_grid",
    "count_free_components",
    "is_fully_connected",
]
