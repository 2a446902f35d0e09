"""Base maze builder: spanning tree + optional rooms/loops + exit placement."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

import numpy as np

from ...config import BuilderConfig
from ...errors import MazeConstructionError, MazeInvariantError
from ...types import CardinalDirection, Wallboard
from ..distance import bfs_distances
from ..floorplan import Floorplan

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class MazeBuilder(ABC):
    """Base class for maze generation strategies.

    Subclasses implement `generate_pathways`, which must carve a spanning tree
    into an all-walls floorplan. Everything after that (rooms, loops, exit) is
    shared and independent of the algorithm.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        cfg: Optional[BuilderConfig] = None,
    ) -> None:
        self.rng = rng or np.random.default_rng()
        self.cfg = cfg or BuilderConfig()
        self.floorplan: Optional[Floorplan] = None
        self._progress_cb: Optional[ProgressCallback] = None

    @abstractmethod
    def generate_pathways(self, floorplan: Floorplan) -> None:
        """Carve a spanning tree into `floorplan` (in-place)."""

    def set_progress_callback(self, cb: Optional[ProgressCallback]) -> None:
        self._progress_cb = cb

    def _report(self, percentage: float) -> None:
        if self._progress_cb is not None:
            self._progress_cb(int(max(0, min(100, percentage))))

    def build(
        self,
        width: int,
        height: int,
        perfect: bool = True,
        rooms: int = 0,
        loop_fraction: float = 0.0,
    ) -> Floorplan:
        """Generate a complete floorplan with exit and start cell."""
        try:
            width, height = int(width), int(height)
        except (TypeError, ValueError) as exc:
            raise MazeConstructionError(f"Bad maze dimensions {width!r}x{height!r}") from exc
        floorplan = Floorplan(width, height)
        self.floorplan = floorplan
        logger.debug(
            "%s building %dx%d perfect=%s rooms=%d loops=%.3f",
            type(self).__name__, width, height, perfect, rooms, loop_fraction,
        )

        self.generate_pathways(floorplan)
        n_open = floorplan.count_open_interior()
        if n_open != width * height - 1:
            raise MazeInvariantError(
                f"{type(self).__name__} produced {n_open} open wallboards, "
                f"expected spanning tree with {width * height - 1}"
            )
        self._report(80)

        if not perfect:
            self._carve_rooms(floorplan, int(rooms))
            self._add_loops(floorplan, float(loop_fraction))
        self._report(90)

        self._place_exit(floorplan)
        self._place_start(floorplan)
        self._report(100)
        return floorplan

    def _carve_rooms(self, floorplan: Floorplan, count: int) -> None:
        cfg = self.cfg
        W, H = floorplan.width, floorplan.height
        if count <= 0 or W < cfg.room_min_side + 2 or H < cfg.room_min_side + 2:
            return
        max_w = min(cfg.room_max_side, W // 3)
        max_h = min(cfg.room_max_side, H // 3)
        if max_w < cfg.room_min_side or max_h < cfg.room_min_side:
            return
        placed = 0
        for _ in range(count * cfg.room_max_attempts):
            if placed >= count:
                break
            rw = int(self.rng.integers(cfg.room_min_side, max_w + 1))
            rh = int(self.rng.integers(cfg.room_min_side, max_h + 1))
            x0 = int(self.rng.integers(1, W - rw))
            y0 = int(self.rng.integers(1, H - rh))
            x1, y1 = x0 + rw - 1, y0 + rh - 1
            if any(
                not (x1 < rx0 - 1 or x0 > rx1 + 1 or y1 < ry0 - 1 or y0 > ry1 + 1)
                for rx0, ry0, rx1, ry1 in floorplan.room_regions
            ):
                continue
            floorplan.mark_room(x0, y0, x1, y1)
            placed += 1
        logger.debug("Carved %d/%d rooms", placed, count)

    def _add_loops(self, floorplan: Floorplan, fraction: float) -> None:
        if fraction <= 0.0:
            return
        candidates = floorplan.interior_wallboards(present=True)
        n = int(round(fraction * len(candidates)))
        if n <= 0:
            return
        picks = self.rng.choice(len(candidates), size=min(n, len(candidates)), replace=False)
        for k in picks:
            floorplan.remove_wallboard(candidates[int(k)])
        logger.debug("Removed %d extra wallboards for loops", len(picks))

    def _place_exit(self, floorplan: Floorplan) -> None:
        """Open the border of the boundary cell farthest from a random cell."""
        W, H = floorplan.width, floorplan.height
        seed = (int(self.rng.integers(0, W)), int(self.rng.integers(0, H)))
        dists = bfs_distances(floorplan, seed)
        boundary = np.zeros_like(dists, dtype=bool)
        boundary[0, :] = boundary[-1, :] = True
        boundary[:, 0] = boundary[:, -1] = True
        masked = np.where(boundary, dists, -1)
        y, x = divmod(int(np.argmax(masked)), W)
        for d in CardinalDirection:
            if floorplan.is_part_of_border(Wallboard(x, y, d)):
                floorplan.set_exit(x, y, d)
                break
        logger.debug("Exit placed at (%d, %d) side %s", x, y, floorplan.exit_side)

    def _place_start(self, floorplan: Floorplan) -> None:
        """Start at the cell farthest from the exit (row-major first on ties)."""
        dists = bfs_distances(floorplan, floorplan.exit)
        y, x = divmod(int(np.argmax(dists)), floorplan.width)
        floorplan.set_start(x, y)

    @staticmethod
    def neighbor_wallboards(floorplan: Floorplan, x: int, y: int) -> list[Wallboard]:
        """Interior wallboards of (x, y) in N, E, S, W order."""
        out = []
        for d in CardinalDirection:
            nx, ny = x + d.dx, y + d.dy
            if floorplan.is_valid_position(nx, ny):
                out.append(Wallboard(x, y, d))
        return out
