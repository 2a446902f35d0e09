from __future__ import annotations

import heapq
from typing import List, Tuple

import numpy as np

from ...types import Wallboard
from ..floorplan import Floorplan
from .base import MazeBuilder


class PrimBuilder(MazeBuilder):
    """Randomized Prim's algorithm over the frontier of wallboards.

    With ``cfg.prim_weighted`` every interior wallboard gets a random weight
    and the frontier is a min-heap, giving a minimum spanning tree; otherwise a
    frontier wallboard is picked uniformly at random.
    """

    def generate_pathways(self, floorplan: Floorplan) -> None:
        W, H = floorplan.width, floorplan.height
        total = W * H
        in_tree = np.zeros((H, W), dtype=bool)
        report_every = max(1, total // 20)
        weighted = bool(self.cfg.prim_weighted)
        heap: List[Tuple[float, int, Wallboard]] = []
        frontier: List[Wallboard] = []
        counter = 0

        def add_frontier(x: int, y: int) -> None:
            nonlocal counter
            in_tree[y, x] = True
            for wb in self.neighbor_wallboards(floorplan, x, y):
                nx, ny = wb.neighbor
                if in_tree[ny, nx]:
                    continue
                if weighted:
                    # counter breaks ties so Wallboards are never compared
                    heapq.heappush(heap, (float(self.rng.random()), counter, wb))
                    counter += 1
                else:
                    frontier.append(wb)

        def pop_frontier() -> Wallboard:
            if weighted:
                return heapq.heappop(heap)[2]
            k = int(self.rng.integers(0, len(frontier)))
            frontier[k], frontier[-1] = frontier[-1], frontier[k]
            return frontier.pop()

        add_frontier(int(self.rng.integers(0, W)), int(self.rng.integers(0, H)))
        n_tree = 1
        while heap or frontier:
            wb = pop_frontier()
            nx, ny = wb.neighbor
            if in_tree[ny, nx]:
                continue
            floorplan.remove_wallboard(wb)
            add_frontier(nx, ny)
            n_tree += 1
            if n_tree % report_every == 0:
                self._report(80.0 * n_tree / total)
