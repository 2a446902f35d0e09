from __future__ import annotations

import numpy as np

from ...types import CardinalDirection, Wallboard
from ..floorplan import Floorplan
from .base import MazeBuilder


class DFSBuilder(MazeBuilder):
    """Randomized depth-first search (recursive backtracker) on an explicit stack."""

    def generate_pathways(self, floorplan: Floorplan) -> None:
        W, H = floorplan.width, floorplan.height
        total = W * H
        visited = np.zeros((H, W), dtype=bool)
        sx, sy = int(self.rng.integers(0, W)), int(self.rng.integers(0, H))
        visited[sy, sx] = True
        stack = [(sx, sy)]
        n_visited = 1
        report_every = max(1, total // 20)

        while stack:
            x, y = stack[-1]
            candidates = []
            for d in CardinalDirection:
                nx, ny = x + d.dx, y + d.dy
                if floorplan.is_valid_position(nx, ny) and not visited[ny, nx]:
                    candidates.append(d)
            if not candidates:
                stack.pop()  # backtrack
                continue
            d = candidates[int(self.rng.integers(0, len(candidates)))]
            floorplan.remove_wallboard(Wallboard(x, y, d))
            nx, ny = x + d.dx, y + d.dy
            visited[ny, nx] = True
            stack.append((nx, ny))
            n_visited += 1
            if n_visited % report_every == 0:
                self._report(80.0 * n_visited / total)
