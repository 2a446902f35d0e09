"""Eller's algorithm: builds the maze one row at a time with disjoint sets.

Set labels live in ``sets[x, y]``; 0 marks a cell that has not been labelled
yet. Merging relabels by value over the rows built so far, so at the end of
`generate_pathways` every cell carries the same label.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ...config import BuilderConfig
from ...types import CardinalDirection, Wallboard
from ..floorplan import Floorplan
from .base import MazeBuilder


class EllerBuilder(MazeBuilder):

    def __init__(self, rng: Optional[np.random.Generator] = None, cfg: Optional[BuilderConfig] = None) -> None:
        super().__init__(rng, cfg)
        self._sets = np.zeros((0, 0), dtype=np.int64)
        self._next_label = 1

    def reset(self, floorplan: Floorplan) -> None:
        """Attach `floorplan` and clear all set labels."""
        self.floorplan = floorplan
        self._sets = np.zeros((floorplan.width, floorplan.height), dtype=np.int64)
        self._next_label = 1

    def generate_pathways(self, floorplan: Floorplan) -> None:
        self.reset(floorplan)
        W, H = floorplan.width, floorplan.height
        for row in range(H):
            self.generate_row(row)
            if row == H - 1:
                self.join_last_row()
                break
            for x in range(W - 1):
                if self.should_join_sets(x, row):
                    self.join_sets(x, row)
            self.drop_sets(row)
            self._report(80.0 * (row + 1) / H)

    def get_maze_sets(self) -> np.ndarray:
        """Copy of the label matrix, indexed [x, y]."""
        return self._sets.copy()

    def set_maze_set(self, x: int, y: int, value: int) -> None:
        self._sets[x, y] = value

    def generate_row(self, row: int) -> None:
        """Give every unlabelled cell of `row` a fresh label."""
        for x in range(self._sets.shape[0]):
            if self._sets[x, row] == 0:
                self._sets[x, row] = self._next_label
                self._next_label += 1

    def should_join_sets(self, x: int, row: int) -> bool:
        """Randomly decide whether to merge (x, row) with its east neighbour."""
        if self._sets[x, row] == self._sets[x + 1, row]:
            return False
        return bool(self.rng.random() < self.cfg.eller_join_probability)

    def join_sets(self, x: int, row: int) -> None:
        """Merge the east neighbour's set into the set of (x, row)."""
        keep, drop = self._sets[x, row], self._sets[x + 1, row]
        if keep == drop:
            return
        self.floorplan.remove_wallboard(Wallboard(x, row, CardinalDirection.EAST))
        built = self._sets[:, : row + 1]
        built[built == drop] = keep

    def drop_sets(self, row: int) -> None:
        """Open at least one south wallboard per set and carry labels down."""
        labels = self._sets[:, row]
        for label in np.unique(labels):
            members = np.flatnonzero(labels == label)
            self.rng.shuffle(members)
            n = int(self.rng.integers(1, len(members) + 1))
            for x in members[:n]:
                x = int(x)
                self.floorplan.remove_wallboard(Wallboard(x, row, CardinalDirection.SOUTH))
                self._sets[x, row + 1] = label

    def join_last_row(self) -> None:
        """Merge every pair of adjacent, differently labelled cells in the last row."""
        row = self._sets.shape[1] - 1
        for x in range(self._sets.shape[0] - 1):
            keep, drop = self._sets[x, row], self._sets[x + 1, row]
            if keep == drop:
                continue
            wb = Wallboard(x, row, CardinalDirection.EAST)
            if self.floorplan.has_wallboard(wb):
                self.floorplan.remove_wallboard(wb)
            self._sets[self._sets == drop] = keep
