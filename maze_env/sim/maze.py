"""Delivered maze product: floorplan, distance field and build metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import MazeInvariantError
from ..types import Builder, CardinalDirection, Cell
from .distance import DistanceField
from .floorplan import Floorplan


@dataclass
class Maze:
    floorplan: Floorplan
    distance: DistanceField
    skill_level: Optional[int] = None
    builder: Optional[Builder] = None
    perfect: bool = False

    @property
    def width(self) -> int:
        return self.floorplan.width

    @property
    def height(self) -> int:
        return self.floorplan.height

    @property
    def start(self) -> Cell:
        return self.floorplan.start

    @property
    def exit(self) -> Cell:
        return self.floorplan.exit

    def has_wall(self, x: int, y: int, direction: CardinalDirection) -> bool:
        return self.floorplan.has_wall(x, y, direction)

    def is_valid_position(self, x: int, y: int) -> bool:
        return self.floorplan.is_valid_position(x, y)

    def check_invariants(self) -> None:
        """Raise MazeInvariantError unless the maze is well formed.

        Checks the single exit, border flags, full connectivity (on the
        occupancy grid, independent of the BFS) and that the start cell is the
        farthest cell from the exit.
        """
        from ..utils.connectivity import is_fully_connected

        fp = self.floorplan
        openings = fp.border_openings()
        if len(openings) != 1:
            raise MazeInvariantError(f"Expected exactly one exit, found {len(openings)}")
        (opening,) = openings
        if (opening.x, opening.y) != fp.exit:
            raise MazeInvariantError(f"Border opening {opening} is not at exit {fp.exit}")
        if not is_fully_connected(fp):
            raise MazeInvariantError("Wall graph is not connected")
        if fp.start is None:
            raise MazeInvariantError("Start cell not set")
        sx, sy = fp.start
        if self.distance.get_distance_value(sx, sy) != self.distance.max_distance:
            raise MazeInvariantError(
                f"Start {fp.start} is not the farthest cell "
                f"({self.distance.get_distance_value(sx, sy)} < {self.distance.max_distance})"
            )

    def to_dict(self) -> Dict[str, Any]:
        d = self.floorplan.to_dict()
        d["skill_level"] = self.skill_level
        d["builder"] = self.builder.value if self.builder is not None else None
        d["perfect"] = bool(self.perfect)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Maze":
        """Rebuild a frozen maze and recompute its distance field."""
        fp = Floorplan.from_dict(d).freeze()
        builder = d.get("builder")
        return cls(
            floorplan=fp,
            distance=DistanceField.compute(fp),
            skill_level=d.get("skill_level"),
            builder=Builder.parse(builder) if builder else None,
            perfect=bool(d.get("perfect", False)),
        )
