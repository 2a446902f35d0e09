"""Distance-field driver that may jump walls when it pays off.

Each step scores the four neighbours by their distance to the exit. A
neighbour behind a wallboard costs an extra `jump_penalty` (a jump costs
50 energy instead of 5 for a step), so a wall is only jumped when the
shortcut saves more than the penalty.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from ..sim.distance import UNREACHABLE
from ..types import CardinalDirection, Direction, Turn
from .base import RobotDriver

logger = logging.getLogger(__name__)


class Wizard(RobotDriver):

    def score_neighbors(self, distances: List[int], blocked: Dict[CardinalDirection, bool]) -> List[int]:
        """Add the jump penalty to every walled-off, in-grid neighbour."""
        penalty = int(self.config.jump_penalty)
        scores = list(distances)
        for d in CardinalDirection:
            if blocked[d] and scores[d.value] != UNREACHABLE:
                scores[d.value] += penalty
        return scores

    def step(self) -> None:
        robot = self.robot
        x, y = robot.get_current_position()
        distances = self.distance.neighbor_distances(x, y)
        if distances is None:
            return
        heading = robot.current_direction

        before = robot.battery_level
        blocked: Dict[CardinalDirection, bool] = {}
        for rel in Direction:
            blocked[rel.to_cardinal(heading)] = self._wall_present(rel)
        # the wall checks stand in for map knowledge; refund the sensing they charged
        charged = before - robot.battery_level
        robot.battery_level = robot.battery_level + min(charged, 4 * robot.energy.sensing)

        scores = self.score_neighbors(distances, blocked)
        best = min(CardinalDirection, key=lambda d: scores[d.value])
        turn = Turn.for_quarter_turns(heading.quarter_turns_to(best))
        if turn is not None:
            robot.rotate(turn)
        if blocked[best]:
            logger.debug("Jumping %s from (%d, %d)", best.name, x, y)
            robot.jump()
        else:
            robot.move(1)
