from __future__ import annotations

import logging
from typing import Optional

from ..config import DriverConfig
from ..sim.robot import RobotModel
from ..types import Direction, Turn
from .base import RobotDriver

logger = logging.getLogger(__name__)


class WallFollower(RobotDriver):
    """Left-hand rule driver.

    - wall on the left and in front: turn right
    - wall on the left only: step forward
    - no wall on the left: turn left and step forward

    A robot that starts in the open middle of a room first walks straight to
    a wall, otherwise the left hand would never touch anything.
    """

    def __init__(self, config: Optional[DriverConfig] = None) -> None:
        super().__init__(config)
        self._room_checked = False

    def set_robot(self, robot: RobotModel) -> None:
        super().set_robot(robot)
        self._room_checked = False

    def step(self) -> None:
        robot = self.robot
        if not self._room_checked:
            self._room_checked = True
            if self._leave_room_interior():
                return

        if self._wall_present(Direction.LEFT):
            if self._wall_present(Direction.FORWARD):
                robot.rotate(Turn.RIGHT)
            else:
                robot.move(1)
        else:
            robot.rotate(Turn.LEFT)
            robot.move(1)

    def _leave_room_interior(self) -> bool:
        robot = self.robot
        if not (robot.has_room_sensor() and robot.is_inside_room()):
            return False
        if any(self._wall_present(d) for d in Direction):
            return False
        logger.debug("Starting inside a room, walking to the nearest wall ahead")
        while not self._wall_present(Direction.FORWARD):
            if robot.has_stopped() or robot.is_at_exit():
                return True
            robot.move(1)
        robot.rotate(Turn.RIGHT)
        return True
