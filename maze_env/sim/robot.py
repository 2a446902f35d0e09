"""Energy-bounded grid robot with four relative distance sensors.

Design decisions:
- Sensing checks the sensor before the battery: an inactive sensor raises
  UnsupportedSensorError and charges nothing.
- Too little energy for an operation is not an error: the operation has no
  effect and the robot is marked stopped.
- Distances are measured on the floorplan walls, not on the distance field.
  Looking out through the exit opening reads as `math.inf`.
"""

from __future__ import annotations

import logging
from math import inf
from typing import Dict, Iterable, Optional

from ..config import EnergyConfig
from ..errors import ExteriorJumpError, InvalidPositionError, UnsupportedSensorError
from ..types import CardinalDirection, Cell, Direction, Turn
from .maze import Maze

logger = logging.getLogger(__name__)


class RobotModel:
    """Robot operating on a delivered maze.

    Args:
        energy: operation costs and initial battery.
        sensors: relative directions the robot is equipped with (default all four).
        room_sensor: whether `is_inside_room` is supported.
    """

    def __init__(
        self,
        energy: Optional[EnergyConfig] = None,
        sensors: Optional[Iterable[Direction]] = None,
        room_sensor: bool = True,
    ) -> None:
        self.energy = energy or EnergyConfig()
        self.equipped = frozenset(Direction if sensors is None else sensors)
        self._active: Dict[Direction, bool] = {d: d in self.equipped for d in Direction}
        self._room_sensor = bool(room_sensor)
        self.maze: Optional[Maze] = None
        self._position: Cell = (0, 0)
        self._heading = CardinalDirection.EAST
        self._battery = float(self.energy.initial_battery)
        self._odometer = 0
        self._stopped = False

    def set_maze(self, maze: Maze, heading: CardinalDirection = CardinalDirection.EAST) -> None:
        """Place the robot on the maze start with a full battery."""
        if maze.start is None:
            raise InvalidPositionError("Maze has no start cell")
        self.maze = maze
        self._position = tuple(maze.start)
        self._heading = heading
        self._battery = float(self.energy.initial_battery)
        self._odometer = 0
        self._stopped = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_current_position(self) -> Cell:
        x, y = self._position
        if self.maze is None or not self.maze.is_valid_position(x, y):
            raise InvalidPositionError(f"Robot position {self._position} is outside the maze")
        return self._position

    def set_current_position(self, x: int, y: int) -> None:
        if self.maze is None or not self.maze.is_valid_position(x, y):
            raise InvalidPositionError(f"Position ({x}, {y}) is outside the maze")
        self._position = (int(x), int(y))

    @property
    def current_direction(self) -> CardinalDirection:
        return self._heading

    def set_current_direction(self, heading: CardinalDirection) -> None:
        self._heading = heading

    @property
    def battery_level(self) -> float:
        return self._battery

    @battery_level.setter
    def battery_level(self, level: float) -> None:
        self._battery = float(level)

    @property
    def odometer(self) -> int:
        return self._odometer

    def reset_odometer(self) -> None:
        self._odometer = 0

    @property
    def energy_for_full_rotation(self) -> float:
        return 4.0 * self.energy.quarter_turn

    @property
    def energy_for_step_forward(self) -> float:
        return float(self.energy.move_forward)

    def has_stopped(self) -> bool:
        return self._battery <= 0.0 or self._stopped

    def is_at_exit(self) -> bool:
        return self.maze is not None and self.maze.floorplan.is_exit_position(*self._position)

    def _consume(self, cost: float) -> bool:
        """Charge `cost` if affordable; otherwise stop the robot."""
        if self._battery < cost:
            logger.debug("Insufficient energy (%.1f < %.1f), robot stopped", self._battery, cost)
            self._stopped = True
            return False
        self._battery -= cost
        return True

    # ------------------------------------------------------------------
    # Sensors
    # ------------------------------------------------------------------

    def has_operational_sensor(self, direction: Direction) -> bool:
        return self._active[direction]

    def trigger_sensor_failure(self, direction: Direction) -> None:
        if direction not in self.equipped:
            return
        self._active[direction] = False
        logger.debug("Sensor %s failed", direction.name)

    def repair_failed_sensor(self, direction: Direction) -> bool:
        """Reactivate a sensor. False if the robot has no sensor there."""
        if direction not in self.equipped:
            return False
        self._active[direction] = True
        logger.debug("Sensor %s repaired", direction.name)
        return True

    def has_room_sensor(self) -> bool:
        return self._room_sensor

    def set_room_sensor(self, active: bool) -> None:
        self._room_sensor = bool(active)

    def distance_to_obstacle(self, direction: Direction) -> float:
        """Free cells between the robot and the next wall in `direction`.

        Returns `math.inf` when the line of sight leaves the maze through the
        exit, and 0 (stopping the robot) when the battery cannot pay for it.
        """
        if not self._active[direction]:
            raise UnsupportedSensorError(f"No operational {direction.name} sensor")
        if not self._consume(self.energy.sensing):
            return 0
        d = direction.to_cardinal(self._heading)
        x, y = self._position
        steps = 0
        fp = self.maze.floorplan
        while True:
            if fp.has_wall(x, y, d):
                return steps
            x, y = x + d.dx, y + d.dy
            if not fp.is_valid_position(x, y):
                return inf
            steps += 1

    def can_see_through_the_exit(self, direction: Direction) -> bool:
        return self.distance_to_obstacle(direction) == inf

    def is_inside_room(self) -> bool:
        if not self._room_sensor:
            raise UnsupportedSensorError("No room sensor")
        if not self._consume(self.energy.sensing):
            return False
        return self.maze.floorplan.is_in_room(*self._position)

    # ------------------------------------------------------------------
    # Actuators
    # ------------------------------------------------------------------

    def rotate(self, turn: Turn) -> None:
        quarters = 2 if turn is Turn.AROUND else 1
        if not self._consume(quarters * self.energy.quarter_turn):
            return
        self._heading = CardinalDirection((self._heading.value + turn.quarter_turns) % 4)

    def move(self, distance: int, manual: bool = False) -> None:
        """Move forward up to `distance` cells.

        A wall in front stops an automatic robot; a manual one just halts.
        """
        if distance < 0:
            raise ValueError(f"distance must be >= 0, got {distance}")
        fp = self.maze.floorplan
        while distance > 0 and not self.has_stopped():
            if self._battery < self.energy.move_forward:
                self._stopped = True
                return
            x, y = self._position
            if fp.has_wall(x, y, self._heading):
                if not manual:
                    logger.debug("Robot hit a wall at %s facing %s", self._position, self._heading.name)
                    self._stopped = True
                return
            nx, ny = x + self._heading.dx, y + self._heading.dy
            if not fp.is_valid_position(nx, ny):
                # facing out through the exit opening
                return
            self._battery -= self.energy.move_forward
            self._position = (nx, ny)
            self._odometer += 1
            distance -= 1

    def jump(self) -> None:
        """Move one cell forward, over a wall if there is one."""
        if self._battery < self.energy.jump_wall:
            self._stopped = True
            return
        x, y = self._position
        nx, ny = x + self._heading.dx, y + self._heading.dy
        if not self.maze.is_valid_position(nx, ny):
            self._stopped = True
            raise ExteriorJumpError(f"Jump from {self._position} facing {self._heading.name} leaves the maze")
        self._battery -= self.energy.jump_wall
        self._position = (nx, ny)
        self._odometer += 1
