"""Common driver machinery: sensor beliefs, command channel, drive loop.

Design decisions:
- Beliefs about which sensors work are refreshed only on request
  (`trigger_update_sensor_information`) or when a fault/repair command is
  applied, never by probing the robot mid-step.
- Fault and repair commands arrive on a queue and are applied under the
  driver lock at the start of each step, so a step always runs against a
  consistent set of beliefs.
- A missing sensor is substituted by rotating so that a working sensor faces
  the wanted way, reading it, and rotating back.
"""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from ..config import DriverConfig
from ..errors import RobotStoppedError
from ..sim.distance import DistanceField
from ..sim.robot import RobotModel
from ..types import Direction, Turn

logger = logging.getLogger(__name__)


@dataclass
class SensorCommand:
    """Sensor fault ("fail") or repair ("repair") for one relative direction."""

    action: str
    direction: Direction

    def __post_init__(self) -> None:
        assert self.action in ("fail", "repair"), f"unknown sensor action {self.action!r}"


class RobotDriver(ABC):
    """Base class for autonomous drivers."""

    def __init__(self, config: Optional[DriverConfig] = None) -> None:
        self.config = config or DriverConfig()
        self.robot: Optional[RobotModel] = None
        self.distance: Optional[DistanceField] = None
        self.width = 0
        self.height = 0
        self._starting_battery = 0.0
        self._beliefs: Dict[Direction, bool] = {d: True for d in Direction}
        self._lock = threading.RLock()
        self._commands: "queue.Queue[SensorCommand]" = queue.Queue()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def set_robot(self, robot: RobotModel) -> None:
        self.robot = robot
        self._starting_battery = robot.battery_level
        self.trigger_update_sensor_information()

    def set_dimensions(self, width: int, height: int) -> None:
        self.width, self.height = int(width), int(height)

    def set_distance(self, distance: DistanceField) -> None:
        self.distance = distance

    def trigger_update_sensor_information(self) -> None:
        with self._lock:
            for d in Direction:
                self._beliefs[d] = self.robot.has_operational_sensor(d)

    def believes_operational(self, direction: Direction) -> bool:
        return self._beliefs[direction]

    # ------------------------------------------------------------------
    # Command channel
    # ------------------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def post(self, command: SensorCommand) -> None:
        self._commands.put(command)

    def process_pending_commands(self) -> int:
        """Apply every queued sensor command. Returns how many were applied."""
        n = 0
        with self._lock:
            while True:
                try:
                    cmd = self._commands.get_nowait()
                except queue.Empty:
                    break
                self.apply_sensor_command(cmd)
                n += 1
        return n

    def apply_sensor_command(self, command: SensorCommand) -> None:
        with self._lock:
            if command.action == "fail":
                self.robot.trigger_sensor_failure(command.direction)
            else:
                self.robot.repair_failed_sensor(command.direction)
            self.trigger_update_sensor_information()
        logger.info("Applied sensor %s on %s", command.action, command.direction.name)

    # ------------------------------------------------------------------
    # Sensing helpers
    # ------------------------------------------------------------------

    def _substitute_sensor(self, wanted: Direction) -> Optional[Direction]:
        """Working sensor to stand in for `wanted`, quarter turns first."""
        candidates = [d for d in Direction if d is not wanted and self._beliefs[d]]
        if not candidates:
            return None
        candidates.sort(key=lambda s: (wanted.value - s.value) % 4 == 2)
        return candidates[0]

    def _wall_present(self, wanted: Direction) -> bool:
        """True if a wallboard is directly adjacent on the `wanted` side."""
        robot = self.robot
        if self._beliefs[wanted]:
            return robot.distance_to_obstacle(wanted) == 0
        sensor = self._substitute_sensor(wanted)
        if sensor is None:
            # no known alternative; let the robot report the missing sensor
            return robot.distance_to_obstacle(wanted) == 0
        k = (wanted.value - sensor.value) % 4
        robot.rotate(Turn.for_quarter_turns(k))
        reading = robot.distance_to_obstacle(sensor)
        robot.rotate(Turn.for_quarter_turns(-k))
        return reading == 0

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    @abstractmethod
    def step(self) -> None:
        """Strategy-specific single decision and action."""

    def drive1step2exit(self) -> bool:
        """Apply pending commands and perform one step. True once at the exit."""
        with self._lock:
            self.process_pending_commands()
            if self.robot.is_at_exit():
                return True
            if self.robot.has_stopped():
                raise RobotStoppedError("Robot has stopped and is not functional")
            self.step()
            return self.robot.is_at_exit()

    def drive2exit(self) -> bool:
        """Drive until the exit is reached.

        Raises RobotStoppedError if the robot stops (energy, wall collision)
        before reaching the exit.
        """
        while not self.drive1step2exit():
            pass
        logger.info(
            "%s reached the exit: energy=%.1f path=%d",
            type(self).__name__, self.get_energy_consumption(), self.get_path_length(),
        )
        return True

    def get_energy_consumption(self) -> float:
        return self._starting_battery - self.robot.battery_level

    def get_path_length(self) -> int:
        return self.robot.odometer
