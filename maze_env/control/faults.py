from __future__ import annotations

import logging
import threading
from typing import List, Optional

from ..constants import SENSOR_FAULT_DELAY_S
from ..types import Direction
from .base import RobotDriver, SensorCommand

logger = logging.getLogger(__name__)


class SensorFaultInjector:
    """Schedules sensor failures and repairs for a driver.

    Commands are posted to the driver's channel after `delay_s` seconds and
    take effect at the driver's next step (or `process_pending_commands`).
    """

    def __init__(self, driver: RobotDriver, delay_s: Optional[float] = None) -> None:
        self.driver = driver
        self.delay_s = float(SENSOR_FAULT_DELAY_S if delay_s is None else delay_s)
        self._timers: List[threading.Timer] = []

    def _schedule(self, command: SensorCommand) -> threading.Timer:
        timer = threading.Timer(self.delay_s, self.driver.post, args=(command,))
        timer.daemon = True
        self._timers.append(timer)
        timer.start()
        logger.debug("Scheduled sensor %s on %s in %.2fs", command.action, command.direction.name, self.delay_s)
        return timer

    def fail(self, direction: Direction) -> threading.Timer:
        return self._schedule(SensorCommand("fail", direction))

    def repair(self, direction: Direction) -> threading.Timer:
        return self._schedule(SensorCommand("repair", direction))

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for every scheduled command to be posted."""
        for timer in list(self._timers):
            timer.join(timeout)

    def cancel(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
