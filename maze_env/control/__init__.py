from .base import RobotDriver, SensorCommand
from .faults import SensorFaultInjector
from .wall_follower import WallFollower
from .wizard import Wizard

__all__ = [
    "RobotDriver",
    "SensorCommand",
    "SensorFaultInjector",
    "WallFollower",
    "Wizard",
]
