"""Maze generation, distance fields and energy-bounded robot drivers."""

from .config import MazeConfig
from .errors import (
    ExteriorJumpError,
    InvalidPositionError,
    MazeConstructionError,
    MazeError,
    MazeInvariantError,
    RobotStoppedError,
    UnsupportedSensorError,
)
from .types import Builder, CardinalDirection, Direction, Turn, Wallboard
from .sim import BuildOrder, DistanceField, Floorplan, Maze, MazeFactory, RobotModel
from .control import SensorFaultInjector, WallFollower, Wizard

__all__ = [
    "MazeConfig",
    "ExteriorJumpError",
    "InvalidPositionError",
    "MazeConstructionError",
    "MazeError",
    "MazeInvariantError",
    "RobotStoppedError",
    "UnsupportedSensorError",
    "Builder",
    "CardinalDirection",
    "Direction",
    "Turn",
    "Wallboard",
    "BuildOrder",
    "DistanceField",
    "Floorplan",
    "Maze",
    "MazeFactory",
    "RobotModel",
    "SensorFaultInjector",
    "WallFollower",
    "Wizard",
]
