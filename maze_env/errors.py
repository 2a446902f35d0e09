"""Error taxonomy for maze construction, robot sensing and driving.

Energy exhaustion is not an error: it shows up as the robot's stopped state
and only becomes a `RobotStoppedError` at the driver level.
"""

from __future__ import annotations


class MazeError(Exception):
    """Base class for recoverable maze/robot errors."""


class UnsupportedSensorError(MazeError):
    """A sensor was queried while inactive or not installed."""


class InvalidPositionError(MazeError):
    """A position lies outside the grid."""


class ExteriorJumpError(MazeError):
    """A jump would carry the robot across an exterior wall."""


class RobotStoppedError(MazeError):
    """The robot has stopped and is not functional."""


class MazeConstructionError(MazeError, ValueError):
    """Malformed dimensions or skill level for a build."""


class MazeInvariantError(AssertionError):
    """A generated maze violates a structural invariant (programming defect)."""
