from .distance import UNREACHABLE, DistanceField, bfs_distances
from .factory import BuildOrder, MazeFactory
from .floorplan import Floorplan
from .maze import Maze
from .robot import RobotModel

__all__ = [
    "UNREACHABLE",
    "DistanceField",
    "bfs_distances",
    "BuildOrder",
    "MazeFactory",
    "Floorplan",
    "Maze",
    "RobotModel",
]
