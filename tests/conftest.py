import pytest

from maze_env.sim.distance import DistanceField, bfs_distances
from maze_env.sim.floorplan import Floorplan
from maze_env.sim.maze import Maze
from maze_env.types import CardinalDirection, Wallboard


def _maze(fp: Floorplan) -> Maze:
    """Wrap a hand-built floorplan; distances come from BFS (-1 where cut off)."""
    values = bfs_distances(fp, fp.exit)
    return Maze(floorplan=fp, distance=DistanceField(values, fp))


@pytest.fixture
def corridor_maze():
    """1 x n corridor, start west end, exit through the east border."""

    def make(n: int = 3) -> Maze:
        fp = Floorplan(n, 1)
        for x in range(n - 1):
            fp.remove_wallboard(Wallboard(x, 0, CardinalDirection.EAST))
        fp.set_exit(n - 1, 0, CardinalDirection.EAST)
        fp.set_start(0, 0)
        return _maze(fp.freeze())

    return make


@pytest.fixture
def build_maze():
    """Maze from a list of open wallboards plus exit and start."""

    def make(width, height, openings, exit, start, rooms=()) -> Maze:
        fp = Floorplan(width, height)
        for room in rooms:
            fp.mark_room(*room)
        for x, y, d in openings:
            fp.remove_wallboard(Wallboard(x, y, d))
        ex, ey, side = exit
        fp.set_exit(ex, ey, side)
        fp.set_start(*start)
        return _maze(fp.freeze())

    return make
