import numpy as np
import pytest

from maze_env.errors import InvalidPositionError, MazeConstructionError, MazeInvariantError
from maze_env.sim.floorplan import Floorplan
from maze_env.types import CardinalDirection, Wallboard
from maze_env.utils.connectivity import count_free_components, is_fully_connected, to_occupancy_grid

N, E, S, W = CardinalDirection


def test_new_floorplan_all_walls() -> None:
    fp = Floorplan(3, 2)
    assert fp.wall_array().shape == (2, 3, 4)
    assert fp.wall_array().all()
    assert fp.count_open_interior() == 0
    assert fp.border_openings() == []


def test_too_small_floorplan_rejected() -> None:
    with pytest.raises(MazeConstructionError):
        Floorplan(1, 1)
    with pytest.raises(ValueError):
        Floorplan(0, 5)


def test_remove_wallboard_is_symmetric() -> None:
    fp = Floorplan(3, 3)
    assert fp.remove_wallboard(Wallboard(1, 1, E))
    assert fp.has_no_wall(1, 1, E)
    assert fp.has_no_wall(2, 1, W)
    # removing again reports nothing changed
    assert not fp.remove_wallboard(Wallboard(2, 1, W))
    assert fp.count_open_interior() == 1


def test_border_wallboards() -> None:
    fp = Floorplan(3, 3)
    assert fp.is_part_of_border(Wallboard(0, 0, N))
    assert fp.is_part_of_border(Wallboard(0, 0, W))
    assert fp.is_part_of_border(Wallboard(2, 2, E))
    assert not fp.is_part_of_border(Wallboard(1, 1, N))
    with pytest.raises(MazeInvariantError):
        fp.remove_wallboard(Wallboard(0, 0, N))


def test_single_exit() -> None:
    fp = Floorplan(3, 3)
    fp.set_exit(2, 1, E)
    assert fp.exit == (2, 1)
    assert fp.exit_side is E
    assert not fp.has_wall(2, 1, E)
    assert fp.border_openings() == [Wallboard(2, 1, E)]
    with pytest.raises(MazeInvariantError):
        fp.set_exit(0, 0, N)


def test_exit_must_be_on_border() -> None:
    fp = Floorplan(3, 3)
    with pytest.raises(MazeInvariantError):
        fp.set_exit(1, 1, N)


def test_has_wall_out_of_bounds() -> None:
    fp = Floorplan(2, 2)
    with pytest.raises(InvalidPositionError):
        fp.has_wall(2, 0, N)


def test_room_removes_internal_walls() -> None:
    fp = Floorplan(5, 5)
    fp.mark_room(1, 1, 2, 3)
    assert fp.is_in_room(1, 1) and fp.is_in_room(2, 3)
    assert not fp.is_in_room(0, 0)
    assert fp.has_no_wall(1, 1, E)
    assert fp.has_no_wall(2, 2, S)
    # room boundary keeps its walls
    assert fp.has_wall(2, 1, E)
    assert fp.has_wall(1, 3, S)
    assert fp.room_regions == [(1, 1, 2, 3)]


def test_frozen_floorplan_rejects_mutation() -> None:
    fp = Floorplan(2, 2)
    fp.remove_wallboard(Wallboard(0, 0, E))
    fp.freeze()
    assert fp.frozen
    with pytest.raises(RuntimeError):
        fp.remove_wallboard(Wallboard(0, 1, E))
    with pytest.raises(ValueError):
        fp.wall_array()[0, 0, 0] = False
    copy = fp.copy()
    assert not copy.frozen
    assert copy.remove_wallboard(Wallboard(0, 1, E))


def test_dict_roundtrip() -> None:
    fp = Floorplan(3, 2)
    fp.remove_wallboard(Wallboard(0, 0, E))
    fp.remove_wallboard(Wallboard(1, 0, S))
    fp.set_exit(0, 1, W)
    fp.set_start(2, 0)
    other = Floorplan.from_dict(fp.to_dict())
    assert np.array_equal(other.wall_array(), fp.wall_array())
    assert other.start == (2, 0)
    assert other.exit == (0, 1)
    assert other.exit_side is W


def test_occupancy_grid_connectivity() -> None:
    fp = Floorplan(2, 2)
    grid = to_occupancy_grid(fp)
    assert grid.shape == (5, 5)
    assert count_free_components(grid) == 4
    fp.remove_wallboard(Wallboard(0, 0, E))
    fp.remove_wallboard(Wallboard(0, 0, S))
    assert not is_fully_connected(fp)
    fp.remove_wallboard(Wallboard(1, 0, S))
    assert is_fully_connected(fp)
    fp.set_exit(1, 1, S)
    assert is_fully_connected(fp)
    assert not to_occupancy_grid(fp)[4, 3]
