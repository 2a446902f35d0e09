import numpy as np
import pytest

from maze_env.config import BuilderConfig
from maze_env.errors import MazeConstructionError
from maze_env.sim.builders import DFSBuilder, EllerBuilder, PrimBuilder, make_builder
from maze_env.sim.distance import DistanceField
from maze_env.types import Builder, CardinalDirection, Wallboard
from maze_env.utils.connectivity import is_fully_connected

BUILDERS = [DFSBuilder, PrimBuilder, EllerBuilder]


def _check_floorplan(fp) -> None:
    openings = fp.border_openings()
    assert len(openings) == 1
    assert (openings[0].x, openings[0].y) == fp.exit
    assert is_fully_connected(fp)
    field = DistanceField.compute(fp)
    assert (field.values >= 0).all()
    sx, sy = fp.start
    assert field.get_distance_value(sx, sy) == field.max_distance
    # every boundary wallboard is flagged as border
    for x in range(fp.width):
        assert fp.is_part_of_border(Wallboard(x, 0, CardinalDirection.NORTH))
        assert fp.is_part_of_border(Wallboard(x, fp.height - 1, CardinalDirection.SOUTH))
    for y in range(fp.height):
        assert fp.is_part_of_border(Wallboard(0, y, CardinalDirection.WEST))
        assert fp.is_part_of_border(Wallboard(fp.width - 1, y, CardinalDirection.EAST))


@pytest.mark.parametrize("cls", BUILDERS)
@pytest.mark.parametrize("seed", [0, 1, 7])
def test_perfect_maze_is_spanning_tree(cls, seed) -> None:
    fp = cls(np.random.default_rng(seed)).build(9, 7, perfect=True)
    _check_floorplan(fp)
    assert fp.count_open_interior() == 9 * 7 - 1
    assert fp.room_regions == []


@pytest.mark.parametrize("cls", BUILDERS)
def test_imperfect_maze_has_rooms_and_loops(cls) -> None:
    fp = cls(np.random.default_rng(3)).build(20, 20, perfect=False, rooms=2, loop_fraction=0.05)
    _check_floorplan(fp)
    assert fp.count_open_interior() > 20 * 20 - 1
    assert len(fp.room_regions) >= 1
    for x0, y0, x1, y1 in fp.room_regions:
        assert fp.room_mask()[y0 : y1 + 1, x0 : x1 + 1].all()


@pytest.mark.parametrize("cls", BUILDERS)
def test_degenerate_shapes(cls) -> None:
    for w, h in [(2, 1), (1, 2), (5, 1), (1, 5)]:
        fp = cls(np.random.default_rng(0)).build(w, h)
        _check_floorplan(fp)
        assert fp.count_open_interior() == w * h - 1


@pytest.mark.parametrize("cls", BUILDERS)
def test_bad_dimensions(cls) -> None:
    with pytest.raises(MazeConstructionError):
        cls().build(1, 1)
    with pytest.raises(MazeConstructionError):
        cls().build("wide", 3)


def test_same_seed_same_maze() -> None:
    a = DFSBuilder(np.random.default_rng(42)).build(8, 8)
    b = DFSBuilder(np.random.default_rng(42)).build(8, 8)
    assert np.array_equal(a.wall_array(), b.wall_array())
    assert a.start == b.start and a.exit == b.exit


def test_weighted_prim() -> None:
    cfg = BuilderConfig(prim_weighted=True)
    fp = PrimBuilder(np.random.default_rng(5), cfg).build(10, 6)
    _check_floorplan(fp)
    assert fp.count_open_interior() == 10 * 6 - 1


def test_progress_reports_are_bounded_and_complete() -> None:
    seen = []
    builder = make_builder(Builder.ELLER, np.random.default_rng(1))
    builder.set_progress_callback(seen.append)
    builder.build(6, 6)
    assert seen and seen[-1] == 100
    assert all(0 <= p <= 100 for p in seen)
    assert seen == sorted(seen)


def test_make_builder_by_name() -> None:
    assert isinstance(make_builder("prim"), PrimBuilder)
    assert isinstance(make_builder(Builder.DFS), DFSBuilder)
    with pytest.raises(ValueError):
        make_builder("kruskal")
