import numpy as np

from maze_env.sim.builders import EllerBuilder
from maze_env.sim.floorplan import Floorplan
from maze_env.types import CardinalDirection

WIDTH, HEIGHT = 8, 6


def _generated() -> EllerBuilder:
    builder = EllerBuilder(np.random.default_rng(11))
    builder.generate_pathways(Floorplan(WIDTH, HEIGHT))
    return builder


def test_all_cells_share_one_set_after_generation() -> None:
    sets = _generated().get_maze_sets()
    assert sets.shape == (WIDTH, HEIGHT)
    assert (sets == sets[0, 0]).all()


def test_get_maze_sets_returns_copy() -> None:
    builder = _generated()
    sets = builder.get_maze_sets()
    sets[0, 0] = -1
    assert builder.get_maze_sets()[0, 0] != -1


def test_generation_carves_spanning_tree() -> None:
    builder = _generated()
    assert builder.floorplan.count_open_interior() == WIDTH * HEIGHT - 1


def test_should_join_same_set_is_false() -> None:
    builder = _generated()
    builder.set_maze_set(0, 0, 10)
    builder.set_maze_set(1, 0, 10)
    assert not any(builder.should_join_sets(0, 0) for _ in range(50))


def test_should_join_different_sets_eventually() -> None:
    builder = _generated()
    builder.set_maze_set(0, 0, 10)
    builder.set_maze_set(1, 0, 1)
    assert any(builder.should_join_sets(0, 0) for _ in range(50))


def test_join_same_set_is_noop() -> None:
    builder = _generated()
    builder.set_maze_set(0, 0, 10)
    builder.set_maze_set(1, 0, 10)
    before = builder.get_maze_sets()
    builder.join_sets(0, 0)
    assert np.array_equal(builder.get_maze_sets(), before)


def test_join_different_sets_keeps_left_label() -> None:
    builder = EllerBuilder(np.random.default_rng(0))
    builder.reset(Floorplan(4, 2))
    builder.generate_row(0)
    sets = builder.get_maze_sets()
    assert sets[:, 0].tolist() == [1, 2, 3, 4]
    builder.set_maze_set(2, 0, 2)  # (1,0) and (2,0) already share a set
    builder.join_sets(0, 0)
    sets = builder.get_maze_sets()
    assert sets[:, 0].tolist() == [1, 1, 1, 4]
    assert builder.floorplan.has_no_wall(0, 0, CardinalDirection.EAST)
    # the merged cells that were already connected keep their wall
    assert builder.floorplan.has_wall(1, 0, CardinalDirection.EAST)


def test_join_last_row_merges_everything() -> None:
    builder = _generated()
    builder.set_maze_set(0, HEIGHT - 1, 7)
    builder.set_maze_set(2, HEIGHT - 1, 12)
    sets = builder.get_maze_sets()
    assert sets[2, HEIGHT - 1] != sets[0, HEIGHT - 1]
    builder.join_last_row()
    sets = builder.get_maze_sets()
    assert sets[0, HEIGHT - 1] == sets[2, HEIGHT - 1]
    assert sets[0, 0] == sets[0, HEIGHT - 1]


def test_join_last_row_when_already_joined() -> None:
    builder = _generated()
    builder.set_maze_set(0, HEIGHT - 1, 0)
    builder.set_maze_set(2, HEIGHT - 1, 0)
    builder.join_last_row()
    sets = builder.get_maze_sets()
    assert sets[0, HEIGHT - 1] == sets[2, HEIGHT - 1]


def test_generate_row_labels_fresh_cells() -> None:
    builder = _generated()
    builder.set_maze_set(1, 2, 0)
    builder.set_maze_set(2, 2, 0)
    builder.generate_row(2)
    sets = builder.get_maze_sets()
    assert sets[1, 2] != 0 and sets[2, 2] != 0
    assert sets[1, 2] != sets[2, 2]


def test_drop_sets_carries_every_set_down() -> None:
    builder = EllerBuilder(np.random.default_rng(4))
    builder.reset(Floorplan(5, 3))
    builder.generate_row(0)
    builder.drop_sets(0)
    sets = builder.get_maze_sets()
    # five singleton sets, each must drop exactly its one member
    assert sets[:, 1].tolist() == sets[:, 0].tolist()
    for x in range(5):
        assert builder.floorplan.has_no_wall(x, 0, CardinalDirection.SOUTH)
