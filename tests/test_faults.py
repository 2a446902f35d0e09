import threading

import pytest

from maze_env.config import MazeConfig
from maze_env.control import SensorCommand, SensorFaultInjector, WallFollower, Wizard
from maze_env.sim import BuildOrder, MazeFactory, RobotModel
from maze_env.types import Direction


def _setup(maze, cls=WallFollower):
    robot = RobotModel()
    robot.set_maze(maze)
    driver = cls()
    driver.set_robot(robot)
    driver.set_dimensions(maze.width, maze.height)
    driver.set_distance(maze.distance)
    return robot, driver


def test_injector_posts_commands(corridor_maze) -> None:
    robot, driver = _setup(corridor_maze())
    injector = SensorFaultInjector(driver, delay_s=0.01)
    injector.fail(Direction.LEFT)
    injector.join(timeout=5.0)
    # nothing changes until the driver applies its pending commands
    assert robot.has_operational_sensor(Direction.LEFT)
    assert driver.process_pending_commands() == 1
    assert not robot.has_operational_sensor(Direction.LEFT)
    assert not driver.believes_operational(Direction.LEFT)

    injector.repair(Direction.LEFT)
    injector.join(timeout=5.0)
    assert driver.process_pending_commands() == 1
    assert robot.has_operational_sensor(Direction.LEFT)
    assert driver.believes_operational(Direction.LEFT)


def test_commands_applied_at_step_start(corridor_maze) -> None:
    robot, driver = _setup(corridor_maze())
    driver.post(SensorCommand("fail", Direction.FORWARD))
    driver.drive1step2exit()
    assert not robot.has_operational_sensor(Direction.FORWARD)
    assert not driver.believes_operational(Direction.FORWARD)
    assert driver.process_pending_commands() == 0


def test_command_posted_mid_step_waits_for_next_step(corridor_maze, monkeypatch) -> None:
    robot, driver = _setup(corridor_maze())
    sense = robot.distance_to_obstacle
    lock_taken = []

    def sense_and_post(direction):
        if not lock_taken:
            def try_lock():
                lock_taken.append(driver.lock.acquire(timeout=0.05))

            t = threading.Thread(target=try_lock)
            t.start()
            t.join()
            driver.post(SensorCommand("fail", Direction.FORWARD))
        return sense(direction)

    monkeypatch.setattr(robot, "distance_to_obstacle", sense_and_post)
    driver.drive1step2exit()
    # the step held the lock and finished on the old beliefs
    assert lock_taken == [False]
    assert robot.get_current_position() == (1, 0)
    assert robot.has_operational_sensor(Direction.FORWARD)
    assert driver.believes_operational(Direction.FORWARD)

    driver.drive1step2exit()
    assert not robot.has_operational_sensor(Direction.FORWARD)
    assert not driver.believes_operational(Direction.FORWARD)


def test_unknown_action_rejected() -> None:
    with pytest.raises(AssertionError):
        SensorCommand("explode", Direction.LEFT)


def test_beliefs_refresh_only_on_request(corridor_maze) -> None:
    robot, driver = _setup(corridor_maze())
    robot.trigger_sensor_failure(Direction.RIGHT)
    assert driver.believes_operational(Direction.RIGHT)
    driver.trigger_update_sensor_information()
    assert not driver.believes_operational(Direction.RIGHT)


@pytest.mark.parametrize("cls", [WallFollower, Wizard])
def test_drives_with_failed_sensors(cls) -> None:
    maze = MazeFactory(MazeConfig(deterministic=True, seed=8)).build(BuildOrder(0, "dfs", perfect=True))
    robot, driver = _setup(maze, cls)
    driver.post(SensorCommand("fail", Direction.LEFT))
    driver.post(SensorCommand("fail", Direction.FORWARD))
    assert driver.drive2exit()
    assert not robot.has_operational_sensor(Direction.LEFT)
