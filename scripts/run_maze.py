from __future__ import annotations

import argparse
import logging
import time

from tqdm import tqdm

from maze_env.control import SensorFaultInjector, WallFollower, Wizard
from maze_env.errors import RobotStoppedError
from maze_env.sim import BuildOrder, MazeFactory, RobotModel
from maze_env.types import Builder, Direction
from maze_env.utils import load_maze_config

DRIVERS = {"wallfollower": WallFollower, "wizard": Wizard}


def build_with_progress(factory: MazeFactory, order: BuildOrder):
    if not factory.order(order):
        raise RuntimeError("Factory is busy")
    with tqdm(total=100, desc="Generating", unit="%") as pbar:
        while not order.done:
            pbar.update(order.progress - pbar.n)
            time.sleep(0.01)
        pbar.update(order.progress - pbar.n)
    return factory.wait_till_delivered()


def main():
    parser = argparse.ArgumentParser(description="Build a maze and drive a robot to its exit")
    parser.add_argument("--config", type=str, default="configs/maze.yaml")
    parser.add_argument("--skill", type=int, default=0)
    parser.add_argument("--builder", type=str, default="dfs", choices=[b.value for b in Builder])
    parser.add_argument("--perfect", action="store_true")
    parser.add_argument("--driver", type=str, default="wizard", choices=sorted(DRIVERS))
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--fail",
        action="append",
        default=[],
        choices=[d.name.lower() for d in Direction],
        help="Schedule a failure of this sensor (repeatable)",
    )
    parser.add_argument("--fault-delay", type=float, default=None)
    parser.add_argument("--no-room-sensor", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("overrides", nargs="*", help="OmegaConf dotlist overrides, e.g. energy.initial_battery=500")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_maze_config(args.config, args.overrides)
    factory = MazeFactory(cfg)
    order = BuildOrder(args.skill, args.builder, perfect=args.perfect, seed=args.seed)
    maze = build_with_progress(factory, order)
    print(f"[MAZE] {maze.width}x{maze.height} builder={maze.builder.value} start={maze.start} exit={maze.exit}")
    print(f"[MAZE] max_distance={maze.distance.max_distance} rooms={len(maze.floorplan.room_regions)}")

    robot = RobotModel(cfg.energy, room_sensor=not args.no_room_sensor)
    robot.set_maze(maze)
    driver = DRIVERS[args.driver](cfg.driver)
    driver.set_robot(robot)
    driver.set_dimensions(maze.width, maze.height)
    driver.set_distance(maze.distance)

    delay = cfg.faults.delay_s if args.fault_delay is None else args.fault_delay
    injector = SensorFaultInjector(driver, delay)
    for name in args.fail:
        injector.fail(Direction[name.upper()])

    try:
        success = driver.drive2exit()
    except RobotStoppedError as exc:
        success = False
        print(f"[DRIVE] stopped: {exc}")
    finally:
        injector.cancel()

    print(f"[DRIVE] driver={args.driver} success={success}")
    print(f"[DRIVE] energy={driver.get_energy_consumption():.1f} path_length={driver.get_path_length()}")
    print(f"[DRIVE] battery_left={robot.battery_level:.1f}")


if __name__ == "__main__":
    main()
