#!/usr/bin/env python3
"""
Batch comparison of drivers across builders, skill levels and seeds.
Writes per-run rows and a per-(driver, builder, skill) summary as CSV.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd
from tqdm import tqdm

from maze_env.control import WallFollower, Wizard
from maze_env.errors import RobotStoppedError
from maze_env.sim import BuildOrder, MazeFactory, RobotModel
from maze_env.types import Builder
from maze_env.utils import load_maze_config

DRIVERS = {"wallfollower": WallFollower, "wizard": Wizard}


def run_single(factory: MazeFactory, driver_name: str, builder: str, skill: int, seed: int, perfect: bool) -> dict:
    maze = factory.build(BuildOrder(skill, builder, perfect=perfect, seed=seed))
    robot = RobotModel(factory.config.energy)
    robot.set_maze(maze)
    driver = DRIVERS[driver_name](factory.config.driver)
    driver.set_robot(robot)
    driver.set_dimensions(maze.width, maze.height)
    driver.set_distance(maze.distance)
    try:
        success = driver.drive2exit()
    except RobotStoppedError:
        success = False
    return {
        "driver": driver_name,
        "builder": builder,
        "skill": skill,
        "seed": seed,
        "success": bool(success),
        "energy": driver.get_energy_consumption(),
        "path_length": driver.get_path_length(),
        "shortest_path": maze.distance.max_distance,
    }


def generate_summary(df: pd.DataFrame) -> pd.DataFrame:
    grouped = df.groupby(["driver", "builder", "skill"])
    summary = grouped.agg(
        runs=("success", "size"),
        successes=("success", "sum"),
        mean_energy=("energy", "mean"),
        mean_path_length=("path_length", "mean"),
        mean_shortest_path=("shortest_path", "mean"),
    ).reset_index()
    summary["success_rate_%"] = 100.0 * summary["successes"] / summary["runs"]
    return summary


def main():
    parser = argparse.ArgumentParser(description="Batch driver comparison")
    parser.add_argument("--config", type=str, default="configs/maze.yaml")
    parser.add_argument("--skills", type=int, nargs="+", default=[0, 1, 2])
    parser.add_argument("--builders", type=str, nargs="+", default=[b.value for b in Builder])
    parser.add_argument("--drivers", type=str, nargs="+", default=sorted(DRIVERS))
    parser.add_argument("--seeds", type=int, nargs="+", default=[0, 1, 2, 3, 4])
    parser.add_argument("--perfect", action="store_true")
    parser.add_argument("--output-dir", type=str, default="runs/batch_drive")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    cfg = load_maze_config(args.config)
    factory = MazeFactory(cfg)

    tasks = [
        (d, b, s, sd)
        for d in args.drivers
        for b in args.builders
        for s in args.skills
        for sd in args.seeds
    ]
    rows = []
    pbar = tqdm(tasks, desc="Driving", unit="run")
    for driver_name, builder, skill, seed in pbar:
        pbar.set_description(f"{driver_name:12s} | {builder:5s} | skill {skill:2d} | seed {seed}")
        rows.append(run_single(factory, driver_name, builder, skill, seed, args.perfect))
        successes = sum(1 for r in rows if r["success"])
        pbar.set_postfix({"success_rate": f"{100.0 * successes / len(rows):.1f}%"})
    pbar.close()

    out = Path(args.output_dir)
    out.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(rows)
    df.to_csv(out / "detailed_results.csv", index=False)
    summary = generate_summary(df)
    summary.to_csv(out / "summary_statistics.csv", index=False)

    print(f"[BATCH] runs={len(df)} saved to {out}")
    print(summary.to_string(index=False))


if __name__ == "__main__":
    main()
