"""Asynchronous maze construction.

A `MazeFactory` runs one `BuildOrder` at a time on a daemon worker thread.
The order's progress only ever grows; 100 is published together with the
delivered maze so a caller polling `order.progress` never sees 100 without a
maze.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

import numpy as np

from ..config import MazeConfig
from ..types import Builder
from .builders import make_builder
from .distance import DistanceField
from .maze import Maze

logger = logging.getLogger(__name__)


class BuildOrder:
    """Request for a maze plus its progress and result.

    Args:
        skill_level: 0..15, mapped to dimensions/rooms/loops by `SkillConfig`.
        builder: generation algorithm.
        perfect: skip rooms and loops (pure spanning tree).
        seed: optional seed; overrides the factory seed for this order.
    """

    def __init__(
        self,
        skill_level: int,
        builder: Builder | str = Builder.DFS,
        perfect: bool = False,
        seed: Optional[int] = None,
    ) -> None:
        self.skill_level = skill_level
        self.builder = Builder.parse(builder)
        self.perfect = bool(perfect)
        self.seed = seed
        self._progress = 0
        self._maze: Optional[Maze] = None
        self._error: Optional[BaseException] = None
        self._cond = threading.Condition()

    @property
    def progress(self) -> int:
        with self._cond:
            return self._progress

    @property
    def maze(self) -> Optional[Maze]:
        with self._cond:
            return self._maze

    @property
    def error(self) -> Optional[BaseException]:
        with self._cond:
            return self._error

    @property
    def done(self) -> bool:
        with self._cond:
            return self._maze is not None or self._error is not None

    def update_progress(self, percentage: int) -> None:
        """Raise progress to `percentage`; lower values are ignored.

        100 is reserved for `deliver`.
        """
        p = int(min(99, max(0, percentage)))
        with self._cond:
            if p > self._progress:
                self._progress = p
                self._cond.notify_all()

    def deliver(self, maze: Maze) -> None:
        with self._cond:
            self._maze = maze
            self._progress = 100
            self._cond.notify_all()

    def fail(self, exc: BaseException) -> None:
        with self._cond:
            self._error = exc
            self._cond.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until delivered or failed. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(
                lambda: self._maze is not None or self._error is not None, timeout
            )

    def __repr__(self) -> str:
        return (
            f"BuildOrder(skill={self.skill_level}, builder={self.builder.value}, "
            f"perfect={self.perfect}, progress={self.progress})"
        )


class MazeFactory:
    """Builds mazes for orders on a background thread."""

    def __init__(self, config: Optional[MazeConfig] = None) -> None:
        self.config = config or MazeConfig()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._current: Optional[BuildOrder] = None

    def _rng_for(self, order: BuildOrder) -> np.random.Generator:
        if order.seed is not None:
            return np.random.default_rng(order.seed)
        if self.config.deterministic:
            return np.random.default_rng(self.config.seed)
        return np.random.default_rng()

    def order(self, order: BuildOrder) -> bool:
        """Start building `order`. Returns False if a build is already running.

        Raises MazeConstructionError for an invalid skill level.
        """
        self.config.skill.check_level(order.skill_level)
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                logger.debug("Factory busy, rejecting %r", order)
                return False
            self._current = order
            self._thread = threading.Thread(
                target=self._run, args=(order,), name="maze-builder", daemon=True
            )
            self._thread.start()
        return True

    def wait_till_delivered(self, timeout: Optional[float] = None) -> Optional[Maze]:
        """Wait for the current order; re-raise its error if the build failed."""
        with self._lock:
            order, thread = self._current, self._thread
        if order is None or thread is None:
            return None
        thread.join(timeout)
        if order.error is not None:
            raise order.error
        return order.maze

    def build(self, order: BuildOrder) -> Maze:
        """Run `order` synchronously on the calling thread."""
        self.config.skill.check_level(order.skill_level)
        self._run(order)
        if order.error is not None:
            raise order.error
        assert order.maze is not None
        return order.maze

    def _run(self, order: BuildOrder) -> None:
        try:
            order.deliver(self._build(order))
        except Exception as exc:
            logger.exception("Build failed for %r", order)
            order.fail(exc)

    def _build(self, order: BuildOrder) -> Maze:
        skill = self.config.skill
        width, height = skill.dimensions(order.skill_level)
        rooms = skill.room_count(order.skill_level)
        loops = skill.loop_fraction(order.skill_level)
        logger.info(
            "Building %dx%d maze (skill=%d, builder=%s, perfect=%s)",
            width, height, order.skill_level, order.builder.value, order.perfect,
        )
        builder = make_builder(order.builder, self._rng_for(order), self.config.builder)
        builder.set_progress_callback(lambda pct: order.update_progress(pct * 90 // 100))
        floorplan = builder.build(width, height, order.perfect, rooms, loops)

        distance = DistanceField.compute(floorplan)
        order.update_progress(95)
        maze = Maze(
            floorplan=floorplan,
            distance=distance,
            skill_level=int(order.skill_level),
            builder=order.builder,
            perfect=order.perfect,
        )
        maze.check_invariants()
        order.update_progress(99)
        floorplan.freeze()
        logger.info(
            "Maze ready: start=%s exit=%s max distance=%d",
            maze.start, maze.exit, distance.max_distance,
        )
        return maze
