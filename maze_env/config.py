from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    DEFAULT_SEED,
    ELLER_JOIN_PROBABILITY,
    INITIAL_BATTERY,
    JUMP_WALL_ENERGY,
    MAX_SKILL_LEVEL,
    MOVE_FORWARD_ENERGY,
    QUARTER_TURN_ENERGY,
    ROOM_MAX_ATTEMPTS,
    ROOM_MAX_SIDE,
    ROOM_MIN_SIDE,
    SENSING_ENERGY,
    SENSOR_FAULT_DELAY_S,
    SKILL_LOOP_FRACTION,
    SKILL_ROOMS,
    SKILL_X,
    SKILL_Y,
    WIZARD_JUMP_PENALTY,
)
from .errors import MazeConstructionError


@dataclass
class SkillConfig:
    """Skill level -> (width, height), room count and loop fraction tables."""

    widths: List[int] = field(default_factory=lambda: list(SKILL_X))
    heights: List[int] = field(default_factory=lambda: list(SKILL_Y))
    rooms: List[int] = field(default_factory=lambda: list(SKILL_ROOMS))
    loop_fractions: List[float] = field(default_factory=lambda: list(SKILL_LOOP_FRACTION))

    def __post_init__(self) -> None:
        n = len(self.widths)
        assert n == MAX_SKILL_LEVEL + 1, f"expected {MAX_SKILL_LEVEL + 1} skill levels, got {n}"
        for name in ("heights", "rooms", "loop_fractions"):
            assert len(getattr(self, name)) == n, f"{name} must have {n} entries"
        assert all(w >= 1 for w in self.widths), "widths must be >= 1"
        assert all(h >= 1 for h in self.heights), "heights must be >= 1"
        assert all(r >= 0 for r in self.rooms), "rooms must be >= 0"
        assert all(0.0 <= f <= 1.0 for f in self.loop_fractions), "loop_fractions in [0,1]"

    def check_level(self, level: int) -> int:
        if not isinstance(level, Integral) or not 0 <= level <= MAX_SKILL_LEVEL:
            raise MazeConstructionError(
                f"Skill level must be an int in [0, {MAX_SKILL_LEVEL}], got {level!r}"
            )
        return int(level)

    def dimensions(self, level: int) -> Tuple[int, int]:
        level = self.check_level(level)
        return int(self.widths[level]), int(self.heights[level])

    def room_count(self, level: int) -> int:
        return int(self.rooms[self.check_level(level)])

    def loop_fraction(self, level: int) -> float:
        return float(self.loop_fractions[self.check_level(level)])


@dataclass
class EnergyConfig:
    sensing: float = SENSING_ENERGY
    quarter_turn: float = QUARTER_TURN_ENERGY
    move_forward: float = MOVE_FORWARD_ENERGY
    jump_wall: float = JUMP_WALL_ENERGY
    initial_battery: float = INITIAL_BATTERY

    def __post_init__(self) -> None:
        for name in ("sensing", "quarter_turn", "move_forward", "jump_wall"):
            assert getattr(self, name) >= 0.0, f"{name} must be >= 0"
        assert self.initial_battery > 0.0, "initial_battery must be > 0"


@dataclass
class BuilderConfig:
    eller_join_probability: float = ELLER_JOIN_PROBABILITY
    prim_weighted: bool = False
    room_min_side: int = ROOM_MIN_SIDE
    room_max_side: int = ROOM_MAX_SIDE
    room_max_attempts: int = ROOM_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        assert 0.0 < self.eller_join_probability <= 1.0, "eller_join_probability in (0,1]"
        assert self.room_min_side >= 2, "room_min_side must be >= 2"
        assert self.room_max_side >= self.room_min_side, "room_max_side >= room_min_side"
        assert self.room_max_attempts > 0, "room_max_attempts must be > 0"


@dataclass
class DriverConfig:
    jump_penalty: int = WIZARD_JUMP_PENALTY

    def __post_init__(self) -> None:
        assert self.jump_penalty >= 0, "jump_penalty must be >= 0"


@dataclass
class FaultConfig:
    delay_s: float = SENSOR_FAULT_DELAY_S

    def __post_init__(self) -> None:
        assert self.delay_s >= 0.0, "delay_s must be >= 0"


@dataclass
class MazeConfig:
    skill: SkillConfig = field(default_factory=SkillConfig)
    energy: EnergyConfig = field(default_factory=EnergyConfig)
    builder: BuilderConfig = field(default_factory=BuilderConfig)
    driver: DriverConfig = field(default_factory=DriverConfig)
    faults: FaultConfig = field(default_factory=FaultConfig)
    deterministic: bool = False
    seed: Optional[int] = DEFAULT_SEED

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any] | None) -> "MazeConfig":
        d = cfg or {}
        return cls(
            skill=SkillConfig(**dict(d.get("skill") or {})),
            energy=EnergyConfig(**dict(d.get("energy") or {})),
            builder=BuilderConfig(**dict(d.get("builder") or {})),
            driver=DriverConfig(**dict(d.get("driver") or {})),
            faults=FaultConfig(**dict(d.get("faults") or {})),
            deterministic=bool(d.get("deterministic", False)),
            seed=d.get("seed", DEFAULT_SEED),
        )
