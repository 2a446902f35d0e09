from __future__ import annotations

# Energy model (battery units)
SENSING_ENERGY: float = 1.0
QUARTER_TURN_ENERGY: float = 3.0
MOVE_FORWARD_ENERGY: float = 5.0
JUMP_WALL_ENERGY: float = 50.0
INITIAL_BATTERY: float = 3000.0

# Skill levels 0..15 -> maze geometry
MAX_SKILL_LEVEL: int = 15
SKILL_X: tuple[int, ...] = (4, 12, 15, 20, 25, 25, 35, 35, 40, 60, 70, 80, 90, 110, 150, 300)
SKILL_Y: tuple[int, ...] = (4, 12, 15, 15, 20, 25, 25, 35, 40, 60, 70, 75, 75, 90, 120, 240)
SKILL_ROOMS: tuple[int, ...] = (0, 2, 2, 3, 4, 5, 10, 10, 20, 25, 25, 50, 50, 50, 100, 100)
SKILL_LOOP_FRACTION: tuple[float, ...] = (
    0.0, 0.02, 0.02, 0.03, 0.03, 0.04, 0.04, 0.05,
    0.05, 0.06, 0.06, 0.07, 0.07, 0.08, 0.08, 0.08,
)

# Generation
ELLER_JOIN_PROBABILITY: float = 0.5
ROOM_MIN_SIDE: int = 2
ROOM_MAX_SIDE: int = 6
ROOM_MAX_ATTEMPTS: int = 20
DEFAULT_SEED: int = 13

# Drivers
WIZARD_JUMP_PENALTY: int = 10
SENSOR_FAULT_DELAY_S: float = 3.0
