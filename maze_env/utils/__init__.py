"""Utility helpers shared across the package and scripts."""

from .config import load_config_any, load_config_dict, load_maze_config

__all__ = [
    "load_config_any",
    "load_config_dict",
    "load_maze_config",
]
