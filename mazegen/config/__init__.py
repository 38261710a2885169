"""Configuration for maze generation."""

from __future__ import annotations

from .io import load_config_file, merge_configs, save_config_file
from .maze_config import (
    DEFAULT_MAX_AUTO_RETRIES,
    MAX_SEED,
    SEED_MODULUS,
    MazeConfig,
    next_seed,
    time_seed,
)

__all__ = [
    "DEFAULT_MAX_AUTO_RETRIES",
    "MAX_SEED",
    "SEED_MODULUS",
    "MazeConfig",
    "load_config_file",
    "merge_configs",
    "next_seed",
    "save_config_file",
    "time_seed",
]
