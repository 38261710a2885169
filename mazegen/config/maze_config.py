"""
Validated configuration for maze generation runs.

``MazeConfig`` is a pydantic model so that sizes, seeds and probabilities are
checked once, at the boundary, rather than inside every algorithm.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mazegen.algorithms import DEFAULT_LOOP_PROBABILITY, MazeAlgorithm
from mazegen.core.grid import DEFAULT_SIZE, MAX_SIZE, MIN_SIZE

from .io import load_config_file, save_config_file

SEED_MODULUS = 2**32
MAX_SEED = SEED_MODULUS - 1
DEFAULT_MAX_AUTO_RETRIES = 5


def time_seed() -> int:
    """Non-zero seed derived from the current time."""
    return int(time.time()) % SEED_MODULUS or 1


def next_seed(seed: int) -> int:
    """Deterministic successor seed: increment modulo 2**32, skipping 0."""
    return (seed + 1) % SEED_MODULUS or 1


class MazeConfig(BaseModel):
    """
    Parameters of one maze generation run.

    Attributes:
        size: Odd grid dimension N
        seed: Seed of the first attempt (None picks a time-based seed)
        algorithm: Construction algorithm
        max_auto_retries: Consecutive failures before escalating to the operator
        loop_probability: Extra-passage chance for BACKTRACKER_LOOP
        place_bonuses: Whether to scatter bonus cells after placing the exit
        bonus_count: Number of bonus cells (None means size // 2)
    """

    size: int = Field(DEFAULT_SIZE, ge=MIN_SIZE, le=MAX_SIZE, description="Odd maze dimension")
    seed: int | None = Field(None, ge=0, le=MAX_SEED, description="Seed of the first attempt")
    algorithm: MazeAlgorithm = Field(MazeAlgorithm.PRIM, description="Construction algorithm")
    max_auto_retries: int = Field(
        DEFAULT_MAX_AUTO_RETRIES, ge=1, le=1000, description="Consecutive failures before escalation"
    )
    loop_probability: float = Field(
        DEFAULT_LOOP_PROBABILITY, ge=0.0, le=1.0, description="Extra-passage chance for loop injection"
    )
    place_bonuses: bool = Field(True, description="Scatter bonus cells on the carved maze")
    bonus_count: int | None = Field(None, ge=0, description="Number of bonus cells")

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    @field_validator("size")
    @classmethod
    def validate_odd_size(cls, v: int) -> int:
        if v % 2 == 0:
            raise ValueError(f"Maze size must be odd, got {v}")
        return v

    @field_validator("algorithm", mode="before")
    @classmethod
    def parse_algorithm(cls, v: Any) -> MazeAlgorithm:
        return MazeAlgorithm.parse(v)

    def resolved_seed(self) -> int:
        """The configured seed, or a fresh time-based one."""
        return self.seed if self.seed is not None else time_seed()

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_file(cls, path: str | Path) -> MazeConfig:
        """Load and validate a JSON or YAML configuration file."""
        data = load_config_file(path) or {}
        return cls(**data)

    def save(self, path: str | Path) -> None:
        save_config_file(self.to_dict(), path)
